import pytest

from exact_money.environment import reset_environment


@pytest.fixture(autouse=True)
def fresh_environment():
    """Every test starts with unconfigured collaborators"""
    reset_environment()
    yield
    reset_environment()
