"""
Exact Money

Immutable monetary values with exact Decimal arithmetic, banker's rounding,
remainder-exact allocation and asynchronous currency conversion.
"""

__version__ = "1.0.0"
