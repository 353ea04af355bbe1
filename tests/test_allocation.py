"""
Test suite for Money allocation

Shares must always sum exactly to the rounded original amount.
"""

import pytest
from decimal import Decimal

from exact_money.environment import configure
from exact_money.errors import InvalidAllocationError
from exact_money.money import Money


def total_of(shares):
    total = shares[0]
    for share in shares[1:]:
        total = total.plus(share)
    return total


class TestAllocation:
    """Test proportional allocation with exact remainders"""

    def test_even_split_without_remainder(self):
        """Test ratios that divide cleanly"""
        shares = Money('0.05', 'USD').allocate([3, 1])
        assert [str(share) for share in shares] == ['0.04 USD', '0.01 USD']
        assert total_of(shares) == Money('0.05', 'USD')

    def test_remainder_goes_to_first_share(self):
        """Test rounding error is absorbed by the first share"""
        shares = Money(100, 'USD').allocate([1, 1, 1])
        assert [share.amount for share in shares] == [
            Decimal('33.34'), Decimal('33.33'), Decimal('33.33')
        ]

        shares = Money('0.05', 'USD').allocate([1, 1])
        assert [share.amount for share in shares] == [Decimal('0.03'), Decimal('0.02')]

    def test_amount_is_rounded_first(self):
        """Test the total being split is the rounded amount"""
        money = Money('10.005', 'EUR')
        shares = money.allocate([1, 2])
        assert total_of(shares) == money.round()
        assert total_of(shares).amount == Decimal('10.00')

    def test_explicit_precision(self):
        """Test allocation to a non-default precision"""
        shares = Money(1, 'USD').allocate([1, 1, 1], 3)
        assert [share.amount for share in shares] == [
            Decimal('0.334'), Decimal('0.333'), Decimal('0.333')
        ]

        shares = Money(10, 'USD').allocate([1, 2], 0)
        assert [share.amount for share in shares] == [Decimal('3'), Decimal('7')]

    def test_zero_decimal_currency(self):
        """Test yen allocation stays in whole units"""
        shares = Money(1000, 'JPY').allocate([1, 1, 1])
        assert [share.amount for share in shares] == [Decimal('334'), Decimal('333'), Decimal('333')]

    def test_zero_ratio_gets_nothing(self):
        """Test a zero ratio yields a zero share"""
        shares = Money(10, 'USD').allocate([0, 1, 1])
        assert shares[0].is_zero()
        assert shares[1].amount == Decimal('5.00')
        assert shares[2].amount == Decimal('5.00')

    def test_decimal_and_float_ratios(self):
        """Test non-integer ratios"""
        shares = Money(100, 'USD').allocate([Decimal('0.7'), 0.2, 0.1])
        assert [share.amount for share in shares] == [
            Decimal('70.00'), Decimal('20.00'), Decimal('10.00')
        ]

    def test_negative_amount(self):
        """Test debts allocate with the same exactness"""
        money = Money('-100', 'USD')
        shares = money.allocate([1, 1, 1])
        assert [share.amount for share in shares] == [
            Decimal('-33.34'), Decimal('-33.33'), Decimal('-33.33')
        ]
        assert total_of(shares) == money

    def test_sum_is_always_exact(self):
        """Test exactness across a spread of amounts and ratios"""
        ratio_sets = [[1], [1, 1], [3, 7], [1, 2, 3, 4, 5, 6, 7], [0.3, 0.3, 0.4], [13, 17, 19, 23]]
        amounts = ['0.01', '0.05', '1', '99.99', '1000000.01', '12345.678', '0.005']
        for amount in amounts:
            money = Money(amount, 'USD')
            for ratios in ratio_sets:
                shares = money.allocate(ratios)
                assert len(shares) == len(ratios)
                assert all(share.currency == 'USD' for share in shares)
                assert total_of(shares) == money.round()

    def test_shares_keep_currency(self):
        """Test shares are in the source currency"""
        shares = Money('9.99', 'GBP').allocate([1, 1])
        assert {share.currency for share in shares} == {'GBP'}

    def test_zero_total_rejected(self):
        """Test zero-sum ratios fail explicitly"""
        with pytest.raises(InvalidAllocationError):
            Money(10, 'USD').allocate([0, 0])

    def test_negative_ratio_rejected(self):
        """Test negative ratios fail explicitly"""
        with pytest.raises(InvalidAllocationError):
            Money(10, 'USD').allocate([2, -1])

    def test_ratios_must_be_sequence(self):
        """Test ratio container validation"""
        money = Money(10, 'USD')
        for ratios in [[], (), None, 3, '12', {1: 1}, {1, 2}]:
            with pytest.raises(TypeError):
                money.allocate(ratios)

        with pytest.raises(TypeError):
            money.allocate([1, '2'])
        with pytest.raises(TypeError):
            money.allocate([1, True])

    def test_tuple_ratios(self):
        """Test tuples are accepted"""
        shares = Money(10, 'USD').allocate((1, 1))
        assert [share.amount for share in shares] == [Decimal('5.00'), Decimal('5.00')]

    def test_invalid_precision(self):
        """Test precision validation is shared with round()"""
        with pytest.raises(TypeError):
            Money(10, 'USD').allocate([1, 1], 1.5)

    def test_division_precision_setting(self):
        """Test the configured division precision is honoured"""
        configure(division_precision=50)
        shares = Money(1, 'USD').allocate([1, 1, 1])
        assert total_of(shares) == Money('1.00', 'USD')

    def test_large_amount_keeps_fraction_digits(self):
        """Test shares of amounts wider than the division precision stay exact"""
        money = Money('1' + '0' * 50 + '.07', 'USD')
        shares = money.allocate([1, 1, 1])

        assert [share.amount for share in shares] == [
            Decimal('3' * 50 + '.35'),
            Decimal('3' * 50 + '.36'),
            Decimal('3' * 50 + '.36'),
        ]
        assert total_of(shares) == money
