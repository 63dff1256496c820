"""
Тесты для CashDispenser

Проверяет:
1. Создание автомата в обоих режимах
2. remaining_balance / remaining_funds
3. Выдачу и исчерпание запаса
4. Инварианты: точность, атомарность, неотрицательность
"""

import pytest

from src.core.domain import Denomination, DenominationCatalog
from src.core.errors import InsufficientFundsError, UnconstrainedModeError
from src.dispenser import CashDispenser, DEFAULT_STOCK, DispenserConfig, WithdrawalPhase
from src.inventory import InventoryMode


def nominations(notes):
    return [note.nomination for note in notes]


@pytest.fixture
def limited_atm() -> CashDispenser:
    return CashDispenser.with_default_stock()


@pytest.fixture
def limitless_atm() -> CashDispenser:
    return CashDispenser.unconstrained()


# =============================================================================
# LIMITLESS FUNDS
# =============================================================================


class TestLimitlessFunds:
    """Автомат с бесконечным запасом"""

    def test_default_is_unconstrained(self) -> None:
        assert not CashDispenser().limited_funds

    def test_withdraw_40(self, limitless_atm: CashDispenser) -> None:
        assert nominations(limitless_atm.withdraw(40)) == [20, 20]

    def test_remaining_balance_unavailable(self, limitless_atm: CashDispenser) -> None:
        with pytest.raises(UnconstrainedModeError, match="remaining balance"):
            limitless_atm.remaining_balance

    def test_remaining_funds_unavailable(self, limitless_atm: CashDispenser) -> None:
        with pytest.raises(UnconstrainedModeError, match="remaining funds"):
            limitless_atm.remaining_funds

    def test_withdraw_zero(self, limitless_atm: CashDispenser) -> None:
        assert limitless_atm.withdraw(0) == []

    def test_large_amount(self, limitless_atm: CashDispenser) -> None:
        notes = limitless_atm.withdraw(1_000_000)
        assert len(notes) == 2000
        assert set(nominations(notes)) == {500}


# =============================================================================
# LIMITED FUNDS
# =============================================================================


class TestLimitedFunds:
    """Автомат с начальной загрузкой DEFAULT_STOCK"""

    def test_initial_balance(self, limited_atm: CashDispenser) -> None:
        expected = sum(n * c for n, c in DEFAULT_STOCK.items())
        assert limited_atm.limited_funds
        assert limited_atm.remaining_balance == expected == 5100

    def test_remaining_funds_sorted(self, limited_atm: CashDispenser) -> None:
        funds = nominations(limited_atm.remaining_funds)
        assert funds == sorted(funds, reverse=True)
        assert len(funds) == sum(DEFAULT_STOCK.values())

    def test_withdraw_reduces_balance(self, limited_atm: CashDispenser) -> None:
        notes = limited_atm.withdraw(1337)

        assert sum(nominations(notes)) == 1337
        assert limited_atm.remaining_balance == 5100 - 1337

    def test_withdraw_uses_smaller_notes_when_large_exhausted(
        self, limited_atm: CashDispenser
    ) -> None:
        """2 x 500 и 3 x 200 в запасе: 2000 → 500 x 2, 200 x 3, 100 x 4"""
        notes = limited_atm.withdraw(2000)
        assert nominations(notes) == [500, 500, 200, 200, 200, 100, 100, 100, 100]

    def test_withdraw_everything(self, limited_atm: CashDispenser) -> None:
        limited_atm.withdraw(5100)
        assert limited_atm.remaining_balance == 0
        assert limited_atm.remaining_funds == []

    def test_withdraw_more_than_balance(self, limited_atm: CashDispenser) -> None:
        funds_before = limited_atm.remaining_funds

        with pytest.raises(InsufficientFundsError) as exc_info:
            limited_atm.withdraw(5101)

        assert exc_info.value.requested_amount == 5101
        assert limited_atm.remaining_balance == 5100
        assert limited_atm.remaining_funds == funds_before

    def test_repeated_withdrawals_until_empty(self, limited_atm: CashDispenser) -> None:
        """Многократные выдачи: баланс падает ровно на сумму, счётчики >= 0"""
        balance = limited_atm.remaining_balance
        for amount in [777, 1234, 50, 999, 1, 1000, 1039]:
            notes = limited_atm.withdraw(amount)
            balance -= amount
            assert sum(nominations(notes)) == amount
            assert limited_atm.remaining_balance == balance
            assert all(c >= 0 for c in limited_atm.inventory.stock_levels().values())

        assert balance == 0

    def test_try_withdraw_does_not_raise(self) -> None:
        atm = CashDispenser.constrained({Denomination.BILL_20: 1})
        result = atm.try_withdraw(30)

        assert result.phase == WithdrawalPhase.ROLLED_BACK
        assert atm.remaining_balance == 20

    def test_inventory_state(self, limited_atm: CashDispenser) -> None:
        state = limited_atm.inventory_state()
        assert state.mode == InventoryMode.CONSTRAINED
        assert state.balance == 5100
        assert state.stock["500"] == 2


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    """Создание автомата"""

    def test_constrained_with_catalog(self) -> None:
        catalog = DenominationCatalog([Denomination.BILL_20, Denomination.BILL_10])
        atm = CashDispenser.constrained({Denomination.BILL_20: 3, Denomination.BILL_10: 1}, catalog)

        assert nominations(atm.withdraw(50)) == [20, 20, 10]
        assert atm.remaining_balance == 20

    def test_from_default_config(self) -> None:
        atm = CashDispenser.from_config(DispenserConfig.default())
        assert atm.remaining_balance == 5100

    def test_from_unconstrained_config(self) -> None:
        atm = CashDispenser.from_config(DispenserConfig(mode=InventoryMode.UNCONSTRAINED))
        assert not atm.limited_funds
        assert nominations(atm.withdraw(40)) == [20, 20]

    def test_from_config_with_denominations(self) -> None:
        config = DispenserConfig(
            mode=InventoryMode.CONSTRAINED,
            stock={50: 1, 20: 3},
            denominations=[50, 20],
        )
        atm = CashDispenser.from_config(config)

        assert len(atm.inventory.stock_levels()) == 2
        assert nominations(atm.withdraw(70)) == [50, 20]
