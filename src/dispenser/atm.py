"""
CashDispenser — Кассовый автомат

Фасад над NoteInventory + WithdrawalEngine. Создаётся в одном из двух режимов:
- unconstrained(): бесконечный запас
- constrained(stock) / with_default_stock(): конечный запас
"""

import logging
from typing import List, Mapping, Optional

from src.core.domain import Denomination, DenominationCatalog, Note
from src.dispenser.config import DEFAULT_STOCK, DispenserConfig
from src.dispenser.withdrawal import WithdrawalEngine, WithdrawalResult
from src.inventory import (
    ConstrainedInventory,
    InventoryState,
    NoteInventory,
    UnconstrainedInventory,
    create_inventory,
)

logger = logging.getLogger(__name__)


class CashDispenser:
    """
    Кассовый автомат.

    Инвентарь принадлежит автомату; WithdrawalEngine получает к нему
    исключительный доступ на время одного withdraw().
    """

    def __init__(
        self,
        inventory: Optional[NoteInventory] = None,
        catalog: Optional[DenominationCatalog] = None,
    ):
        self._inventory = inventory or UnconstrainedInventory()
        self._engine = WithdrawalEngine(self._inventory, catalog=catalog)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def unconstrained(cls, catalog: Optional[DenominationCatalog] = None) -> "CashDispenser":
        return cls(UnconstrainedInventory(), catalog=catalog)

    @classmethod
    def constrained(
        cls,
        stock: Mapping[Denomination, int],
        catalog: Optional[DenominationCatalog] = None,
    ) -> "CashDispenser":
        return cls(ConstrainedInventory(stock, catalog=catalog))

    @classmethod
    def with_default_stock(cls) -> "CashDispenser":
        """Ограниченный режим с начальной загрузкой DEFAULT_STOCK"""
        stock = {Denomination.from_nomination(n): count for n, count in DEFAULT_STOCK.items()}
        return cls.constrained(stock)

    @classmethod
    def from_config(cls, config: DispenserConfig) -> "CashDispenser":
        catalog = config.catalog()
        inventory = create_inventory(config.mode, config.initial_stock(), catalog=catalog)
        logger.info("Cash dispenser created in %s mode", config.mode.value)
        return cls(inventory, catalog=catalog)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def inventory(self) -> NoteInventory:
        return self._inventory

    @property
    def limited_funds(self) -> bool:
        return self._inventory.is_bounded

    @property
    def remaining_balance(self) -> int:
        """
        Raises:
            UnconstrainedModeError: В режиме без ограничений
        """
        return self._inventory.balance()

    @property
    def remaining_funds(self) -> List[Note]:
        """
        Raises:
            UnconstrainedModeError: В режиме без ограничений
        """
        return self._inventory.snapshot()

    def inventory_state(self) -> InventoryState:
        return self._inventory.to_state()

    # -------------------------------------------------------------------------
    # Withdrawal
    # -------------------------------------------------------------------------

    def withdraw(self, amount: int) -> List[Note]:
        """
        Выдача суммы.

        Raises:
            InvalidAmountError: Если amount отрицательный или не int
            InsufficientFundsError: Если сумму нельзя набрать из запаса
        """
        return self._engine.withdraw(amount)

    def try_withdraw(self, amount: int) -> WithdrawalResult:
        """Выдача без исключения при недостатке средств"""
        return self._engine.execute(amount)

    def __repr__(self) -> str:
        return f"CashDispenser({self._inventory!r})"
