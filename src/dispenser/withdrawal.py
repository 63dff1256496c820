"""WithdrawalEngine — greedy-алгоритм выдачи наличных.

Один проход по каталогу от большего номинала к меньшему:
- номинал пропускается, если сумма уже набрана, номинал больше остатка
  или (в CONSTRAINED) банкнот этого номинала нет
- берётся min(остаток // номинал, доступно) банкнот
- каждый номинал посещается ровно один раз, без backtracking

Состояния одной выдачи: PLANNING → {COMMITTED | ROLLED_BACK}.
При ROLLED_BACK все изъятые банкноты возвращаются одним restore() ДО того,
как наружу уйдёт InsufficientFundsError.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from src.core.domain import Denomination, DenominationCatalog, Note
from src.core.errors import InsufficientFundsError, InvalidAmountError
from src.inventory import ConstrainedInventory, NoteInventory

logger = logging.getLogger(__name__)


class WithdrawalPhase(str, Enum):
    """Фаза одной выдачи."""

    PLANNING = "PLANNING"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"


@dataclass(frozen=True)
class WithdrawalResult:
    """Результат одной выдачи."""

    requested_amount: int
    notes: Tuple[Note, ...]
    phase: WithdrawalPhase

    # Недобор после прохода (0 при COMMITTED)
    remaining_amount: int

    # Для отладки
    details: str

    @property
    def succeeded(self) -> bool:
        return self.phase == WithdrawalPhase.COMMITTED

    @property
    def total(self) -> int:
        return sum(note.nomination for note in self.notes)


class WithdrawalEngine:
    """Greedy-выдача с атомарным откатом.

    Каталог по умолчанию берётся у ConstrainedInventory (если он там есть),
    иначе используются все Denomination.
    """

    def __init__(
        self,
        inventory: NoteInventory,
        catalog: Optional[DenominationCatalog] = None
    ):
        """
        Args:
            inventory: инвентарь, из которого выдаются банкноты
            catalog: порядок обхода номиналов
        """
        self.inventory = inventory
        if catalog is None and isinstance(inventory, ConstrainedInventory):
            catalog = inventory.catalog
        self.catalog = catalog or DenominationCatalog()

    def execute(self, amount: int) -> WithdrawalResult:
        """Выполнение выдачи без исключения при недостатке средств.

        Args:
            amount: запрошенная сумма (целое >= 0)

        Returns:
            WithdrawalResult в фазе COMMITTED или ROLLED_BACK

        Raises:
            InvalidAmountError: если amount отрицательный или не int
            Exception: ошибки инвентаря пробрасываются после отката
        """
        self._validate_amount(amount)

        if amount == 0:
            return WithdrawalResult(
                requested_amount=0,
                notes=(),
                phase=WithdrawalPhase.COMMITTED,
                remaining_amount=0,
                details="Zero amount, nothing to dispense"
            )

        taken: List[Note] = []
        with self.inventory.lock:
            try:
                remaining_amount = self._take_greedy(amount, taken)
            except BaseException:
                # Любой сбой посреди прохода: вернуть уже изъятое
                self.inventory.restore(taken)
                logger.exception("Withdrawal of %d aborted, %d notes restored", amount, len(taken))
                raise

            if remaining_amount == 0:
                logger.info("Withdrawal of %d committed: %d notes", amount, len(taken))
                return WithdrawalResult(
                    requested_amount=amount,
                    notes=tuple(taken),
                    phase=WithdrawalPhase.COMMITTED,
                    remaining_amount=0,
                    details=f"Dispensed {len(taken)} notes"
                )

            # Компенсирующий шаг: вернуть всё изъятое за этот вызов
            self.inventory.restore(taken)

        logger.warning(
            "Withdrawal of %d rolled back: %d could not be covered", amount, remaining_amount
        )
        return WithdrawalResult(
            requested_amount=amount,
            notes=(),
            phase=WithdrawalPhase.ROLLED_BACK,
            remaining_amount=remaining_amount,
            details=f"Shortfall of {remaining_amount}, {len(taken)} notes restored"
        )

    def withdraw(self, amount: int) -> List[Note]:
        """Выдача суммы.

        Returns:
            Банкноты по убыванию номинала, сумма номиналов == amount

        Raises:
            InvalidAmountError: если amount отрицательный или не int
            InsufficientFundsError: если сумму нельзя набрать из запаса
        """
        result = self.execute(amount)
        if not result.succeeded:
            raise InsufficientFundsError(amount)
        return list(result.notes)

    def _take_greedy(self, amount: int, taken: List[Note]) -> int:
        """Один проход по номиналам. Изъятое накапливается в taken, возвращается недобор."""
        remaining_amount = amount

        for denomination in self.catalog.ordered_descending():
            if remaining_amount == 0:
                break

            available = self.inventory.count_available(denomination)
            if denomination.nomination > remaining_amount or available == 0:
                continue

            count = self._usable_count(remaining_amount, denomination, available)
            taken.extend(self.inventory.remove(denomination, count))
            remaining_amount -= count * denomination.nomination

        return remaining_amount

    @staticmethod
    def _usable_count(
        remaining_amount: int,
        denomination: Denomination,
        available: Optional[int]
    ) -> int:
        required_count = remaining_amount // denomination.nomination
        if available is None:
            return required_count
        return min(required_count, available)

    @staticmethod
    def _validate_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise InvalidAmountError(amount)
