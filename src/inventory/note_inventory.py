"""
NoteInventory — Инвентарь банкнот автомата

Два режима (tagged variant вместо nullable-списка):
- UNCONSTRAINED: бесконечный запас каждого номинала, состояния нет
- CONSTRAINED: конечный запас {Denomination -> count}, расходуется при выдаче

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. В режиме CONSTRAINED счётчик любого номинала всегда >= 0
2. remove() либо уменьшает счётчик целиком, либо не меняет ничего
3. remove() + restore() тех же банкнот возвращают баланс к исходному

Все мутации выполняются под self.lock (RLock): WithdrawalEngine удерживает
этот же lock на всё время одной выдачи.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field

from src.core.domain import Denomination, DenominationCatalog, Note, notes_of
from src.core.errors import InsufficientStockError, UnconstrainedModeError

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class InventoryMode(str, Enum):
    """Режим инвентаря"""

    UNCONSTRAINED = "unconstrained"
    CONSTRAINED = "constrained"


# =============================================================================
# STATE MODEL
# =============================================================================


class InventoryState(BaseModel):
    """
    Снапшот состояния инвентаря.

    model_dump(mode="json") соответствует контракту inventory_state.json.
    """

    mode: InventoryMode = Field(..., description="Режим инвентаря")
    balance: Optional[int] = Field(
        ..., ge=0, description="Сумма номиналов (None для UNCONSTRAINED)"
    )
    stock: Dict[str, int] = Field(
        default_factory=dict, description="Номинал (строкой) -> количество"
    )

    model_config = {"frozen": True}


# =============================================================================
# BASE
# =============================================================================


class NoteInventory(ABC):
    """Базовый класс инвентаря банкнот"""

    mode: InventoryMode

    def __init__(self):
        self.lock = threading.RLock()

    @property
    def is_bounded(self) -> bool:
        return self.mode == InventoryMode.CONSTRAINED

    @abstractmethod
    def balance(self) -> int:
        """Сумма номиналов всех банкнот"""

    @abstractmethod
    def snapshot(self) -> List[Note]:
        """Все банкноты по убыванию номинала"""

    @abstractmethod
    def stock_levels(self) -> Dict[Denomination, int]:
        """Копия счётчиков по номиналам"""

    @abstractmethod
    def count_available(self, denomination: Denomination) -> Optional[int]:
        """Доступное количество; None означает неограниченный запас"""

    @abstractmethod
    def remove(self, denomination: Denomination, count: int) -> List[Note]:
        """Изъятие count банкнот номинала"""

    @abstractmethod
    def restore(self, notes: Iterable[Note]) -> None:
        """Возврат банкнот в инвентарь"""

    @abstractmethod
    def to_state(self) -> InventoryState:
        """Снапшот для экспорта"""

    @staticmethod
    def _check_count(count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError(f"Note count must be an integer, got {count!r}")
        if count < 0:
            raise ValueError(f"Note count cannot be negative: {count}")


# =============================================================================
# UNCONSTRAINED
# =============================================================================


class UnconstrainedInventory(NoteInventory):
    """
    Бесконечный запас.

    remove() только конструирует банкноты, restore() ничего не делает,
    balance()/snapshot() не определены.
    """

    mode = InventoryMode.UNCONSTRAINED

    def balance(self) -> int:
        raise UnconstrainedModeError(
            "Cannot determine remaining balance, ATM works with limitless funds"
        )

    def snapshot(self) -> List[Note]:
        raise UnconstrainedModeError(
            "Cannot determine remaining funds, ATM works with limitless funds"
        )

    def stock_levels(self) -> Dict[Denomination, int]:
        raise UnconstrainedModeError(
            "Cannot determine stock levels, ATM works with limitless funds"
        )

    def count_available(self, denomination: Denomination) -> Optional[int]:
        return None

    def remove(self, denomination: Denomination, count: int) -> List[Note]:
        self._check_count(count)
        return notes_of(denomination, count)

    def restore(self, notes: Iterable[Note]) -> None:
        pass

    def to_state(self) -> InventoryState:
        return InventoryState(mode=self.mode, balance=None, stock={})

    def __repr__(self) -> str:
        return "UnconstrainedInventory()"


# =============================================================================
# CONSTRAINED
# =============================================================================


class ConstrainedInventory(NoteInventory):
    """
    Конечный запас банкнот.

    Счётчики хранятся для каждого номинала каталога (отсутствующие в stock
    номиналы заполняются нулём). Номиналы вне каталога не принимаются.
    """

    mode = InventoryMode.CONSTRAINED

    def __init__(
        self,
        stock: Mapping[Denomination, int],
        catalog: Optional[DenominationCatalog] = None,
    ):
        """
        Args:
            stock: Начальный запас {Denomination -> count >= 0}
            catalog: Каталог номиналов (default: все Denomination)

        Raises:
            ValueError: Если count не целый, отрицательный или номинал вне каталога
        """
        super().__init__()
        self.catalog = catalog or DenominationCatalog()

        self._counts: Dict[Denomination, int] = {d: 0 for d in self.catalog}
        for denomination, count in stock.items():
            if denomination not in self.catalog:
                raise ValueError(
                    f"Denomination {denomination!r} is not in catalog {self.catalog!r}"
                )
            self._check_count(count)
            self._counts[denomination] = count

    def balance(self) -> int:
        with self.lock:
            return sum(d.nomination * count for d, count in self._counts.items())

    def snapshot(self) -> List[Note]:
        with self.lock:
            notes: List[Note] = []
            for denomination in self.catalog.ordered_descending():
                notes.extend(notes_of(denomination, self._counts[denomination]))
            return notes

    def stock_levels(self) -> Dict[Denomination, int]:
        with self.lock:
            return dict(self._counts)

    def count_available(self, denomination: Denomination) -> Optional[int]:
        with self.lock:
            return self._counts.get(denomination, 0)

    def remove(self, denomination: Denomination, count: int) -> List[Note]:
        """
        Изъятие count банкнот номинала.

        Raises:
            ValueError: Если count не целый или отрицательный
            InsufficientStockError: Если count > доступного количества
        """
        self._check_count(count)
        with self.lock:
            available = self._counts.get(denomination, 0)
            if count > available:
                raise InsufficientStockError(denomination, count, available)

            notes = notes_of(denomination, count)
            self._counts[denomination] = available - count
            logger.debug(
                "Removed %d x %d, %d left", count, denomination.nomination, available - count
            )
            return notes

    def restore(self, notes: Iterable[Note]) -> None:
        """
        Возврат банкнот. Все номиналы проверяются до изменения счётчиков.

        Raises:
            ValueError: Если номинал вне каталога
        """
        returned = Counter(note.denomination for note in notes)
        with self.lock:
            for denomination in returned:
                if denomination not in self._counts:
                    raise ValueError(
                        f"Denomination {denomination!r} is not in catalog {self.catalog!r}"
                    )
            for denomination, count in returned.items():
                self._counts[denomination] += count
            if returned:
                logger.debug("Restored %d notes", sum(returned.values()))

    def to_state(self) -> InventoryState:
        with self.lock:
            return InventoryState(
                mode=self.mode,
                balance=self.balance(),
                stock={str(d.nomination): count for d, count in self._counts.items()},
            )

    def __repr__(self) -> str:
        levels = ", ".join(f"{d.nomination}: {c}" for d, c in self._counts.items())
        return f"ConstrainedInventory({{{levels}}})"


# =============================================================================
# FACTORY
# =============================================================================


def create_inventory(
    mode: InventoryMode,
    initial_stock: Optional[Mapping[Denomination, int]] = None,
    catalog: Optional[DenominationCatalog] = None,
) -> NoteInventory:
    """
    Создание инвентаря в заданном режиме.

    Args:
        mode: Режим инвентаря
        initial_stock: Начальный запас (только для CONSTRAINED)
        catalog: Каталог номиналов (только для CONSTRAINED)

    Raises:
        ValueError: Если для UNCONSTRAINED передан непустой запас
    """
    if mode == InventoryMode.UNCONSTRAINED:
        if initial_stock:
            raise ValueError("Unconstrained inventory does not accept an initial stock")
        return UnconstrainedInventory()

    return ConstrainedInventory(initial_stock or {}, catalog=catalog)
