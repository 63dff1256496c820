"""
Denomination — Номиналы банкнот и монет

Фиксированная лестница номиналов автомата (500 ... 1).
Лестница предполагается канонической: greedy-выбор "от большего к меньшему"
даёт оптимальное разложение. Каноничность НЕ проверяется: это ответственность
того, кто конфигурирует набор номиналов.
"""

from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================


class Denomination(Enum):
    """Номинал одной банкноты/монеты"""

    BILL_500 = 500
    BILL_200 = 200
    BILL_100 = 100
    BILL_50 = 50
    BILL_20 = 20
    BILL_10 = 10
    BILL_5 = 5
    COIN_2 = 2
    COIN_1 = 1

    @property
    def nomination(self) -> int:
        """Номинальная стоимость (целое, > 0)"""
        return self.value

    @property
    def is_coin(self) -> bool:
        return self.name.startswith("COIN_")

    @classmethod
    def from_nomination(cls, nomination: int) -> "Denomination":
        """
        Поиск номинала по стоимости.

        Raises:
            ValueError: Если такого номинала нет в лестнице
        """
        for denomination in cls:
            if denomination.nomination == nomination:
                return denomination
        raise ValueError(f"Unknown nomination: {nomination}")


# =============================================================================
# CATALOG
# =============================================================================


class DenominationCatalog:
    """
    Упорядоченный каталог номиналов.

    По умолчанию содержит все Denomination; может быть ограничен подмножеством
    (конфигурация автомата). Порядок всегда строго убывающий по nomination.
    """

    def __init__(self, denominations: Optional[Iterable[Denomination]] = None):
        items = list(Denomination) if denominations is None else list(denominations)

        if not items:
            raise ValueError("Denomination catalog cannot be empty")
        if len(set(items)) != len(items):
            raise ValueError(f"Duplicate denominations in catalog: {items}")

        self._ordered: Tuple[Denomination, ...] = tuple(
            sorted(items, key=lambda d: d.nomination, reverse=True)
        )

    def ordered_descending(self) -> Tuple[Denomination, ...]:
        """Номиналы по убыванию стоимости (не ленивая, повторно итерируемая)"""
        return self._ordered

    def has_unit_denomination(self) -> bool:
        """
        Есть ли номинал 1.

        С единичным номиналом и неограниченным запасом любая неотрицательная
        сумма разложима.
        """
        return any(d.nomination == 1 for d in self._ordered)

    def __contains__(self, denomination: object) -> bool:
        return denomination in self._ordered

    def __iter__(self) -> Iterator[Denomination]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        nominations = ", ".join(str(d.nomination) for d in self._ordered)
        return f"DenominationCatalog([{nominations}])"
