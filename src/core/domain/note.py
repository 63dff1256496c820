"""
Note — Модель одной банкноты/монеты

Immutable Pydantic модель. Банкноты одного номинала взаимозаменяемы:
равенство определяется только номиналом, идентичности нет.
"""

from typing import Iterable, List

from pydantic import BaseModel, Field

from .denomination import Denomination


class Note(BaseModel):
    """Одна физическая единица заданного номинала"""

    denomination: Denomination = Field(..., description="Номинал банкноты/монеты")

    model_config = {"frozen": True}

    @property
    def nomination(self) -> int:
        return self.denomination.nomination

    def __repr__(self) -> str:
        return f"Note({self.denomination.name})"


def notes_of(denomination: Denomination, count: int) -> List[Note]:
    """
    Создание count банкнот одного номинала.

    Raises:
        ValueError: Если count отрицательный
    """
    if count < 0:
        raise ValueError(f"Note count cannot be negative: {count}")
    return [Note(denomination=denomination) for _ in range(count)]


def total_nomination(notes: Iterable[Note]) -> int:
    """Сумма номиналов последовательности банкнот"""
    return sum(note.nomination for note in notes)
