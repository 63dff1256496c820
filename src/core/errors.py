"""
Errors — Иерархия исключений кассового автомата

Все ошибки наследуются от DispenserError. Ни одна из них не фатальна:
после любой ошибки инвентарь остаётся в согласованном состоянии.
"""

from src.core.domain.denomination import Denomination


class DispenserError(Exception):
    """Базовая ошибка автомата"""


class UnconstrainedModeError(DispenserError):
    """
    Запрос баланса/снапшота у инвентаря без ограничений.

    У бесконечного запаса нет определённого баланса.
    """


class InsufficientStockError(DispenserError):
    """
    Запрошено больше банкнот номинала, чем есть в наличии.

    Внутренний сигнал границы engine/inventory: наружу из withdraw не выходит.
    """

    def __init__(self, denomination: Denomination, requested: int, available: int):
        self.denomination = denomination
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot take {requested} x {denomination.nomination}: "
            f"only {available} available"
        )


class InsufficientFundsError(DispenserError):
    """
    Сумма не может быть выдана точно из текущего запаса.

    К моменту появления ошибки инвентарь уже восстановлен.
    """

    def __init__(self, requested_amount: int):
        self.requested_amount = requested_amount
        super().__init__(
            f"Not enough funds to withdraw required amount ({requested_amount}) "
            "- please use another ATM"
        )


class InvalidAmountError(DispenserError, ValueError):
    """Сумма отрицательная или не целая"""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Withdrawal amount must be a non-negative integer, got {amount!r}")
