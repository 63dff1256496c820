"""Dispenser — выдача наличных: greedy-алгоритм, конфигурация, фасад автомата."""

from .atm import CashDispenser
from .config import DEFAULT_STOCK, DispenserConfig, load_config
from .withdrawal import WithdrawalEngine, WithdrawalPhase, WithdrawalResult

__all__ = [
    "CashDispenser",
    "DispenserConfig",
    "DEFAULT_STOCK",
    "load_config",
    "WithdrawalEngine",
    "WithdrawalPhase",
    "WithdrawalResult",
]
