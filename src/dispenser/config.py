"""
DispenserConfig — Конфигурация кассового автомата

Режим инвентаря, начальный запас и (опционально) ограничение набора номиналов.
JSON документы проверяются контрактом dispenser_config.json, затем
разбираются в immutable Pydantic модель.
"""

from pathlib import Path
from typing import Dict, Final, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.contracts import DispenserConfigValidator
from src.core.domain import Denomination, DenominationCatalog
from src.inventory import InventoryMode


# =============================================================================
# DEFAULTS
# =============================================================================

# Начальная загрузка автомата (номинал -> количество)
DEFAULT_STOCK: Final[Dict[int, int]] = {
    500: 2,
    200: 3,
    100: 5,
    50: 12,
    20: 20,
    10: 50,
    5: 100,
    2: 250,
    1: 500,
}


# =============================================================================
# CONFIG MODEL
# =============================================================================


class DispenserConfig(BaseModel):
    """
    Конфигурация автомата.

    Номиналы задаются целыми стоимостями (500, 200, ...), а не именами enum.
    """

    mode: InventoryMode = Field(..., description="Режим инвентаря")
    stock: Dict[int, int] = Field(
        default_factory=dict, description="Начальный запас: номинал -> количество"
    )
    denominations: Optional[List[int]] = Field(
        default=None, description="Ограничение набора номиналов"
    )

    model_config = {"frozen": True}

    @field_validator("stock")
    @classmethod
    def validate_stock(cls, v: Dict[int, int]) -> Dict[int, int]:
        for nomination, count in v.items():
            Denomination.from_nomination(nomination)
            if count < 0:
                raise ValueError(f"Stock count for {nomination} cannot be negative: {count}")
        return v

    @field_validator("denominations")
    @classmethod
    def validate_denominations(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        if v is None:
            return v
        if not v:
            raise ValueError("Denominations cannot be empty")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate denominations: {v}")
        for nomination in v:
            Denomination.from_nomination(nomination)
        return v

    @model_validator(mode="after")
    def validate_mode_consistency(self) -> "DispenserConfig":
        if self.mode == InventoryMode.UNCONSTRAINED and self.stock:
            raise ValueError("Unconstrained mode does not accept an initial stock")
        if self.denominations is not None:
            outside = sorted(set(self.stock) - set(self.denominations))
            if outside:
                raise ValueError(f"Stock references denominations outside the catalog: {outside}")
        return self

    def initial_stock(self) -> Dict[Denomination, int]:
        """Запас с ключами Denomination"""
        return {Denomination.from_nomination(n): count for n, count in self.stock.items()}

    def catalog(self) -> Optional[DenominationCatalog]:
        """Каталог номиналов или None (все номиналы)"""
        if self.denominations is None:
            return None
        return DenominationCatalog(Denomination.from_nomination(n) for n in self.denominations)

    @classmethod
    def default(cls) -> "DispenserConfig":
        """Ограниченный режим с начальной загрузкой DEFAULT_STOCK"""
        return cls(mode=InventoryMode.CONSTRAINED, stock=dict(DEFAULT_STOCK))


# =============================================================================
# LOADING
# =============================================================================


def load_config(path: Union[str, Path]) -> DispenserConfig:
    """
    Загрузка конфигурации из JSON файла.

    Args:
        path: Путь к JSON файлу

    Returns:
        Валидная DispenserConfig

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        jsonschema.ValidationError: Если документ нарушает контракт
        pydantic.ValidationError: Если документ нарушает доменные правила
    """
    data = DispenserConfigValidator().load(path)
    return DispenserConfig.model_validate(data)
