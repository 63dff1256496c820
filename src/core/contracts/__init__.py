"""
Contract Validation Module

Валидация JSON документов (конфигурация автомата, снапшот инвентаря).
"""

from .validators import (
    SCHEMA_DIR,
    ContractValidator,
    DispenserConfigValidator,
    InventoryStateValidator,
    load_schema,
    validate_dispenser_config,
    validate_inventory_state,
)

__all__ = [
    "SCHEMA_DIR",
    "load_schema",
    # Classes
    "ContractValidator",
    "DispenserConfigValidator",
    "InventoryStateValidator",
    # Functions
    "validate_dispenser_config",
    "validate_inventory_state",
]
