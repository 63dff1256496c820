"""Inventory — инвентарь банкнот автомата (ограниченный и неограниченный режимы)."""

from .note_inventory import (
    ConstrainedInventory,
    InventoryMode,
    InventoryState,
    NoteInventory,
    UnconstrainedInventory,
    create_inventory,
)

__all__ = [
    "NoteInventory",
    "ConstrainedInventory",
    "UnconstrainedInventory",
    "InventoryMode",
    "InventoryState",
    "create_inventory",
]
