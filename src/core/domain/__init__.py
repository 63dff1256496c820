"""
Domain models and value objects.

Contains fundamental domain entities: Denomination, DenominationCatalog, Note.
"""

from src.core.domain.denomination import Denomination, DenominationCatalog
from src.core.domain.note import Note, notes_of, total_nomination

__all__ = [
    # Denomination module
    "Denomination",
    "DenominationCatalog",
    # Note model
    "Note",
    "notes_of",
    "total_nomination",
]
