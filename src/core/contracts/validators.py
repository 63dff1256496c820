"""
JSON Schema Contract Validators

Контракты документов автомата:
- dispenser_config.json: конфигурационный файл (режим, запас, номиналы)
- inventory_state.json: экспорт InventoryState.model_dump(mode="json")

Схемы поставляются вместе с пакетом (schema/ рядом с модулем), проверяются
meta-валидацией при первой загрузке и кэшируются.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Union

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADING
# =============================================================================


@lru_cache(maxsize=None)
def load_schema(schema_name: str, schema_dir: Path = SCHEMA_DIR) -> Dict[str, Any]:
    """
    Загрузка и meta-валидация схемы (результат кэшируется).

    Raises:
        RuntimeError: Если каталог схем не найден
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если файл не является валидной JSON Schema
    """
    if not schema_dir.exists():
        raise RuntimeError(f"Schema directory not found: {schema_dir}")

    schema_path = schema_dir / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}")

    return schema


def _error_path(error: jsonschema.ValidationError) -> str:
    return ".".join(str(part) for part in error.absolute_path) or "<root>"


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор документа против одной схемы.

    Все нарушения логируются (WARNING, с JSON-путём), наружу уходит
    наиболее релевантное из них (jsonschema best_match).
    """

    schema_name: str

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._validator = Draft202012Validator(load_schema(self.schema_name, schema_dir))

    def violations(self, data: Any) -> List[str]:
        """Нарушения вида 'stock.50: -1 is less than the minimum of 0', по пути"""
        errors = sorted(self._validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [f"{_error_path(e)}: {e.message}" for e in errors]

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Если документ нарушает контракт
        """
        errors = list(self._validator.iter_errors(data))
        if not errors:
            return

        for error in errors:
            logger.warning(
                "%s contract violation at %s: %s", self.schema_name, _error_path(error), error.message
            )
        raise best_match(errors)

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Чтение JSON файла и проверка контракта.

        Raises:
            FileNotFoundError: Если файл не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValidationError: Если документ нарушает контракт
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.validate(data)
        return data


class DispenserConfigValidator(ContractValidator):
    schema_name = "dispenser_config"


class InventoryStateValidator(ContractValidator):
    schema_name = "inventory_state"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_dispenser_config(data: Dict[str, Any]) -> None:
    DispenserConfigValidator().validate(data)


def validate_inventory_state(data: Dict[str, Any]) -> None:
    InventoryStateValidator().validate(data)
