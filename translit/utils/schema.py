"""JSON Schema validation utilities."""

from pathlib import Path
from typing import Any, cast

from jsonschema import Draft7Validator

from translit.utils.io import read_json


def load_schema(schema_path: Path) -> dict[str, Any]:
    """
    Load JSON schema from file.

    Args:
        schema_path: Path to schema file

    Returns:
        Parsed schema dict
    """
    return cast(dict[str, Any], read_json(schema_path))


def validate_against_schema(
    data: dict[str, Any],
    schema: dict[str, Any],
) -> list[str]:
    """
    Validate data against JSON schema.

    Args:
        data: Data to validate
        schema: JSON schema

    Returns:
        List of validation error messages (empty if valid)
    """
    validator = Draft7Validator(schema)
    errors = []

    for error in sorted(validator.iter_errors(data), key=str):
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        errors.append(f"{path}: {error.message}")

    return errors


def validate_settings(data: dict[str, Any], schema_dir: Path) -> list[str]:
    """Validate CLI settings against schema."""
    schema = load_schema(schema_dir / "settings.schema.json")
    return validate_against_schema(data, schema)
