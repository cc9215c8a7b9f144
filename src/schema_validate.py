"""JSON Schema validation helpers for registry data and emitted documents.

This module wraps jsonschema Draft7 validation. Registry data is validated
strictly when loaded; emitted documents are validated strictly before they are
written so a malformed manifest never reaches the launcher.
"""

from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft7Validator

from models.errors import SchemaError


def _sorted_errors(schema: Dict[str, Any], data: Any) -> List[Any]:
    validator = Draft7Validator(schema)
    return sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])


def _format_path(error: Any) -> str:
    return "/".join([str(p) for p in error.path])


def validate_registry_data(schema: Dict[str, Any], data: Any) -> None:
    """Validate registry data strictly and raise on the first error.

    Args:
        schema: Draft-07 JSON Schema dict.
        data:   Parsed registry document.
    """
    errs = _sorted_errors(schema, data)
    if errs:
        first = errs[0]
        msg = f"Invalid registry data at '{_format_path(first)}': {first.message}"
        raise SchemaError(msg)


def validate_document(schema: Dict[str, Any], data: Dict[str, Any], name: str) -> None:
    """Strictly validate an output document; raise SchemaError on the first problem."""
    errs = _sorted_errors(schema, data)
    if errs:
        first = errs[0]
        msg = f"Invalid {name} at '{_format_path(first)}': {first.message}"
        raise SchemaError(msg)
