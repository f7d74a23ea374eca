"""Diagnostic codes and message templates.

Templates use ``str.format`` fields; every diagnostic errlint emits is
built from exactly one entry below.
"""

from __future__ import annotations

from typing import Final

NOT_AN_ENUM: Final = "NOT_AN_ENUM"
FIELD_NOT_FOUND: Final = "FIELD_NOT_FOUND"
FIELD_NOT_INT: Final = "FIELD_NOT_INT"
EXTRACTION_FAILED: Final = "EXTRACTION_FAILED"
LENGTH_MISMATCH: Final = "LENGTH_MISMATCH"
PREFIX_MISMATCH: Final = "PREFIX_MISMATCH"
DUPLICATE_CODE: Final = "DUPLICATE_CODE"
INVALID_RULES: Final = "INVALID_RULES"
PARSE_ERROR: Final = "PARSE_ERROR"
IMPORT_ERROR: Final = "IMPORT_ERROR"

MESSAGES: Final[dict[str, str]] = {
    NOT_AN_ENUM: "Only enum classes can use @valid_error_code",
    FIELD_NOT_FOUND: "Error code field named '{field}' not found",
    FIELD_NOT_INT: "Error code field '{field}' must be of int type",
    EXTRACTION_FAILED: (
        "Unable to extract error code value from enum constant '{name}', "
        "please ensure constructor parameters are integer literals"
    ),
    LENGTH_MISMATCH: (
        "Error code field '{field}' length should be {expected} digits, "
        "actual is {actual} digits (value: {rendered})"
    ),
    PREFIX_MISMATCH: (
        "Error code field '{field}' must start with {prefix}, actual is {rendered} (value: {value})"
    ),
    DUPLICATE_CODE: "Duplicate error code {code}, already defined in {definer}",
    INVALID_RULES: "Invalid @valid_error_code arguments: {detail}",
    PARSE_ERROR: "Unable to parse {path}: {detail}",
    IMPORT_ERROR: "Unable to import module '{module}': {detail}",
}


def format_message(code: str, **fields: object) -> str:
    """Render the template registered for *code*."""
    return MESSAGES[code].format(**fields)
