"""Schema helpers for the pagedlist settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_PAGE_SIZE, REQUEST_TIMEOUT_SEC, SEARCH_DEBOUNCE_MS

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "pagedlist/settings.schema.json",
    "type": "object",
    "required": ["schema", "api", "search", "collections"],
    "properties": {
        "schema": {"const": "pagedlist/settings@1"},
        "api": {
            "type": "object",
            "required": ["base_url", "timeout_sec"],
            "properties": {
                "base_url": {"type": ["string", "null"]},
                "timeout_sec": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": True,
        },
        "search": {
            "type": "object",
            "properties": {
                "debounce_ms": {"type": "integer", "minimum": 0, "maximum": 5000},
            },
            "additionalProperties": True,
        },
        "collections": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "page_size": {"type": "integer", "minimum": 1, "maximum": 500},
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "pagedlist/settings@1",
    "api": {
        "base_url": None,
        "timeout_sec": REQUEST_TIMEOUT_SEC,
    },
    "search": {
        "debounce_ms": SEARCH_DEBOUNCE_MS,
    },
    "collections": {
        "expenses": {"page_size": DEFAULT_PAGE_SIZE},
        "support": {"page_size": 10},
        "todos": {"page_size": DEFAULT_PAGE_SIZE},
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("api", "search")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                merged.setdefault(key, {}).update(value)
                continue
            if key == "collections" and isinstance(value, dict):
                target = merged.setdefault("collections", {})
                for name, overrides in value.items():
                    if isinstance(overrides, dict):
                        target.setdefault(name, {}).update(overrides)
                    else:
                        target[name] = overrides
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
