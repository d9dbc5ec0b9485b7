"""Config schema validation."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator

OUTPUT_FORMATS = ("text", "json", "yaml")


def config_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "platform": {"type": ["string", "null"]},
            "passwd_path": {"type": "string", "minLength": 1},
            "output": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "format": {"type": "string", "enum": list(OUTPUT_FORMATS)},
                },
            },
            "logging": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "path": {"type": ["string", "null"]},
                },
            },
            "env": {
                "type": "object",
                "additionalProperties": {"type": "string"},
            },
        },
    }


def validate_config_schema(config: dict[str, Any]) -> list[str]:
    validator = Draft7Validator(config_schema())
    errors = []
    for error in sorted(validator.iter_errors(config), key=lambda e: [str(part) for part in e.path]):
        path = ".".join(str(part) for part in error.path)
        prefix = f"{path}: " if path else ""
        errors.append(prefix + error.message)
    return errors
