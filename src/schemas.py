"""Draft-07 JSON Schemas for registry data and the two emitted documents."""

from __future__ import annotations

from typing import Any, Dict

ROLL_FORWARD_VALUES = ["LatestPatch", "Minor", "Major", "LatestMinor", "LatestMajor", "Disable"]

_NAME = {"type": "string", "minLength": 1}

REGISTRY_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["platforms"],
    "properties": {
        "version": {"type": "integer", "minimum": 1},
        "platforms": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["core_runtime_package", "references"],
                "properties": {
                    "core_runtime_package": _NAME,
                    "primary_precedence": {"type": "array", "items": _NAME, "uniqueItems": True},
                    "references": {
                        "type": "object",
                        "additionalProperties": {
                            "oneOf": [
                                {
                                    "type": "object",
                                    "required": ["package", "version"],
                                    "properties": {
                                        "package": _NAME,
                                        "version": _NAME,
                                        "roll_forward": {"enum": ROLL_FORWARD_VALUES},
                                    },
                                    "additionalProperties": False,
                                },
                                {
                                    "type": "object",
                                    "required": ["alias_of"],
                                    "properties": {"alias_of": _NAME},
                                    "additionalProperties": False,
                                },
                            ]
                        },
                    },
                },
                "additionalProperties": False,
            },
        },
    },
}

RUNTIMECONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["runtimeOptions"],
    "properties": {
        "runtimeOptions": {
            "type": "object",
            "required": ["framework"],
            "properties": {
                "tfm": _NAME,
                "rollForward": {"enum": ROLL_FORWARD_VALUES},
                "framework": {
                    "type": "object",
                    "required": ["name", "version"],
                    "properties": {"name": _NAME, "version": _NAME},
                    "additionalProperties": False,
                },
            },
            "additionalProperties": False,
        }
    },
    "additionalProperties": False,
}

_ASSET_MAP = {"type": "object", "additionalProperties": {"type": "object"}}

DEPS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["runtimeTarget", "targets", "libraries"],
    "properties": {
        "runtimeTarget": {
            "type": "object",
            "required": ["name"],
            "properties": {"name": _NAME},
        },
        "compilationOptions": {"type": "object"},
        "targets": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": {
                "type": "object",
                "additionalProperties": {
                    "type": "object",
                    "properties": {
                        "dependencies": {"type": "object", "additionalProperties": {"type": "string"}},
                        "runtime": _ASSET_MAP,
                        "native": _ASSET_MAP,
                    },
                    "additionalProperties": False,
                },
            },
        },
        "libraries": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["type", "serviceable"],
                "properties": {
                    "type": {"enum": ["project", "package", "reference"]},
                    "serviceable": {"type": "boolean"},
                    "sha512": {"type": "string"},
                    "path": {"type": "string"},
                },
                "additionalProperties": False,
            },
        },
    },
}
