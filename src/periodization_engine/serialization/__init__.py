"""Serialization module: export and import engine state as JSON documents."""

from periodization_engine.serialization.plan_json import (
    ImportedState,
    from_document,
    from_json_string,
    to_document,
    to_json_string,
)

__all__ = [
    "ImportedState",
    "from_document",
    "from_json_string",
    "to_document",
    "to_json_string",
]
