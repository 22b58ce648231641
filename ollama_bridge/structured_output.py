"""Helpers for the structured-output option."""

from __future__ import annotations

from typing import Any, Mapping

RESPONSE_FORMAT = "response_format"


def build_response_format(
    schema: Mapping[str, Any], name: str = "response", strict: bool = True
) -> dict[str, Any]:
    """Wrap a JSON schema in the ``response_format`` option value."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "strict": strict,
            "schema": dict(schema),
        },
    }
