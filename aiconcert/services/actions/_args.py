"""Argument helpers shared by action handlers."""

from __future__ import annotations

from typing import Any

from aiconcert.errors import InvalidArgumentError


def require(arguments: dict, name: str) -> Any:
    """Return a non-empty argument or raise InvalidArgumentError."""
    value = arguments.get(name)
    if value is None or value == "":
        raise InvalidArgumentError(f"Missing required field: {name}")
    return value


def params_of(arguments: dict) -> dict:
    params = arguments.get("params")
    if params is None:
        return {}
    if not isinstance(params, dict):
        raise InvalidArgumentError("Field 'params' must be an object")
    return params
