"""Utility functions for parameter checks and response unwrapping."""

from typing import Any

from .exceptions import InvalidParameterError


def require_id(value: str | None, label: str) -> str:
    """Return ``value`` or raise InvalidParameterError if it is empty.

    Args:
        value: Id passed by the caller.
        label: Human name used in the error message (e.g. "Block ID").
    """
    if not value or not value.strip():
        raise InvalidParameterError(
            f"{label} is required",
            suggestions=[
                "The id is the part of the Wolai page URL after wolai.com/",
            ],
        )
    return value.strip()


def require_objects(items: Any, label: str) -> list[dict[str, Any]]:
    """Return ``items`` if it is a non-empty list of objects.

    Args:
        items: Value passed by the caller.
        label: Parameter name used in the error message (e.g. "blocks").

    Raises:
        InvalidParameterError: If items is not a list, is empty, or holds
            anything other than objects.
    """
    if not isinstance(items, list) or not items:
        raise InvalidParameterError(
            f"{label.capitalize()} array is required and must not be empty",
            context={"parameter": label},
        )

    bad = [i for i, item in enumerate(items) if not isinstance(item, dict)]
    if bad:
        raise InvalidParameterError(
            f"Every entry in {label} must be an object",
            errors=[f"{label}[{i}] is not an object" for i in bad],
            context={"parameter": label},
        )
    return items


def unwrap_data(payload: Any) -> Any:
    """Return the ``data`` field of a Wolai response envelope.

    Payloads without the envelope are returned unchanged.
    """
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload
