"""
Translation of library errors into midistatus errors, and their display.

```
CLI             prints user_message and recovery_hint
persistence     ValidationError -> ConfigFileInvalidError / ConfigValidationError
mido/requests   raise their own exceptions
```
"""

from typing import Optional

from pydantic import ValidationError

from .base import MidiStatusError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError


def _location(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "root"


def wrap_pydantic_error(error: ValidationError, file_path: str) -> ConfigurationError:
    """
    Convert a pydantic ValidationError raised while loading ``file_path``.

    Malformed JSON becomes :class:`ConfigFileInvalidError`; schema
    violations become :class:`ConfigValidationError` naming the field (or
    listing every field when several failed).
    """
    errors = error.errors()

    for err in errors:
        if err.get("type") == "json_invalid":
            parse_error = str(err.get("ctx", {}).get("error", err.get("msg", "invalid JSON")))
            return ConfigFileInvalidError(file_path, parse_error)

    if len(errors) == 1:
        err = errors[0]
        return ConfigValidationError(
            field=_location(err),
            value=err.get("input"),
            error_msg=err.get("msg", "validation failed"),
            file_path=file_path,
        )

    lines = [f"  - {_location(err)}: {err.get('msg', 'validation failed')}" for err in errors]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Returns:
        (message, recovery hint or None) for any exception
    """
    if isinstance(error, MidiStatusError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None
