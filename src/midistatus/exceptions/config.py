"""Errors loading config.json, profile.json and devices.json."""

from typing import Any, Optional

from .base import MidiStatusError

# Extra hints for fields whose valid values live outside the file
FIELD_HINTS = {
    "device": "Run 'midistatus midi list' to see valid MIDI devices",
    "tracker_type": "Valid tracker types: ping, jellyfin, truenas",
    "colors": "Palette colors are integers between 0 and 127",
    "pos_": "Grid positions are between 0 and 9 (row 0 is the bottom)",
    "sysex_header": "SysEx header bytes are between 0 and 127",
}


class ConfigurationError(MidiStatusError):
    """A configuration file is unusable."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """The file is empty, unreadable or not JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Args:
            file_path: File that failed to parse
            parse_error: Parser message (pydantic's json_invalid text or an OS error)
        """
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = f"{file_path} has a trailing comma"
            hint = "JSON does not allow a comma after the last item of an object or array"
        elif "empty" in lowered or "eof while parsing" in lowered:
            user_msg = f"{file_path} is empty or truncated"
            hint = f"Delete {file_path} to have it recreated with defaults, or restore {file_path}.bak"
        else:
            user_msg = f"{file_path} is not valid JSON"
            hint = f"Fix the syntax error ({parse_error}) or restore {file_path}.bak"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=hint,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """The file is valid JSON but a value is out of range or of the wrong type."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Args:
            field: Dotted location of the failing value (``trackers.0.items.1.pos_x``)
            value: The rejected value
            error_msg: Why it was rejected
            file_path: File the value came from
        """
        hint = f"Fix '{field}' in {file_path}" if file_path else f"Fix '{field}'"
        extra = next((text for key, text in FIELD_HINTS.items() if key in field.lower()), None)
        if extra:
            hint += f"\n{extra}"

        super().__init__(
            user_message=f"Invalid value for '{field}': {error_msg}",
            technical_message=f"Validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint=hint,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
