"""Pydantic description of a supported grid device."""

from pydantic import BaseModel, Field, field_validator


class DeviceConfig(BaseModel):
    """
    Identity and detection rules of one device model.

    The registry matches advertised port names against
    ``detection_patterns`` to pick the dialect named by ``implements``.
    """

    model: str = Field(min_length=1, description="Device model name")
    manufacturer: str = Field(default="", description="Manufacturer name")
    implements: str = Field(min_length=1, description="Dialect name for factory lookup")
    detection_patterns: list[str] = Field(
        default_factory=list, description="Substrings identifying this device in port names"
    )
    exclude_patterns: list[str] = Field(
        default_factory=list, description="Substrings that rule a port name out"
    )
    sysex_header: list[int] | None = Field(
        None, description="Vendor and product id bytes (excluding F0)"
    )

    @field_validator("sysex_header")
    @classmethod
    def validate_sysex_header(cls, v: list[int] | None) -> list[int] | None:
        """Validate SysEx header bytes are in valid range."""
        if v is not None:
            for byte in v:
                if not 0 <= byte <= 127:
                    raise ValueError(f"SysEx byte {byte} out of range (0-127)")
        return v

    @property
    def display_name(self) -> str:
        """Human-readable device name."""
        return self.model

    def matches(self, port_name: str) -> bool:
        """Check if a port name matches this device (case-insensitive)."""
        name = port_name.casefold()
        if any(pattern.casefold() in name for pattern in self.exclude_patterns):
            return False
        return any(pattern.casefold() in name for pattern in self.detection_patterns)
