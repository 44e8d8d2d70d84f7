"""Root of the midistatus exception hierarchy."""

from typing import Optional


class MidiStatusError(Exception):
    """
    Error raised by midistatus itself (as opposed to mido, requests or pydantic).

    The CLI prints ``user_message`` and, below it, ``recovery_hint``. The log
    gets ``technical_message``, which defaults to the user message.

    Attributes:
        user_message: Short message for the terminal
        technical_message: Detail for the log file
        recoverable: True if fixing config/profile or replugging is enough
        recovery_hint: What to try next, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if any."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
