"""Tracker and scheduler exceptions."""

from typing import Optional

from .base import MidiStatusError


class TrackerError(MidiStatusError):
    """A metric source failed in a way it could not degrade from."""

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        tracker_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(user_message, technical_message, **kwargs)
        self.tracker_name = tracker_name


class UnknownStatKeyError(TrackerError):
    """A profile item references a stat key the tracker does not provide."""

    def __init__(self, tracker_name: str, stat_key: Optional[str], valid_keys: tuple[str, ...] = ()):
        hint = f"Update the 'stat_key' of the {tracker_name} items in your profile"
        if valid_keys:
            hint += f"\nValid keys: {', '.join(valid_keys)}"

        super().__init__(
            user_message=f"Unknown stat key for {tracker_name}: {stat_key!r}",
            technical_message=f"{tracker_name}.display received stat_key={stat_key!r}",
            tracker_name=tracker_name,
            recoverable=True,
            recovery_hint=hint,
        )
        self.stat_key = stat_key


class TrackerConfigError(TrackerError):
    """A tracker's profile entry or app settings are unusable."""

    def __init__(self, tracker_name: str, reason: str):
        super().__init__(
            user_message=f"Invalid {tracker_name} configuration: {reason}",
            tracker_name=tracker_name,
            recoverable=True,
            recovery_hint="Check config.json and profile.json",
        )


class SchedulerStateError(MidiStatusError):
    """Scheduler was asked to do something its lifecycle state forbids."""
    pass
