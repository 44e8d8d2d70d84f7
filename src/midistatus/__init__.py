"""MIDI Status Display - server metrics on a Launchpad Pro LED grid."""

__version__ = "0.1.0"
