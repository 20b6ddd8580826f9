"""PowerDesk: electricity metering and analytics for facility properties."""

__version__ = "0.1.0"
