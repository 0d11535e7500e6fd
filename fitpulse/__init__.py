"""Realtime notification and presence delivery for the FitPulse marketplace."""

__version__ = "0.1.0"
