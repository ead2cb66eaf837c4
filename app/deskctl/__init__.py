"""deskctl - keep an eye on desktop clutter."""

__version__ = "0.1.0"
