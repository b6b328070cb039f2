"""Personal task tracker: auth, per-user todos and storage backends."""

__version__ = "1.0.0"
