"""spinwheel - weighted lottery wheel engine."""

__version__ = "0.1.0"
