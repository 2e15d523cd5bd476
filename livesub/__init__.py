"""LiveSub: translated live captions for HLS streams."""

__version__ = "0.1.0"
