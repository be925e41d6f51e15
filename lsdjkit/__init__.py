"""Little Sound Dj song data: block compression, instrument parameters and names."""

__version__ = "0.1.0"

__all__ = ["bits", "channels", "compression", "errors", "instrument", "naming", "streams"]