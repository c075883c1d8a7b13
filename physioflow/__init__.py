"""PhysioFlow - client SDK for the PhysioFlow physical-therapy clinic API."""

__version__ = "0.1.0"
