"""VYA payment and wallet settlement service."""

__version__ = "0.1.0"
