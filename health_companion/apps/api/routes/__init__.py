"""Router namespace exports for FastAPI include hooks."""

from . import alexa, health

__all__ = ["alexa", "health"]
