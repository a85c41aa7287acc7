from . import access, health

__all__ = ["access", "health"]
