from .options import QueryDefaults, TickOptions

__all__ = ["QueryDefaults", "TickOptions"]
