"""Rate resolution exports."""

from .resolver import pick_rate, resolve_rate

__all__ = ["pick_rate", "resolve_rate"]
