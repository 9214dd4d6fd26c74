from .pages import Dashboard

__all__ = ["Dashboard"]
