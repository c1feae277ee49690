from .base import FileAdapter

__all__ = ["FileAdapter"]
