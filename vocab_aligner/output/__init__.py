"""Report formatting"""

from .formatter import OutputFormatter

__all__ = ["OutputFormatter"]
