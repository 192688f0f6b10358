"""CLI module for holdtrigger."""

from .types import OutputFormat

__all__ = ["OutputFormat"]
