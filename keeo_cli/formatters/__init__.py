"""Output formatters for Keeo CLI."""

from .json_formatter import JsonFormatter
from .human_formatter import HumanFormatter

__all__ = ["JsonFormatter", "HumanFormatter"]
