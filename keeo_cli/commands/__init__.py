"""Command handlers for Keeo CLI."""

from .person import PersonCommands
from .unit import UnitCommands
from .event import EventCommands

__all__ = ["PersonCommands", "UnitCommands", "EventCommands"]
