"""External control package."""

from .commands import Command, CommandSource, QueuedCommandSource

__all__ = ["Command", "CommandSource", "QueuedCommandSource"]
