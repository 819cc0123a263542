"""
Internal DTOs

DTOs for service-to-service communication within the backend.
These are not exposed to external APIs.
"""

from .command_result import CommandOutcome, CommandResult

__all__ = ["CommandOutcome", "CommandResult"]
