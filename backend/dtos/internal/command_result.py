"""
Command outcome DTO.

Returned by every mutating OrderService / OrderDesk call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandOutcome(str, Enum):
    """How a command ended."""

    OK = "OK"
    REJECTED = "REJECTED"   # validation failed, nothing written
    FAILED = "FAILED"       # the store raised


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of a command.

    A no-op on an unknown id is still OK: callers cannot tell it apart from
    a successful write without reading the state again.
    """

    outcome: CommandOutcome
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is CommandOutcome.OK

    @classmethod
    def ok(cls) -> "CommandResult":
        return cls(CommandOutcome.OK)

    @classmethod
    def rejected(cls, message: str) -> "CommandResult":
        return cls(CommandOutcome.REJECTED, message)

    @classmethod
    def failed(cls, message: str) -> "CommandResult":
        return cls(CommandOutcome.FAILED, message)
