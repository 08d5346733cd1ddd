"""Exceptions raised by the propagation engine."""

from __future__ import annotations
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine.group import Group


class PropagationError(Exception):
    """Base class for every error raised while propagating constraints."""


class InvalidStateError(PropagationError):
    """
    The board reached a state that cannot be continued from.

    Carries whatever is known about where the problem was found so callers
    can report it without parsing the message.
    """

    def __init__(
        self,
        message: str,
        group: Optional[Group] = None,
        digit: Optional[int] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        cell: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.group = group
        self.digit = digit
        self.expected = expected
        self.actual = actual
        self.cell = cell

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error details to a dictionary."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "group": str(self.group) if self.group is not None else None,
            "digit": self.digit,
            "expected": self.expected,
            "actual": self.actual,
            "cell": self.cell,
        }


class ContradictionError(InvalidStateError):
    """The grid has no logical solution from the current state."""


class InternalInconsistencyError(InvalidStateError):
    """Candidate bookkeeping disagrees with itself; indicates an engine bug."""
