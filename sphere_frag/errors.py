"""
Error hierarchy for sphere fragmentation.

Every error carries a machine-readable code next to the human-readable message
so callers batching many fragments can collect failures as plain dicts.
"""

from typing import Any, Dict


class FragmentationError(Exception):
    """Base class for all fragmentation errors.

    Attributes:
        code: Machine-readable error code (e.g. "ROOT_OUT_OF_RANGE").
        message: Human-readable error description.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "code": self.code,
            "message": self.message,
            "type": type(self).__name__,
        }


class PreconditionError(FragmentationError, ValueError):
    """Raised when the caller's input can not be fragmented (bad root, no graph, ...)."""
    pass


class TreeIntegrityError(FragmentationError):
    """Raised when a connection tree breaks its parent/bond invariants."""
    pass


class GraphError(FragmentationError):
    """Raised when a molecule graph is mutated inconsistently."""
    pass
