"""Exceptions raised by the dependency graph.

Only contract violations are errors. A rejected cycle-closing edge, removing
an edge that does not exist, or querying an unknown element is reported
through return values instead.
"""


class DependencyGraphError(Exception):
    """Base class for all dependency graph errors."""

    def __init__(self, message: str, argument: str | None = None):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the error
            argument: Name of the offending argument, if any
        """
        super().__init__(message)
        self.message = message
        self.argument = argument


class MissingArgumentError(DependencyGraphError, TypeError):
    """Raised when a required element argument is None."""


class InvalidArgumentError(DependencyGraphError, ValueError):
    """Raised when an argument is present but not acceptable."""


class SelfDependencyError(InvalidArgumentError):
    """Raised when an element is made to depend directly on itself."""


class CycleDetectedError(InvalidArgumentError):
    """Raised when a graph that forbids cycles is built from a cyclic one.

    The source graph has an element that (transitively) depends on itself,
    which the new graph's invariant does not allow.
    """
