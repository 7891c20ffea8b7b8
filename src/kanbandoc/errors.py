"""Exceptions raised by kanbandoc."""


class KanbanError(Exception):
    """Base class for every error kanbandoc raises on purpose."""


class NotFoundError(KanbanError, LookupError):
    """A referenced task, column or board does not exist."""


class InvalidIndexError(KanbanError, IndexError):
    """A reorder index is outside the list it refers to."""


class RelationshipError(KanbanError, ValueError):
    """A parent/subtask edit would break the task graph."""


class InvariantError(KanbanError, ValueError):
    """A document violates one or more structural invariants."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems))


class StorageError(KanbanError):
    """The persistence layer failed to read or write a board."""
