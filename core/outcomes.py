"""
Result types for invoice writes and the mutations built on them.

The gateway returns WriteResult instead of raising, so the mutation layer
decides what an operator sees without try/except around every statement.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Written:
    """A statement ran. affected is the number of rows it touched."""

    affected: int


@dataclass(frozen=True)
class PersistenceError:
    """A statement failed. detail is for logs only, never shown to operators."""

    operation: str  # "create", "update" or "delete"
    detail: str = ""

    @property
    def message(self) -> str:
        return f"Database Error: Failed to {self.operation} invoice."


WriteResult = Written | PersistenceError


def flatten_errors(errors: dict[str, list[str]]) -> str:
    """Join field errors as "<field>: <message>" with no separator between entries."""
    return "".join(
        f"{name}: {message}"
        for name, messages in errors.items()
        for message in messages
    )


@dataclass(frozen=True)
class Redirect:
    """Mutation succeeded; the caller must navigate to location."""

    location: str


@dataclass(frozen=True)
class Success:
    """Mutation succeeded without navigation (delete)."""

    message: str


@dataclass(frozen=True)
class ValidationFailure:
    """Submission rejected before any statement ran."""

    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return flatten_errors(self.errors)


@dataclass(frozen=True)
class PersistenceFailure:
    """Statement failed; nothing was invalidated."""

    message: str


MutationOutcome = Redirect | Success | ValidationFailure | PersistenceFailure
