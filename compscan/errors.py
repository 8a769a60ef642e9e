"""Exception types raised by compscan."""

from __future__ import annotations

from typing import Sequence, Tuple

from .models import UnknownDependency


class CompscanError(RuntimeError):
    """Base class for compscan failures."""


class ParseFailure(CompscanError):
    """Raised when source text is too malformed even for error recovery."""


class ResolutionNotFound(CompscanError):
    """A referenced catalog entry does not exist."""

    def __init__(self, owner: str, slug: str) -> None:
        super().__init__(f"Catalog entry {owner}/{slug} was not found")
        self.owner = owner
        self.slug = slug


class AmbiguousDependencyPending(CompscanError):
    """Raised when graph resolution is requested before every reference has an owner."""

    def __init__(self, pending: Sequence[UnknownDependency]) -> None:
        self.pending: Tuple[UnknownDependency, ...] = tuple(pending)
        names = ", ".join(
            f"{dep.category}/{dep.slug_with_owner_missing}" if dep.category else dep.slug_with_owner_missing
            for dep in self.pending
        )
        super().__init__(f"Unresolved catalog dependencies: {names}")


class CatalogError(CompscanError):
    """Raised when a catalog source cannot be loaded."""


class InvalidCatalogUrl(CompscanError):
    """Raised when a pasted catalog URL cannot be turned into an owner/slug pair."""


__all__ = [
    "AmbiguousDependencyPending",
    "CatalogError",
    "CompscanError",
    "InvalidCatalogUrl",
    "ParseFailure",
    "ResolutionNotFound",
]
