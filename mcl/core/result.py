"""Result type used for every fallible pipeline step.

Each stage of the install pipeline returns either ``Ok(value)`` or
``Err(error)`` instead of raising. Callers branch with ``isinstance`` or
structural pattern matching:

    match resolver.find_version(index, "1.16.1"):
        case Ok(ref):
            ...
        case Err(VersionNotFound(version_id=missing)):
            ...

Errors are plain frozen dataclasses (see ``mcl.core.failures``), so they
compare by value in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying ``value``."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying ``error``."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the carried error (e.g. wrap it with a stage label)."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
