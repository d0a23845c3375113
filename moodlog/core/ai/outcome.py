"""Outcome type for best-effort calls to the external model.

``Ok`` wraps a value the model produced; ``Degraded`` wraps the substitute
value used after a failure together with the reason it was needed. Callers
unwrap ``.value`` and never see the failure itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def degraded(self) -> bool:
        return False


@dataclass(frozen=True)
class Degraded(Generic[T]):
    value: T
    reason: str

    @property
    def degraded(self) -> bool:
        return True


Outcome = Union[Ok[T], Degraded[T]]
