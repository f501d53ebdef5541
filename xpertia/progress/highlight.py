# xpertia/progress/highlight.py
"""Pick what the student should work on next."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from xpertia.enums import ProgressStatus
from .derivation import _status_of
from .types import Exercise, Phase, ProofPoint

T = TypeVar("T")


def _first_with_status(items: Sequence[T], status: ProgressStatus) -> T | None:
    for item in items:
        if _status_of(item) == status:
            return item
    return None


def select_highlight(exercises: Sequence[T]) -> T | None:
    """Select the exercise to surface as "next" for a proof point.

    Order of preference: first in-progress, then first available, then the
    first exercise of the list whatever its status. Duration and the required
    flag are ignored. Returns None for an empty list.
    """
    if not exercises:
        return None
    in_progress = _first_with_status(exercises, ProgressStatus.in_progress)
    if in_progress is not None:
        return in_progress
    available = _first_with_status(exercises, ProgressStatus.available)
    if available is not None:
        return available
    return exercises[0]


@dataclass
class Continuation:
    """Where to resume inside a program."""

    phase: Phase
    proof_point: ProofPoint
    exercise: Exercise | None  # None if the proof point has no exercises


def select_continuation(phases: Sequence[Phase]) -> Continuation | None:
    """Resolve the next exercise across a whole program.

    Proof points are visited in phase order. The first in-progress proof
    point wins; otherwise the first available one. Completed and locked proof
    points are never picked. Returns None when nothing is actionable.
    """
    for status in (ProgressStatus.in_progress, ProgressStatus.available):
        for phase in phases:
            proof_point = _first_with_status(phase.proof_points, status)
            if proof_point is not None:
                return Continuation(
                    phase=phase,
                    proof_point=proof_point,
                    exercise=select_highlight(proof_point.exercises),
                )
    return None
