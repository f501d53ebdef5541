# xpertia/progress/derivation.py
"""Bottom-up status and progress derivation.

Rolls exercise status/progress up into proof points, and proof point
status/progress up into phases. Both levels use the same rule:

- completed    iff every child is completed (an empty list is never completed)
- in_progress  iff any child is in progress
- available    iff any child is available
- locked       otherwise, including the empty list

Progress is the unweighted mean of the children's progress, kept at full
precision. Rounding happens only in ``display_progress``.

Children can be models or plain dicts exposing ``status`` and ``progress``.
Nothing here mutates its input.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from xpertia.enums import ProgressStatus
from .types import Exercise, Phase, ProofPoint


def _field(child: Any, name: str, default: Any = None) -> Any:
    if isinstance(child, dict):
        return child.get(name, default)
    return getattr(child, name, default)


def _status_of(child: Any) -> ProgressStatus:
    return ProgressStatus.coerce(_field(child, "status"))


def derive_status(children: Sequence[Any]) -> ProgressStatus:
    """Derive a parent status from its children's statuses."""
    if not children:
        # No children: nothing can be started, so the parent stays locked
        return ProgressStatus.locked

    statuses = [_status_of(child) for child in children]

    if all(status == ProgressStatus.completed for status in statuses):
        return ProgressStatus.completed
    if ProgressStatus.in_progress in statuses:
        return ProgressStatus.in_progress
    if ProgressStatus.available in statuses:
        return ProgressStatus.available
    return ProgressStatus.locked


def derive_progress(children: Sequence[Any]) -> float:
    """Unweighted mean of children's progress. Empty list -> 0."""
    if not children:
        return 0
    total = sum(float(_field(child, "progress", 0) or 0) for child in children)
    return total / len(children)


def derive_proof_point(proof_point: ProofPoint) -> ProofPoint:
    """Return a copy of the proof point with status/progress recomputed."""
    return proof_point.model_copy(
        update={
            "status": derive_status(proof_point.exercises),
            "progress": derive_progress(proof_point.exercises),
        }
    )


def derive_phase(phase: Phase) -> Phase:
    """Return a copy of the phase with every proof point recomputed."""
    return phase.model_copy(
        update={"proof_points": [derive_proof_point(pp) for pp in phase.proof_points]}
    )


def phase_status(phase: Phase | None) -> ProgressStatus:
    if phase is None:
        return ProgressStatus.locked
    return derive_status(phase.proof_points)


def phase_progress(phase: Phase | None) -> float:
    if phase is None:
        return 0
    return derive_progress(phase.proof_points)


def display_progress(value: float | None) -> int:
    """Round a progress value for presentation, clamped to 0-100."""
    if value is None:
        return 0
    return max(0, min(100, round(value)))


def completion_percentage(exercises: Sequence[Exercise]) -> float:
    """Share of exercises completed, as a 0-100 percentage.

    This is the "real" completion shown on a proof point page, as opposed to
    the mean of partial progress values.
    """
    if not exercises:
        return 0
    return count_completed_exercises(exercises) / len(exercises) * 100


def count_completed_exercises(exercises: Iterable[Any]) -> int:
    return sum(1 for ex in exercises if _status_of(ex) == ProgressStatus.completed)


def estimate_pending_minutes(exercises: Iterable[Any]) -> int:
    """Sum the estimated minutes of every exercise not yet completed."""
    return sum(
        int(_field(ex, "estimated_minutes", 0) or 0)
        for ex in exercises
        if _status_of(ex) != ProgressStatus.completed
    )
