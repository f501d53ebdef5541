# xpertia/progress/overlay.py
"""Merge server progress records onto the published program structure.

The structure endpoint and the progress endpoints are fetched separately.
These helpers combine them into the status/progress values shown to the
student, without touching the fetched objects.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from xpertia.enums import ExerciseProgressStatus, ExerciseType, ProgressStatus
from .types import (
    Enrollment,
    Exercise,
    ExerciseProgressSummary,
    Phase,
    ProofPointProgress,
    PublishedExercise,
    StudentProgressSummary,
)

DEFAULT_EXERCISE_MINUTES = 20

# Record statuses that mean the student is done with the exercise
_DONE_STATUSES = {
    ExerciseProgressStatus.approved,
    ExerciseProgressStatus.graded,
    ExerciseProgressStatus.submitted_for_review,
    ExerciseProgressStatus.pending_review,
}
_ACTIVE_STATUSES = {
    ExerciseProgressStatus.in_progress,
    ExerciseProgressStatus.requires_iteration,
}


def exercise_kind(template_ref: str | None) -> ExerciseType | str:
    """Extract the exercise kind from a ``"<table>:<kind>"`` template reference."""
    if not template_ref or ":" not in template_ref:
        return ExerciseType.leccion_interactiva
    kind = template_ref.split(":", 1)[1]
    if not kind:
        return ExerciseType.leccion_interactiva
    try:
        return ExerciseType(kind)
    except ValueError:
        return kind


def map_record_status(
    summary: ExerciseProgressSummary,
) -> tuple[ProgressStatus, float]:
    """Map a progress record to a node (status, progress) pair."""
    if summary.status in _DONE_STATUSES:
        return ProgressStatus.completed, 100
    if summary.status in _ACTIVE_STATUSES:
        return ProgressStatus.in_progress, max(0, min(100, summary.progress or 0))
    return ProgressStatus.available, 0


def merge_exercise_progress(
    published: Sequence[PublishedExercise],
    proof_point_progress: ProofPointProgress | None = None,
) -> list[Exercise]:
    """Build the exercise list of a proof point page.

    A locked proof point locks every exercise. Exercises without a progress
    record are available.
    """
    records: dict[str, ExerciseProgressSummary] = {}
    if proof_point_progress is not None:
        records = {rec.exercise_id: rec for rec in proof_point_progress.exercises}
    proof_point_locked = (
        proof_point_progress is not None
        and proof_point_progress.status == ProgressStatus.locked
    )

    exercises = []
    for item in published:
        status, progress = ProgressStatus.available, 0
        record = records.get(item.id)
        if proof_point_locked:
            status = ProgressStatus.locked
        elif record is not None:
            status, progress = map_record_status(record)

        exercises.append(
            Exercise(
                id=item.id,
                name=item.name,
                type=exercise_kind(item.template),
                position=item.position,
                estimated_minutes=item.estimated_minutes or DEFAULT_EXERCISE_MINUTES,
                required=item.required,
                status=status,
                progress=progress,
                score=record.score if record is not None else None,
            )
        )
    return exercises


def apply_progress_summary(
    phases: Sequence[Phase], summary: StudentProgressSummary | None
) -> list[Phase]:
    """Overlay per-proof-point stats from the progress summary onto phases.

    Locked proof points stay locked but take the stats' percentage. Others are
    re-statused from their completed/total counts.
    """
    if summary is None or not summary.proof_point_stats:
        return list(phases)

    stats_by_id = {stat.proof_point_id: stat for stat in summary.proof_point_stats}

    merged = []
    for phase in phases:
        proof_points = []
        for proof_point in phase.proof_points:
            stat = stats_by_id.get(proof_point.id)
            if stat is None:
                proof_points.append(proof_point)
                continue

            update = {"progress": stat.completion_percentage}
            if proof_point.status != ProgressStatus.locked:
                if (
                    stat.total_exercises > 0
                    and stat.completed_exercises >= stat.total_exercises
                ):
                    update["status"] = ProgressStatus.completed
                elif stat.completed_exercises > 0 or stat.completion_percentage > 0:
                    update["status"] = ProgressStatus.in_progress
                else:
                    update["status"] = ProgressStatus.available
            proof_points.append(proof_point.model_copy(update=update))
        merged.append(phase.model_copy(update={"proof_points": proof_points}))
    return merged


@dataclass
class DashboardStats:
    progress: float
    completed: int
    total: int

    @property
    def proof_points_label(self) -> str:
        return f"{self.completed}/{self.total}"


def dashboard_stats(
    enrollment: Enrollment | None,
    phases: Sequence[Phase],
    summary: StudentProgressSummary | None = None,
) -> DashboardStats:
    """Headline numbers for the dashboard of one enrollment.

    Summary figures win; the enrollment's own counters are the fallback.
    """
    if enrollment is None:
        return DashboardStats(progress=0, completed=0, total=0)

    total = sum(len(phase.proof_points) for phase in phases)
    total = total or enrollment.total_proof_points

    if summary is not None:
        completed = sum(
            1
            for stat in summary.proof_point_stats
            if stat.total_exercises > 0
            and stat.completed_exercises >= stat.total_exercises
        )
        progress = summary.completion_percentage
    else:
        completed = enrollment.completed_proof_points
        progress = enrollment.overall_progress

    return DashboardStats(progress=progress, completed=completed, total=total)
