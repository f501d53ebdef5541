"""Student progress read models and derivation."""

from .types import (
    ActivityLog,
    CompletedExercise,
    CompletionResult,
    ContinuePoint,
    DimensionScore,
    Enrollment,
    EvaluationFeedback,
    Exercise,
    ExerciseProgress,
    ExerciseProgressSummary,
    Phase,
    ProgramStructure,
    ProofPoint,
    ProofPointProgress,
    ProofPointProgressStats,
    PublishedExercise,
    StudentProgressSummary,
)
from .derivation import (
    derive_status,
    derive_progress,
    derive_proof_point,
    derive_phase,
    phase_status,
    phase_progress,
    display_progress,
    completion_percentage,
    count_completed_exercises,
    estimate_pending_minutes,
)
from .highlight import select_highlight, select_continuation, Continuation
from .overlay import (
    exercise_kind,
    map_record_status,
    merge_exercise_progress,
    apply_progress_summary,
    dashboard_stats,
    DashboardStats,
)

__all__ = [
    # Read models
    "ActivityLog",
    "CompletedExercise",
    "CompletionResult",
    "ContinuePoint",
    "DimensionScore",
    "Enrollment",
    "EvaluationFeedback",
    "Exercise",
    "ExerciseProgress",
    "ExerciseProgressSummary",
    "Phase",
    "ProgramStructure",
    "ProofPoint",
    "ProofPointProgress",
    "ProofPointProgressStats",
    "PublishedExercise",
    "StudentProgressSummary",
    # Derivation
    "derive_status",
    "derive_progress",
    "derive_proof_point",
    "derive_phase",
    "phase_status",
    "phase_progress",
    "display_progress",
    "completion_percentage",
    "count_completed_exercises",
    "estimate_pending_minutes",
    # Highlight / continuation
    "select_highlight",
    "select_continuation",
    "Continuation",
    # Overlay
    "exercise_kind",
    "map_record_status",
    "merge_exercise_progress",
    "apply_progress_summary",
    "dashboard_stats",
    "DashboardStats",
]
