# xpertia/progress/types.py
"""Read models for the enrolled program tree and progress records.

The student API speaks camelCase JSON with Spanish field names (``nombre``,
``orden``, ``proofPoints``...). Every model accepts those keys through field
aliases and also allows population by the English attribute name, so tests
and callers can build instances directly.

Tree shape returned by ``GET /student/enrollments/{id}/structure``:
- ProgramStructure.phases: list[Phase]
- Phase.proof_points: list[ProofPoint]
- ProofPoint.exercises: list[Exercise]

Status and progress on each node are pre-populated by the server. The
functions in ``xpertia.progress.derivation`` recompute them from leaves.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from xpertia.enums import (
    ActivityType,
    EnrollmentStatus,
    ExerciseProgressStatus,
    ExerciseType,
    ProgressStatus,
)


def _clamp_progress(value):
    if value is None:
        return 0
    return max(0.0, min(100.0, float(value)))


class WireModel(BaseModel):
    """Base model: accept wire aliases and attribute names alike."""

    model_config = ConfigDict(populate_by_name=True)


class StatusNode(WireModel):
    """A node that carries a four-value status and a 0-100 progress."""

    status: ProgressStatus = ProgressStatus.locked
    progress: float = 0

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value):
        # Unknown statuses fail closed
        return ProgressStatus.coerce(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _clamp(cls, value):
        return _clamp_progress(value)


# =====================================================
# Program structure tree
# =====================================================


class Exercise(StatusNode):
    """Smallest unit of student work (``ExerciseSummary`` on the wire)."""

    id: str
    name: str = Field(alias="nombre")
    type: ExerciseType | str = Field(
        default=ExerciseType.leccion_interactiva, alias="tipo"
    )
    position: int = Field(default=0, alias="orden")
    estimated_minutes: int = Field(default=20, alias="duracionEstimada")
    required: bool = Field(default=True, alias="esObligatorio")
    score: float | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _known_kind(cls, value):
        # Unknown kinds stay plain strings
        try:
            return ExerciseType(value)
        except ValueError:
            return value


class ProofPoint(StatusNode):
    """A learning milestone containing an ordered set of exercises."""

    id: str
    name: str = Field(alias="nombre")
    slug: str = ""
    description: str = Field(default="", alias="descripcion")
    central_question: str = Field(default="", alias="preguntaCentral")
    position: int = Field(default=0, alias="orden")
    exercises: list[Exercise] = Field(default_factory=list)


class Phase(WireModel):
    """Top-level curriculum unit. Its status is always derived."""

    id: str
    name: str = Field(alias="nombre")
    description: str = Field(default="", alias="descripcion")
    position: int = Field(default=0, alias="orden")
    duration_weeks: int = Field(default=0, alias="duracionSemanas")
    proof_points: list[ProofPoint] = Field(default_factory=list, alias="proofPoints")


class ProgramStructure(WireModel):
    program_id: str = Field(alias="programId")
    program_name: str = Field(default="", alias="programName")
    phases: list[Phase] = Field(default_factory=list)


class Enrollment(WireModel):
    id: str
    student_id: str = Field(alias="studentId")
    cohort_id: str = Field(alias="cohortId")
    program_id: str = Field(alias="programId")
    program_name: str = Field(default="", alias="programName")
    program_description: str = Field(default="", alias="programDescription")
    instructor_name: str = Field(default="", alias="instructorName")
    enrolled_at: datetime | None = Field(default=None, alias="enrolledAt")
    status: EnrollmentStatus = EnrollmentStatus.active
    current_phase_id: str | None = Field(default=None, alias="currentPhaseId")
    current_proof_point_id: str | None = Field(
        default=None, alias="currentProofPointId"
    )
    current_exercise_id: str | None = Field(default=None, alias="currentExerciseId")
    overall_progress: float = Field(default=0, alias="overallProgress")
    completed_proof_points: int = Field(default=0, alias="completedProofPoints")
    total_proof_points: int = Field(default=0, alias="totalProofPoints")
    estimated_completion_date: datetime | None = Field(
        default=None, alias="estimatedCompletionDate"
    )


# =====================================================
# Progress records
# =====================================================


def _record_status(value) -> ExerciseProgressStatus:
    try:
        return ExerciseProgressStatus(value)
    except ValueError:
        return ExerciseProgressStatus.not_started


class ExerciseProgressSummary(WireModel):
    """Per-exercise progress record inside a proof point progress response."""

    exercise_id: str = Field(alias="exerciseId")
    status: ExerciseProgressStatus = ExerciseProgressStatus.not_started
    progress: float = 0
    score: float | None = None
    last_accessed: datetime | None = Field(default=None, alias="lastAccessed")

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        return _record_status(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _clamp(cls, value):
        return _clamp_progress(value)


class ExerciseProgress(WireModel):
    """A student's full progress record for one exercise.

    Returned by ``GET /student/exercises/{id}/progress``. Accepts the API's
    response DTO (``exerciseInstance``, ``porcentajeCompletitud``,
    ``tiempoInvertidoMinutos``) as well as the portal's shape (``exerciseId``,
    ``progress``, ``timeSpentMinutes``). ``saved_data`` is the last draft
    written by ``save_progress``.
    """

    id: str = ""
    exercise_id: str = Field(
        default="", validation_alias=AliasChoices("exerciseId", "exerciseInstance")
    )
    student_id: str = Field(
        default="", validation_alias=AliasChoices("studentId", "estudiante")
    )
    cohort_id: str = Field(
        default="", validation_alias=AliasChoices("cohortId", "cohorte")
    )
    status: ExerciseProgressStatus = ExerciseProgressStatus.not_started
    progress: float = Field(
        default=0, validation_alias=AliasChoices("progress", "porcentajeCompletitud")
    )
    started_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("startedAt", "fechaInicio")
    )
    completed_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("completedAt", "fechaCompletado"),
    )
    submitted_at: datetime | None = Field(default=None, alias="submittedAt")
    last_saved_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("lastSavedAt", "updatedAt")
    )
    time_spent_minutes: float = Field(
        default=0,
        validation_alias=AliasChoices("timeSpentMinutes", "tiempoInvertidoMinutos"),
    )
    attempts: int = Field(
        default=0, validation_alias=AliasChoices("numeroIntentos", "intentos")
    )
    score_final: float | None = Field(default=None, alias="scoreFinal")
    instructor_feedback: Any = Field(default=None, alias="instructorFeedback")
    saved_data: dict[str, Any] | None = Field(default=None, alias="datosGuardados")

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        return _record_status(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _clamp(cls, value):
        return _clamp_progress(value)

    @field_validator("time_spent_minutes", "attempts", mode="before")
    @classmethod
    def _zero_if_missing(cls, value):
        return 0 if value is None else value


class ProofPointProgress(WireModel):
    proof_point_id: str = Field(alias="proofPointId")
    student_id: str = Field(default="", alias="studentId")
    status: ProgressStatus = ProgressStatus.locked
    progress: float = 0
    completed_exercises: int = Field(default=0, alias="completedExercises")
    total_exercises: int = Field(default=0, alias="totalExercises")
    required_exercises: int = Field(default=0, alias="requiredExercises")
    average_score: float | None = Field(default=None, alias="averageScore")
    started_at: datetime | None = Field(default=None, alias="startedAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    exercises: list[ExerciseProgressSummary] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value):
        return ProgressStatus.coerce(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _clamp(cls, value):
        return _clamp_progress(value)


class PublishedExercise(WireModel):
    """An exercise instance as published by the instructor."""

    id: str
    template: str = ""  # e.g. "exercise_template:cuaderno_trabajo"
    proof_point: str = Field(default="", alias="proofPoint")
    name: str = Field(alias="nombre")
    short_description: str | None = Field(default=None, alias="descripcionBreve")
    custom_configuration: dict[str, Any] = Field(
        default_factory=dict, alias="configuracionPersonalizada"
    )
    position: int = Field(default=0, alias="orden")
    estimated_minutes: int | None = Field(
        default=None, alias="duracionEstimadaMinutos"
    )
    content_state: str = Field(default="", alias="estadoContenido")
    current_content: Any = Field(default=None, alias="contenidoActual")
    required: bool = Field(default=True, alias="esObligatorio")


class ProofPointProgressStats(WireModel):
    proof_point_id: str = Field(alias="proofPointId")
    proof_point_name: str = Field(default="", alias="proofPointName")
    total_exercises: int = Field(default=0, alias="totalExercises")
    completed_exercises: int = Field(default=0, alias="completedExercises")
    completion_percentage: float = Field(default=0, alias="completionPercentage")
    average_score: float | None = Field(default=None, alias="averageScore")
    time_invested_minutes: int = Field(default=0, alias="timeInvestedMinutes")


class CompletedExercise(WireModel):
    exercise_id: str = Field(alias="exerciseId")
    exercise_name: str = Field(default="", alias="exerciseName")
    exercise_template: str = Field(default="", alias="exerciseTemplate")
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    score: float | None = None
    time_invested_minutes: int = Field(default=0, alias="timeInvestedMinutes")


class StudentProgressSummary(WireModel):
    total_exercises: int = Field(default=0, alias="totalExercises")
    completed_exercises: int = Field(default=0, alias="completedExercises")
    in_progress_exercises: int = Field(default=0, alias="inProgressExercises")
    completion_percentage: float = Field(default=0, alias="completionPercentage")
    total_time_invested_minutes: int = Field(
        default=0, alias="totalTimeInvestedMinutes"
    )
    average_score: float | None = Field(default=None, alias="averageScore")
    proof_point_stats: list[ProofPointProgressStats] = Field(
        default_factory=list, alias="proofPointStats"
    )
    recent_completed_exercises: list[CompletedExercise] = Field(
        default_factory=list, alias="recentCompletedExercises"
    )


# =====================================================
# Completion / continuation
# =====================================================


class DimensionScore(WireModel):
    dimension: str
    score: float
    threshold: float
    feedback: str = ""


class EvaluationFeedback(WireModel):
    overall_score: float = Field(default=0, alias="overallScore")
    strengths: list[str] = Field(default_factory=list)
    areas_to_improve: list[str] = Field(default_factory=list, alias="areasToImprove")
    detailed_analysis: list[DimensionScore] = Field(
        default_factory=list, alias="detailedAnalysis"
    )
    meets_criteria: bool = Field(default=False, alias="meetsCriteria")
    next_steps: list[str] | None = Field(default=None, alias="nextSteps")


class CompletionResult(WireModel):
    """Result of the complete call. Only used to decide where to navigate.

    Accepts both the portal shape (``completed``/``score``) and the API's
    response DTO (``completado``/``scoreFinal``).
    """

    exercise_id: str = Field(default="", alias="exerciseId")
    completed: bool = Field(
        default=False, validation_alias=AliasChoices("completed", "completado")
    )
    score: float | None = Field(
        default=None, validation_alias=AliasChoices("score", "scoreFinal")
    )  # 0-10
    feedback: EvaluationFeedback | str | None = None
    next_exercise_unlocked: str | None = Field(
        default=None, alias="nextExerciseUnlocked"
    )
    proof_point_completed: bool = Field(default=False, alias="proofPointCompleted")


class ContinuePoint(WireModel):
    exercise_id: str = Field(alias="exerciseId")
    exercise_name: str = Field(default="", alias="exerciseName")
    proof_point_name: str = Field(default="", alias="proofPointName")
    phase_name: str = Field(default="", alias="phaseName")
    progress: float = 0
    estimated_time_remaining: int = Field(default=0, alias="estimatedTimeRemaining")
    last_accessed_at: datetime | None = Field(default=None, alias="lastAccessedAt")


class ActivityLog(WireModel):
    id: str
    student_id: str = Field(default="", alias="studentId")
    type: ActivityType
    entity_id: str = Field(alias="entityId")
    entity_name: str = Field(default="", alias="entityName")
    timestamp: datetime
    metadata: Any = None
