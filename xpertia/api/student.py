"""Student API endpoints: enrollments, structure, progress and exercises.

Record ids contain a table prefix (``exercise_instance:abc123``), so every id
placed in a path is percent-encoded.
"""

from typing import Any
from urllib.parse import quote

from xpertia.progress.types import (
    ActivityLog,
    CompletionResult,
    ContinuePoint,
    Enrollment,
    ExerciseProgress,
    ProgramStructure,
    ProofPointProgress,
    PublishedExercise,
    StudentProgressSummary,
)
from .client import ApiClient, APIError


def _seg(record_id: str) -> str:
    return quote(record_id, safe="")


def _check_range(name: str, value: float | None, low: float, high: float | None):
    if value is None:
        return
    if value < low or (high is not None and value > high):
        bound = f"between {low} and {high}" if high is not None else f">= {low}"
        raise ValueError(f"{name} must be {bound}, got {value}")


class StudentApi:
    """Typed wrappers around the student endpoints.

    Student and cohort ids are taken from the client's session.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def _identity(self) -> dict[str, Any]:
        session = self.client.session
        return {"estudianteId": session.student_id, "cohorteId": session.cohort_id}

    # -------------------------------------------------------------------------
    # Enrollments and structure
    # -------------------------------------------------------------------------

    async def get_enrollments(self) -> list[Enrollment]:
        data = await self.client.get("/student/enrollments")
        return [Enrollment.model_validate(item) for item in data or []]

    async def get_enrollment(self, enrollment_id: str) -> Enrollment:
        data = await self.client.get(f"/student/enrollments/{_seg(enrollment_id)}")
        return Enrollment.model_validate(data)

    async def get_structure(self, enrollment_id: str) -> ProgramStructure:
        """Fetch the full Phase -> ProofPoint -> Exercise tree."""
        data = await self.client.get(
            f"/student/enrollments/{_seg(enrollment_id)}/structure"
        )
        return ProgramStructure.model_validate(data)

    async def get_enrollment_continue_point(
        self, enrollment_id: str
    ) -> ContinuePoint | None:
        data = await self.client.get(
            f"/student/enrollments/{_seg(enrollment_id)}/continue"
        )
        return ContinuePoint.model_validate(data) if data else None

    # -------------------------------------------------------------------------
    # Proof points
    # -------------------------------------------------------------------------

    async def get_published_exercises(
        self, proof_point_id: str
    ) -> list[PublishedExercise]:
        data = await self.client.get(
            f"/student/proof-points/{_seg(proof_point_id)}/exercises"
        )
        return [PublishedExercise.model_validate(item) for item in data or []]

    async def get_exercise(self, exercise_id: str) -> PublishedExercise:
        """Fetch one exercise instance with its current content."""
        data = await self.client.get(f"/exercises/{_seg(exercise_id)}")
        return PublishedExercise.model_validate(data)

    async def get_proof_point_progress(self, proof_point_id: str) -> ProofPointProgress:
        data = await self.client.get(
            f"/student/proof-points/{_seg(proof_point_id)}/progress",
            params=self._identity,
        )
        return ProofPointProgress.model_validate(data)

    # -------------------------------------------------------------------------
    # Exercise progress
    # -------------------------------------------------------------------------

    async def mark_started(self, exercise_id: str) -> dict:
        return await self.client.post(
            f"/student/exercises/{_seg(exercise_id)}/start", self._identity
        )

    async def save_progress(
        self,
        exercise_id: str,
        data: Any,
        completion_percentage: float | None = None,
        minutes_invested: float | None = None,
    ) -> dict:
        """Persist work-in-progress for an exercise.

        Raises:
            ValueError: If completion_percentage is outside 0-100 or
                minutes_invested is negative
            APIError: If the request fails
        """
        _check_range("completion_percentage", completion_percentage, 0, 100)
        _check_range("minutes_invested", minutes_invested, 0, None)

        body = {**self._identity, "datos": data}
        if completion_percentage is not None:
            body["porcentajeCompletitud"] = completion_percentage
        if minutes_invested is not None:
            body["tiempoInvertidoMinutos"] = minutes_invested
        return await self.client.put(
            f"/student/exercises/{_seg(exercise_id)}/progress", body
        )

    async def get_exercise_progress(
        self, exercise_id: str
    ) -> ExerciseProgress | None:
        """Load the student's progress record, including the saved draft.

        Returns None when the student has no record for the exercise yet.
        """
        try:
            data = await self.client.get(
                f"/student/exercises/{_seg(exercise_id)}/progress",
                params=self._identity,
            )
        except APIError as e:
            if e.status_code == 404:
                return None
            raise
        return ExerciseProgress.model_validate(data)

    async def auto_save(self, exercise_id: str, data: Any) -> None:
        """Background draft write used by the auto-save coordinator.

        Same PUT as ``save_progress``, without completion or time figures.
        """
        await self.save_progress(exercise_id, data)

    async def complete_exercise(
        self,
        exercise_id: str,
        data: Any,
        score: float | None = None,
        minutes_invested: float | None = None,
    ) -> CompletionResult:
        """Submit final work for an exercise.

        Raises:
            ValueError: If score is outside 0-10 or minutes_invested is negative
            APIError: If the request fails
        """
        _check_range("score", score, 0, 10)
        _check_range("minutes_invested", minutes_invested, 0, None)

        body = {**self._identity, "datos": data}
        if score is not None:
            body["scoreFinal"] = score
        if minutes_invested is not None:
            body["tiempoInvertidoMinutos"] = minutes_invested
        result = await self.client.post(
            f"/student/exercises/{_seg(exercise_id)}/complete", body
        )
        result = result or {}
        result.setdefault("exerciseId", exercise_id)
        return CompletionResult.model_validate(result)

    # -------------------------------------------------------------------------
    # Dashboard data
    # -------------------------------------------------------------------------

    async def get_activity_log(self, limit: int = 10) -> list[ActivityLog]:
        data = await self.client.get("/student/activity", params={"limit": limit})
        return [ActivityLog.model_validate(item) for item in data or []]

    async def get_continue_point(self) -> ContinuePoint | None:
        data = await self.client.get("/student/continue")
        return ContinuePoint.model_validate(data) if data else None

    async def mark_achievement_seen(self, achievement_id: str) -> None:
        await self.client.post(
            f"/student/achievements/{_seg(achievement_id)}/seen", {}
        )

    async def get_progress_summary(self) -> StudentProgressSummary:
        data = await self.client.get("/student/progress/summary", params=self._identity)
        return StudentProgressSummary.model_validate(data)
