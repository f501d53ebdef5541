"""Tests for parsing the student API's JSON into read models."""

from xpertia.enums import (
    ExerciseProgressStatus,
    ExerciseType,
    ProgressStatus,
    exercise_type_label,
)
from xpertia.progress.types import (
    CompletionResult,
    ExerciseProgressSummary,
    ProgramStructure,
    ProofPoint,
    ProofPointProgress,
)

STRUCTURE_JSON = {
    "programId": "programa:abc",
    "programName": "Liderazgo",
    "phases": [
        {
            "id": "fase:1",
            "nombre": "Fundamentos",
            "descripcion": "Primera fase",
            "orden": 1,
            "duracionSemanas": 4,
            "proofPoints": [
                {
                    "id": "proof_point:1",
                    "nombre": "Propuesta de valor",
                    "slug": "propuesta-de-valor",
                    "descripcion": "",
                    "preguntaCentral": "¿Qué problema resuelves?",
                    "orden": 1,
                    "status": "in_progress",
                    "progress": 50,
                    "exercises": [
                        {
                            "id": "exercise_instance:1",
                            "nombre": "Lección inicial",
                            "tipo": "leccion_interactiva",
                            "orden": 1,
                            "duracionEstimada": 15,
                            "status": "completed",
                            "esObligatorio": True,
                        },
                        {
                            "id": "exercise_instance:2",
                            "nombre": "Cuaderno",
                            "tipo": "cuaderno_trabajo",
                            "orden": 2,
                            "duracionEstimada": 30,
                            "status": "available",
                            "score": 7.5,
                            "esObligatorio": False,
                        },
                    ],
                }
            ],
        }
    ],
}


def test_structure_parses_wire_aliases():
    structure = ProgramStructure.model_validate(STRUCTURE_JSON)
    phase = structure.phases[0]
    assert phase.name == "Fundamentos"
    assert phase.duration_weeks == 4

    pp = phase.proof_points[0]
    assert pp.central_question == "¿Qué problema resuelves?"
    assert pp.status == ProgressStatus.in_progress

    first, second = pp.exercises
    assert first.type == ExerciseType.leccion_interactiva
    assert first.estimated_minutes == 15
    assert second.required is False
    assert second.score == 7.5
    assert second.progress == 0


def test_unknown_status_fails_closed():
    pp = ProofPoint.model_validate(
        {"id": "pp", "nombre": "x", "status": "archived", "exercises": [{"id": "e", "nombre": "y", "status": None}]}
    )
    assert pp.status == ProgressStatus.locked
    assert pp.exercises[0].status == ProgressStatus.locked


def test_progress_is_clamped_and_defaults_to_zero():
    pp = ProofPoint.model_validate({"id": "pp", "nombre": "x", "progress": 130})
    assert pp.progress == 100
    pp = ProofPoint.model_validate({"id": "pp", "nombre": "x", "progress": None})
    assert pp.progress == 0


def test_dump_by_alias_round_trips_wire_names():
    structure = ProgramStructure.model_validate(STRUCTURE_JSON)
    dumped = structure.model_dump(by_alias=True, mode="json")
    assert dumped["phases"][0]["proofPoints"][0]["preguntaCentral"] == "¿Qué problema resuelves?"


def test_completion_result_accepts_both_shapes():
    portal = CompletionResult.model_validate(
        {
            "exerciseId": "exercise_instance:1",
            "completed": True,
            "score": 9,
            "nextExerciseUnlocked": "exercise_instance:2",
            "proofPointCompleted": False,
        }
    )
    assert portal.completed is True
    assert portal.next_exercise_unlocked == "exercise_instance:2"

    api = CompletionResult.model_validate(
        {"id": "exercise_progress:1", "completado": True, "scoreFinal": 8.5,
         "feedback": "Buen trabajo"}
    )
    assert api.completed is True
    assert api.score == 8.5
    assert api.feedback == "Buen trabajo"
    assert api.proof_point_completed is False


def test_exercise_type_labels():
    assert exercise_type_label("mentor_ia") == "Mentor IA"
    assert exercise_type_label(ExerciseType.caso) == "Caso"
    assert exercise_type_label("desconocido") == "desconocido"


def test_unknown_record_status_reads_as_not_started():
    record = ExerciseProgressSummary.model_validate(
        {"exerciseId": "e1", "status": "archived", "progress": 10}
    )
    assert record.status == ExerciseProgressStatus.not_started


def test_record_progress_null_and_out_of_range():
    progress = ProofPointProgress.model_validate(
        {
            "proofPointId": "proof_point:1",
            "status": "in_progress",
            "progress": None,
            "exercises": [
                {"exerciseId": "e1", "status": "in_progress", "progress": None},
                {"exerciseId": "e2", "status": "in_progress", "progress": 140},
            ],
        }
    )
    assert progress.progress == 0
    assert [ex.progress for ex in progress.exercises] == [0, 100]
