"""Enum definitions shared by the read models and the API client."""

import enum


# =====================================================
# Node status (exercise, proof point, phase)
# =====================================================


class ProgressStatus(str, enum.Enum):
    locked = "locked"
    available = "available"
    in_progress = "in_progress"
    completed = "completed"

    @classmethod
    def coerce(cls, value) -> "ProgressStatus":
        """Return the matching status, or ``locked`` for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.locked


# =====================================================
# Progress-record status (server-side exercise_progress)
# =====================================================


class ExerciseProgressStatus(str, enum.Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    pending_review = "pending_review"
    submitted_for_review = "submitted_for_review"
    requires_iteration = "requires_iteration"
    approved = "approved"
    graded = "graded"


class ExerciseType(str, enum.Enum):
    leccion_interactiva = "leccion_interactiva"
    cuaderno_trabajo = "cuaderno_trabajo"
    simulacion_interaccion = "simulacion_interaccion"
    mentor_ia = "mentor_ia"
    herramienta_analisis = "herramienta_analisis"
    herramienta_creacion = "herramienta_creacion"
    sistema_tracking = "sistema_tracking"
    herramienta_revision = "herramienta_revision"
    simulador_entorno = "simulador_entorno"
    sistema_progresion = "sistema_progresion"
    caso = "caso"
    instrucciones = "instrucciones"
    metacognicion = "metacognicion"


EXERCISE_TYPE_LABELS = {
    ExerciseType.leccion_interactiva: "Lección",
    ExerciseType.cuaderno_trabajo: "Cuaderno",
    ExerciseType.simulacion_interaccion: "Simulación",
    ExerciseType.mentor_ia: "Mentor IA",
    ExerciseType.herramienta_analisis: "Análisis",
    ExerciseType.herramienta_creacion: "Creación",
    ExerciseType.sistema_tracking: "Tracking",
    ExerciseType.herramienta_revision: "Revisión",
    ExerciseType.simulador_entorno: "Entorno",
    ExerciseType.sistema_progresion: "Progresión",
    ExerciseType.caso: "Caso",
    ExerciseType.instrucciones: "Instrucciones",
    ExerciseType.metacognicion: "Metacognición",
}


def exercise_type_label(kind: str) -> str:
    """Human label for an exercise kind; unknown kinds are returned as-is."""
    try:
        return EXERCISE_TYPE_LABELS[ExerciseType(kind)]
    except ValueError:
        return kind


class ActivityType(str, enum.Enum):
    exercise_started = "exercise_started"
    exercise_completed = "exercise_completed"
    proof_point_completed = "proof_point_completed"
    phase_completed = "phase_completed"


class EnrollmentStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    dropped = "dropped"
