"""
Student progress core for the Xpertia learning platform.
Platform-agnostic: usable from the portal backend, scripts or a CLI.
"""

# Enums
from .enums import (
    ProgressStatus, ExerciseProgressStatus, ExerciseType, ActivityType,
    EnrollmentStatus, exercise_type_label,
)

# Session / configuration
from .session import Session
from .config import (
    get_api_url, get_autosave_interval, session_from_env, init_sentry,
    check_required_env_vars, ConfigError,
)

# Read models and derivation (pure, synchronous)
from .progress import (
    Phase, ProofPoint, Exercise, ProgramStructure, Enrollment,
    derive_status, derive_progress, derive_proof_point, derive_phase,
    display_progress, select_highlight, select_continuation,
    merge_exercise_progress, apply_progress_summary, dashboard_stats,
)

# Student API (async functions - must be awaited)
from .api import ApiClient, APIError, StudentApi

# Auto-save
from .autosave import AutoSaveCoordinator, AutoSaveError

__all__ = [
    # Enums
    'ProgressStatus', 'ExerciseProgressStatus', 'ExerciseType', 'ActivityType',
    'EnrollmentStatus', 'exercise_type_label',
    # Session / configuration
    'Session', 'get_api_url', 'get_autosave_interval', 'session_from_env',
    'init_sentry', 'check_required_env_vars', 'ConfigError',
    # Progress
    'Phase', 'ProofPoint', 'Exercise', 'ProgramStructure', 'Enrollment',
    'derive_status', 'derive_progress', 'derive_proof_point', 'derive_phase',
    'display_progress', 'select_highlight', 'select_continuation',
    'merge_exercise_progress', 'apply_progress_summary', 'dashboard_stats',
    # API
    'ApiClient', 'APIError', 'StudentApi',
    # Auto-save
    'AutoSaveCoordinator', 'AutoSaveError',
]
