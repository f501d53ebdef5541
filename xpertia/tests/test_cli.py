"""Tests for the command-line progress viewer (root main.py)."""

import os
from unittest.mock import AsyncMock, patch

import pytest

import main
from xpertia.progress.types import ProgramStructure

STRUCTURE = ProgramStructure.model_validate(
    {
        "programId": "programa:1",
        "programName": "Emprendimiento",
        "phases": [
            {
                "id": "fase:1",
                "nombre": "Descubrimiento",
                "orden": 1,
                "proofPoints": [
                    {
                        "id": "proof_point:1",
                        "nombre": "Problema",
                        "orden": 1,
                        # Stale server values are recomputed from exercises
                        "status": "locked",
                        "progress": 0,
                        "exercises": [
                            {"id": "e1", "nombre": "Lectura", "tipo": "leccion_interactiva",
                             "orden": 1, "status": "completed", "progress": 100},
                            {"id": "e2", "nombre": "Cuaderno", "tipo": "cuaderno_trabajo",
                             "orden": 2, "duracionEstimada": 30, "status": "in_progress",
                             "progress": 50},
                        ],
                    }
                ],
            }
        ],
    }
)


def test_render_structure_recomputes_statuses():
    lines = main.render_structure(STRUCTURE)

    assert lines[0] == "Emprendimiento"
    assert lines[1] == "  Phase 1: Descubrimiento [in_progress] 75%"
    assert lines[2] == "    Problema [in_progress] 75%"
    assert lines[3] == "      -> Cuaderno (Cuaderno, 30 min)"


@pytest.mark.asyncio
async def test_show_progress_prints_tree_and_continuation(capsys):
    with patch("main.StudentApi") as mock_api_class:
        mock_api_class.return_value.get_structure = AsyncMock(return_value=STRUCTURE)
        code = await main.show_progress("inscripcion:1", "http://api.test", True)

    out = capsys.readouterr().out
    assert code == 0
    assert "Phase 1: Descubrimiento" in out
    assert "Continue with: Cuaderno (Problema, Descubrimiento)" in out


def test_main_fails_without_required_env(capsys):
    with patch.dict(os.environ, {}, clear=True):
        assert main.main(["inscripcion:1"]) == 1
