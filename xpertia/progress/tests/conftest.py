"""Builders for program trees used across progress tests."""

import pytest

from xpertia.progress.types import Exercise, Phase, ProofPoint


def make_exercise(id: str, status: str = "available", progress: float = 0, **kwargs):
    return Exercise(id=id, name=kwargs.pop("name", f"Exercise {id}"),
                    status=status, progress=progress, **kwargs)


def make_proof_point(id: str, exercises=(), status="locked", progress=0, **kwargs):
    return ProofPoint(
        id=id,
        name=kwargs.pop("name", f"Proof point {id}"),
        exercises=list(exercises),
        status=status,
        progress=progress,
        **kwargs,
    )


def make_phase(id: str, proof_points=(), **kwargs):
    return Phase(id=id, name=kwargs.pop("name", f"Phase {id}"),
                 proof_points=list(proof_points), **kwargs)


@pytest.fixture
def exercise():
    return make_exercise


@pytest.fixture
def proof_point():
    return make_proof_point


@pytest.fixture
def phase():
    return make_phase
