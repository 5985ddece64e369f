"""Shared pytest fixtures for card tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from yogacards.poses import PoseRecord, parse_pose

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@pytest.fixture
def mountain_row() -> dict:
    """The Mountain row used throughout the end-to-end checks."""
    return {
        "name": "Mountain",
        "categories": "standing",
        "activationCost": "1",
        "chakraType": "root",
        "standing": "2",
        "activatedEffect": "Breathe deeply and hold",
    }


@pytest.fixture
def mountain(mountain_row: dict) -> PoseRecord:
    return parse_pose(mountain_row)


@pytest.fixture
def make_pose():
    """Factory for poses with sensible defaults."""

    def _make(name="Test Pose", cost=1, categories=("standing",), chakra="", **transitions):
        return PoseRecord(
            name=name,
            cost=cost,
            categories=categories,
            chakra_type=chakra,
            transitions=transitions,
        )

    return _make


@pytest.fixture
def default_csv() -> Path:
    return DATA_DIR / "default-poses.csv"
