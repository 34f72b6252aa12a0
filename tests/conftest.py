from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.td_project import RecordingCompiler, RecordingRunner, TdProject


@pytest.fixture
def td_project(tmp_path: Path) -> TdProject:
    """Provide a TableGen project rooted at the pytest tmp_path."""
    return TdProject(tmp_path)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def compiler() -> RecordingCompiler:
    return RecordingCompiler()
