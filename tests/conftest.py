"""Pytest configuration.

Every test starts from an environment without JOURNAL_* settings and from an
empty working directory, so a developer's own .env never leaks in.
"""

from datetime import datetime

import pytest

from config import Config


JOURNAL_VARS = ("JOURNAL_NOTE_FOLDER", "JOURNAL_ENV_FILE", "JOURNAL_DEBUG", "JOURNAL_LOG_DIR")

# 2026-10-21 is a Wednesday; its week ends on Friday 2026-10-23.
WEDNESDAY = datetime(2026, 10, 21, 9, 15)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in JOURNAL_VARS:
        # setenv first so the original state is restored even if dotenv sets it later
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)


@pytest.fixture
def note_folder(tmp_path):
    return tmp_path / "notes"


@pytest.fixture
def config(note_folder):
    return Config(note_folder=note_folder)
