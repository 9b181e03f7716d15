import json
from datetime import date

import pytest

import journal
from journal_tools._utils import note_file_name, this_friday


@pytest.fixture
def note_path(monkeypatch, note_folder):
    monkeypatch.setenv("JOURNAL_NOTE_FOLDER", str(note_folder))
    return note_folder / note_file_name(this_friday(date.today()))


def test_writes_entry(note_path):
    assert journal.main(["standup", "notes"]) == 0

    content = note_path.read_text(encoding="utf-8")
    assert content.startswith("# Journal for week ending at ")
    assert f"## {date.today().isoformat()} - " in content
    assert content.endswith("\n\nstandup notes\n")


def test_header_and_continuation(note_path):
    assert journal.main(["first"]) == 0
    assert journal.main(["...", "second"]) == 0
    assert journal.main(["--header", "Design Review", "discussed", "X"]) == 0

    content = note_path.read_text(encoding="utf-8")
    assert "\nfirst second\n" in content
    assert " - Design Review\n\ndiscussed X\n" in content
    assert content.count(f"## {date.today().isoformat()}") == 1


def test_separate_lines_are_joined_with_newlines(note_path):
    assert journal.main(["line one\n", "line two"]) == 0
    assert note_path.read_text(encoding="utf-8").endswith("\nline one\nline two\n")


def test_time_option(note_path):
    assert journal.main(["--time", "tea"]) == 0
    last = note_path.read_text(encoding="utf-8").splitlines()[-1]
    assert last.endswith(" - tea")
    assert last[2] == ":"


def test_json_output(note_path, capsys):
    assert journal.main(["--json", "hello"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["success"] is True
    assert out["data"]["path"] == str(note_path)
    assert out["data"]["created"] is True


def test_missing_note_folder(capsys):
    assert journal.main(["hello"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("journal: error: ")
    assert "JOURNAL_NOTE_FOLDER" in err


def test_relative_note_folder(monkeypatch, capsys):
    monkeypatch.setenv("JOURNAL_NOTE_FOLDER", "relative/notes")
    assert journal.main(["--json", "hello"]) == 1

    captured = capsys.readouterr()
    assert "absolute" in captured.err
    assert json.loads(captured.out)["success"] is False


def test_failure_is_logged(monkeypatch, note_path, tmp_path):
    note_path.parent.mkdir()
    note_path.write_bytes(b"\xff")
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("JOURNAL_LOG_DIR", str(log_dir))

    assert journal.main(["hello"]) == 1
    log_text = next(log_dir.iterdir()).read_text(encoding="utf-8")
    assert "Journal error: Note file is not valid UTF-8" in log_text


def test_debug_lines(monkeypatch, note_path, capsys):
    monkeypatch.setenv("JOURNAL_DEBUG", "1")
    assert journal.main(["hello"]) == 0
    assert "[DEBUG] note=" in capsys.readouterr().err


def test_env_file_in_cwd(note_folder, capsys):
    with open(".env", "w", encoding="utf-8") as f:
        f.write(f"JOURNAL_NOTE_FOLDER={note_folder}\n")

    assert journal.main(["from dotenv"]) == 0
    assert any(note_folder.iterdir())


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        journal.main(["--version"])
    assert excinfo.value.code == 0
    assert journal.__version__ in capsys.readouterr().out


def test_unreadable_env_file_is_reported(capsys):
    with open(".env", "wb") as f:
        f.write(b"JOURNAL_NOTE_FOLDER=\xff\xfe\n")

    assert journal.main(["hello"]) == 1
    assert capsys.readouterr().err.startswith("journal: error: Unable to read env file")
