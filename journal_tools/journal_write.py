"""Append entries to the weekly journal note.

One note file per Saturday..Friday week, named after its Friday. Every
invocation builds everything it has to add in memory and hands it to the OS
in a single write, so a reader never sees half an entry.

The existing-file branch (scan for today's header, seek, write) takes no lock.
Two invocations racing on the same file can both miss each other's day header
and write it twice; that is accepted rather than guarded against.
"""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional, Tuple

from journal_tools._utils import (
    debug,
    format_date,
    format_time,
    note_file_name,
    this_friday,
    weekday_abbrev,
)
from journal_tools.errors import ConfigurationError, JournalEncodingError, JournalFilesystemError

if TYPE_CHECKING:
    from config import Config


CONTINUATION_MARKER = "..."


@dataclass(frozen=True)
class NoteFile:
    friday: date
    path: Path


@dataclass(frozen=True)
class Message:
    content: str
    is_continuation: bool = False


@dataclass(frozen=True)
class WriteResult:
    path: Path
    created: bool
    added_day_header: bool
    bytes_written: int


def parse_message(text: str) -> Message:
    """Trim text and split off a leading continuation marker."""
    trimmed = text.strip()
    if trimmed.startswith(CONTINUATION_MARKER):
        return Message(trimmed[len(CONTINUATION_MARKER):].lstrip(), is_continuation=True)
    return Message(trimmed)


def get_note_file(note_folder: Path, now: date) -> NoteFile:
    if not note_folder.is_absolute():
        raise ConfigurationError(f"Note folder path must be absolute: {note_folder}")
    friday = this_friday(now)
    return NoteFile(friday=friday, path=note_folder / note_file_name(friday))


def day_header(d: date) -> str:
    return f"## {format_date(d)}"


def week_title(friday: date) -> str:
    return f"# Journal for week ending at {format_date(friday)}"


def logical_end(data: bytes) -> int:
    """Offset just past the last visible byte: a single trailing newline is excluded."""
    if data.endswith(b"\n"):
        return len(data) - 1
    return len(data)


def build_buffer(
    now: datetime,
    message: Message,
    header: Optional[str] = None,
    friday: Optional[date] = None,
    has_today: bool = False,
    allow_continuation: bool = False,
    time_label: bool = False,
) -> str:
    """Build the text appended at the logical end of the note.

    ``friday`` is set when the week title still has to be written. Each block
    starts right after the last visible character of the note and ends with a
    single newline; the message supplies its own leading separator.
    """
    parts = []
    if friday is not None:
        parts.append(week_title(friday))

    if not has_today:
        allow_continuation = False
        parts.append(f"\n\n{day_header(now)} - {weekday_abbrev(now)}\n")

    if header is not None:
        allow_continuation = False
        parts.append(f"\n\n### {format_time(now)} - {header}\n")

    if message.content:
        if message.is_continuation and allow_continuation:
            parts.append(" ")
        else:
            parts.append("\n")
            if time_label:
                parts.append(f"{format_time(now)} - ")
        parts.append(f"{message.content}\n")

    return "".join(parts)


def _create_or_open(path: Path) -> Tuple[BinaryIO, bool]:
    # Exclusive create decides new vs existing; no separate exists() check.
    try:
        return open(path, "xb", buffering=0), True
    except FileExistsError:
        pass
    except OSError as exc:
        raise JournalFilesystemError("Unable to create journal file", path) from exc

    try:
        # not append - the insertion point is chosen by seeking
        return open(path, "r+b", buffering=0), False
    except OSError as exc:
        raise JournalFilesystemError("Failed to open existing journal file", path) from exc


def _scan_existing(f: BinaryIO, path: Path, header: str) -> Tuple[bool, int]:
    """Look for today's header and move the cursor to the logical end of content."""
    try:
        data = f.read()
    except OSError as exc:
        raise JournalFilesystemError("Failed to read journal file", path) from exc

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise JournalEncodingError(path) from exc

    has_today = any(line.startswith(header) for line in text.split("\n"))
    offset = logical_end(data)
    try:
        f.seek(offset)
    except OSError as exc:
        raise JournalFilesystemError("Failed to seek in journal file", path) from exc
    return has_today, offset


def _write_once(f: BinaryIO, path: Path, data: bytes) -> None:
    try:
        written = f.write(data)
    except OSError as exc:
        raise JournalFilesystemError("Unable to write to journal file", path) from exc
    if written is not None and written != len(data):
        raise JournalFilesystemError(f"Short write ({written} of {len(data)} bytes) to journal file", path)


def enter_message(
    config: "Config",
    message: Message,
    header: Optional[str] = None,
    now: Optional[datetime] = None,
    time_label: bool = False,
) -> WriteResult:
    now = now or datetime.now()
    note_file = get_note_file(config.note_folder, now)
    path = note_file.path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise JournalFilesystemError("Unable to create note folder", path.parent) from exc

    f, created = _create_or_open(path)
    with f:
        if created:
            has_today, offset = False, 0
        else:
            has_today, offset = _scan_existing(f, path, day_header(now))
        needs_title = offset == 0
        debug(config.debug, f"note={path} created={created} has_today={has_today} offset={offset}")

        buffer = build_buffer(
            now,
            message,
            header,
            friday=note_file.friday if needs_title else None,
            has_today=has_today,
            allow_continuation=not needs_title,
            time_label=time_label,
        )
        data = buffer.encode("utf-8")
        if data:
            _write_once(f, path, data)

    debug(config.debug, f"wrote {len(data)} bytes")
    return WriteResult(
        path=path,
        created=created,
        added_day_header=not has_today,
        bytes_written=len(data),
    )
