import os
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Mapping, Optional


# Fixed so the day header does not depend on the process locale.
WEEKDAY_ABBREVS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

FRIDAY = 5


def days_till_friday(d: date) -> int:
    # isoweekday: monday is 1, next friday is 5 + 7
    return ((FRIDAY + 7) - d.isoweekday()) % 7


def this_friday(d: date) -> date:
    """Return the Friday closing the Saturday..Friday week that contains d."""
    if isinstance(d, datetime):
        d = d.date()
    return d + timedelta(days=days_till_friday(d))


def format_date(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def format_time(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}"


def weekday_abbrev(d: date) -> str:
    return WEEKDAY_ABBREVS[d.isoweekday() - 1]


def note_file_name(friday: date) -> str:
    return f"{format_date(friday)} journal.md"


def iso_now() -> str:
    return datetime.now().isoformat()


def env_flag(name: str, default: str = "0", environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    raw = env.get(name, default).strip().lower()
    return raw not in ("", "0", "false", "no", "off")


def debug(enabled: bool, text: str) -> None:
    if enabled:
        print(f"[DEBUG] {text}", file=sys.stderr)


def _log_line(log_dir: Optional[Path], text: str) -> None:
    if log_dir is None:
        return
    log_file = log_dir / f"{datetime.now().date().isoformat()}.log"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        with log_file.open("a", encoding="utf-8") as f:
            f.write(f"[{iso_now()}] {text}\n")
    except OSError as e:
        print(f"[WARN] Failed to write log {log_file}: {e}", file=sys.stderr)
