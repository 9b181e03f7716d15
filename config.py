import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from journal_tools._utils import env_flag
from journal_tools.errors import ConfigurationError


NOTE_FOLDER_VAR = "JOURNAL_NOTE_FOLDER"


@dataclass(frozen=True)
class Config:
    note_folder: Path
    debug: bool = False
    log_dir: Optional[Path] = None


def load_env_file(env_file: Optional[str] = None) -> Optional[Path]:
    """Seed os.environ from a dotenv file without overriding what is already set.

    Uses JOURNAL_ENV_FILE when no path is given, falling back to ./.env.
    Returns the file that was loaded, if any.
    """
    raw = env_file or os.environ.get("JOURNAL_ENV_FILE")
    env_path = Path(raw).expanduser() if raw else Path.cwd() / ".env"
    if not env_path.is_file():
        if raw:
            raise ConfigurationError(f"Env file not found: {env_path}")
        return None
    try:
        load_dotenv(env_path, override=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Unable to read env file: {env_path}") from exc
    return env_path


def resolve_note_folder(environ: Mapping[str, str]) -> Path:
    raw = environ.get(NOTE_FOLDER_VAR, "").strip()
    if not raw:
        raise ConfigurationError(f"Environment variable {NOTE_FOLDER_VAR} must be defined")
    note_folder = Path(raw).expanduser()
    if not note_folder.is_absolute():
        raise ConfigurationError(f"Note folder path must be absolute: {raw}")
    return note_folder


def resolve_log_dir(environ: Mapping[str, str]) -> Optional[Path]:
    raw = environ.get("JOURNAL_LOG_DIR", "").strip()
    if not raw:
        return None
    log_dir = Path(raw).expanduser()
    if not log_dir.is_absolute():
        raise ConfigurationError(f"Log folder path must be absolute: {raw}")
    return log_dir


def make_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    env = os.environ if environ is None else environ
    return Config(
        note_folder=resolve_note_folder(env),
        debug=env_flag("JOURNAL_DEBUG", environ=env),
        log_dir=resolve_log_dir(env),
    )
