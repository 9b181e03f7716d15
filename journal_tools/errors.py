from pathlib import Path
from typing import Optional


class JournalError(RuntimeError):
    """Base class for every failure that aborts a journal invocation."""


class ConfigurationError(JournalError):
    pass


class JournalFilesystemError(JournalError):
    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)
        self.path = path


class JournalEncodingError(JournalError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Note file is not valid UTF-8 text: {path}")
        self.path = path
