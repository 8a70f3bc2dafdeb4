"""Reading the CSV source from disk."""
from __future__ import annotations

from pathlib import Path

from .errors import SourceNotFoundError, SourceUnavailableError


def file_exists(path: Path | str) -> bool:
    return Path(path).expanduser().is_file()


def read_all(path: Path | str) -> str:
    """Return the full UTF-8 text of ``path``.

    Raises :class:`SourceNotFoundError` when nothing exists at ``path`` and
    :class:`SourceUnavailableError` for any other read failure.
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise SourceNotFoundError(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailableError(f"Failed to read CSV file {path}: {exc}") from exc
