"""Reading whole text files such as shader sources."""

from __future__ import annotations

from os import PathLike
from pathlib import Path


class FileReadError(OSError):
    """Raised when a file cannot be read."""


class FileReader:
    """Reads a file completely and keeps its content."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._content: str | None = None

    def read(self, path: str | PathLike[str] | None) -> str:
        """Read the whole file at path, keep and return its text."""
        if path is None:
            raise FileReadError("FileReader.read: input path is None")
        file_path = Path(path)
        if not file_path.is_file():
            self._content = None
            raise FileReadError(f"File does not exist: {file_path}")
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            self._content = None
            raise FileReadError(f"Read file fail: {file_path}") from exc
        try:
            text = data.decode(self._encoding)
        except UnicodeDecodeError as exc:
            self._content = None
            raise FileReadError(
                f"File is not valid {self._encoding}: {file_path}"
            ) from exc
        self._content = text
        return text

    def content(self) -> str | None:
        """Text of the last successful read, or None."""
        return self._content


def read_text(path: str | PathLike[str]) -> str:
    """Read and return the whole text of the file at path."""
    return FileReader().read(path)