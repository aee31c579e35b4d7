"""Protocol definitions for dependency injection.

The domain layer is pure; application use cases depend on these interfaces so
they can be tested with in-memory implementations.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading surveys and config, writing reports."""

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file (UnicodeDecodeError on invalid bytes)."""
        ...

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        """Write a DataFrame as CSV without the index."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True when the path exists."""
        ...

    def list_files(self, path: Path, pattern: str = "*") -> list[Path]:
        """List files under ``path`` matching ``pattern``, sorted."""
        ...
