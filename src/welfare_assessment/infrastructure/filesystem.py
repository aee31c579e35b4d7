"""Filesystem implementations for infrastructure.

Usage example:
    from pathlib import Path

    from welfare_assessment.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    surveys = fs.list_files(Path("data/surveys"), "*.json")
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..protocols import FileSystem


class LocalFileSystem(FileSystem):
    """Local filesystem implementation."""

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_files(self, path: Path, pattern: str = "*") -> list[Path]:
        return sorted(p for p in path.glob(pattern) if p.is_file())
