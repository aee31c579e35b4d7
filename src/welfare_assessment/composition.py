"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .config import AssessmentSettings
from .infrastructure import LocalFileSystem


def build_cli_dependencies(*, settings: AssessmentSettings) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        settings: Runtime settings (unused today; every command reads local files).
    """
    _ = settings
    return CliDependencies(fs=LocalFileSystem())


app = create_app(build_cli_dependencies)
