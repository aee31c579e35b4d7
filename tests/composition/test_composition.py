"""Tests for CLI composition root wiring."""

from __future__ import annotations

import typer

from welfare_assessment import composition
from welfare_assessment.config import AssessmentSettings
from welfare_assessment.infrastructure import LocalFileSystem


def test_build_cli_dependencies_uses_local_filesystem() -> None:
    deps = composition.build_cli_dependencies(settings=AssessmentSettings())

    assert isinstance(deps.fs, LocalFileSystem)


def test_app_is_wired_at_import() -> None:
    assert isinstance(composition.app, typer.Typer)
