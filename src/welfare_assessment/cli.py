"""CLI for the welfare assessment engine.

Commands:
- assess: Score one survey submission and show eligible facilities
- assess-batch: Score a directory of surveys into a CSV report
- validate: Run pre-flight checks on one survey
- show-config: Print the effective assessment config
- facilities: List facilities for a category
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn, Protocol

import typer
from rich import print as rprint
from rich.markup import escape

from . import __version__
from .application.assessment_config import dump_assessment_config, resolve_assessment_config
from .application.batch import run_batch_assessment
from .application.survey_intake import assess_survey, load_survey, validate_survey
from .config import AssessmentSettings
from .domain.assessment import AssessmentEngine
from .domain.categories import CATEGORIES, FACILITIES_BY_CATEGORY
from .exceptions import AssessmentError, InvalidAssessmentDataError, UnknownCategoryError
from .observability import set_log_level
from .protocols import FileSystem


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, settings: AssessmentSettings) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    settings: AssessmentSettings
    deps_builder: DependenciesBuilder

    def build_dependencies(self, settings: AssessmentSettings | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(settings=settings or self.settings)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the welfare-assess entry point.")


DEFAULT_SURVEY_DIR = Path("data/surveys")
DEFAULT_REPORT_OUT = Path("data/processed/assessments.csv")

_COLOR_STYLES = {"white": "bold white", "yellow": "bold yellow", "green": "bold green"}

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Assessment config JSON (overrides ASSESSMENT_CONFIG_PATH)",
    ),
]
StrictOption = Annotated[
    bool | None,
    typer.Option(
        "--strict/--lenient",
        help="Refuse to score invalid surveys (default: ASSESSMENT_STRICT_VALIDATION)",
    ),
]


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _fail(exc: AssessmentError) -> NoReturn:
    rprint(f"[red]✗ {escape(str(exc))}[/red]")
    raise typer.Exit(code=1) from exc


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _settings_for(
    state: CliContext, config_path: Path | None, strict: bool | None = None
) -> AssessmentSettings:
    return state.settings.with_overrides(
        config_path=None if config_path is None else str(config_path),
        strict_validation=strict,
    )


def _build_engine(settings: AssessmentSettings, fs: FileSystem) -> AssessmentEngine:
    return AssessmentEngine(resolve_assessment_config(settings, fs))


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Household needs assessment: survey → scores → category → facilities",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_print_version,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        settings = AssessmentSettings.from_env()
        set_log_level(settings.log_level)
        ctx.obj = CliContext(settings=settings, deps_builder=deps_builder)

    @app.command()
    def assess(
        ctx: typer.Context,
        survey_path: Annotated[Path, typer.Argument(help="Survey submission JSON file")],
        config_path: ConfigOption = None,
        strict: StrictOption = None,
    ) -> None:
        """Score one survey and show the category and eligible facilities."""
        state = _get_context(ctx)
        settings = _settings_for(state, config_path, strict)
        deps = state.build_dependencies(settings)
        try:
            engine = _build_engine(settings, deps.fs)
            survey = load_survey(path=survey_path, fs=deps.fs)
            outcome = assess_survey(survey, engine, strict=settings.strict_validation)
        except InvalidAssessmentDataError as exc:
            rprint(f"[red]✗ Survey rejected ({len(exc.errors)} validation errors):[/red]")
            for error in exc.errors:
                rprint(f"  - {escape(error)}")
            raise typer.Exit(code=1) from exc
        except AssessmentError as exc:
            _fail(exc)

        scores = outcome.scores
        style = _COLOR_STYLES[scores.category_color]
        rprint(f"[green]✓ Assessed:[/green] {outcome.survey_id}")
        rprint(f"  Per-capita income: {scores.per_capita_income:,.2f}")
        rprint(f"  Financial: {scores.financial_score}")
        rprint(f"  Dependents: {scores.dependents_score}")
        rprint(f"  Social status: {scores.social_status_score}")
        rprint(f"  Officer: {scores.officer_score}")
        rprint(f"  Total: {scores.total_score}")
        rprint(f"  Category: [{style}]{scores.category} ({scores.category_color})[/{style}]")
        if not outcome.validation.is_valid:
            rprint("[yellow]  Scored despite validation errors:[/yellow]")
            for error in outcome.validation.errors:
                rprint(f"    - {escape(error)}")
        rprint("  Eligible facilities:")
        for facility in outcome.eligible_facilities:
            rprint(f"    • {facility}")

    @app.command(name="assess-batch")
    def assess_batch(
        ctx: typer.Context,
        input_dir: Annotated[
            Path,
            typer.Option(
                "--input-dir",
                "-i",
                help="Directory of survey JSON files",
            ),
        ] = DEFAULT_SURVEY_DIR,
        out_path: Annotated[
            Path,
            typer.Option(
                "--output",
                "-o",
                help="Output path for the assessment CSV",
            ),
        ] = DEFAULT_REPORT_OUT,
        config_path: ConfigOption = None,
        strict: StrictOption = None,
    ) -> None:
        """Score every survey in a directory and write a CSV report."""
        state = _get_context(ctx)
        settings = _settings_for(state, config_path, strict)
        deps = state.build_dependencies(settings)
        try:
            engine = _build_engine(settings, deps.fs)
            result = run_batch_assessment(
                input_dir=input_dir,
                out_path=out_path,
                engine=engine,
                fs=deps.fs,
                strict=settings.strict_validation,
            )
        except AssessmentError as exc:
            _fail(exc)

        rprint(f"[green]✓ Batch assessment complete:[/green] {result.output_path}")
        rprint(
            f"  {result.total_surveys:,} surveys → {result.assessed:,} assessed, "
            f"{result.rejected:,} rejected"
        )

    @app.command()
    def validate(
        ctx: typer.Context,
        survey_path: Annotated[Path, typer.Argument(help="Survey submission JSON file")],
    ) -> None:
        """Run pre-flight checks on one survey (exit code 1 when invalid)."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        try:
            engine = _build_engine(state.settings, deps.fs)
            survey = load_survey(path=survey_path, fs=deps.fs)
        except AssessmentError as exc:
            _fail(exc)

        validation = validate_survey(survey, engine)
        if validation.is_valid:
            rprint(f"[green]✓ Valid:[/green] {survey.survey_id}")
            return
        rprint(f"[red]✗ Invalid:[/red] {survey.survey_id}")
        for error in validation.errors:
            rprint(f"  - {escape(error)}")
        raise typer.Exit(code=1)

    @app.command(name="show-config")
    def show_config(ctx: typer.Context, config_path: ConfigOption = None) -> None:
        """Print the effective assessment config as JSON."""
        state = _get_context(ctx)
        settings = _settings_for(state, config_path)
        deps = state.build_dependencies(settings)
        try:
            config = resolve_assessment_config(settings, deps.fs)
        except AssessmentError as exc:
            _fail(exc)
        typer.echo(dump_assessment_config(config))

    @app.command()
    def facilities(
        category: Annotated[str, typer.Argument(help="category_1, category_2 or category_3")],
    ) -> None:
        """List the facilities a category is eligible for."""
        if category not in FACILITIES_BY_CATEGORY:
            _fail(UnknownCategoryError(category, CATEGORIES))
        for facility in FACILITIES_BY_CATEGORY[category]:
            rprint(f"• {facility}")

    return app
