"""Main CLI entry point for examgen.

This module defines the Typer application and all CLI commands. The
usual flow is: analyze a sample exam, edit the matrix (and optionally
the saved analysis), generate, export.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, NoReturn

import typer
from pydantic import ValidationError

from examgen import __version__
from examgen.core.config import Settings
from examgen.core.exceptions import DocumentError, ExamGenError, MissingCredentialError
from examgen.core.types import (
    DEFAULT_FALLBACK_CHAIN,
    DEFAULT_MODEL,
    MODEL_DESCRIPTIONS,
    GenerationConfig,
    ModelIdentifier,
)
from examgen.settings import (
    JSONSettingsStore,
    load_generation_config,
    parse_model,
    save_credential,
    save_model,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from examgen.core.protocols import GenerativeBackendProtocol

logger = logging.getLogger(__name__)

# Create the main Typer app
app = typer.Typer(
    name="examgen",
    help="examgen: Generate English exams from a sample exam with Gemini.",
    add_completion=False,
    no_args_is_help=True,
)

# Global state for options
state: dict[str, bool] = {
    "json": False,
    "verbose": False,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"examgen v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results in JSON format.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Show debug logs, including every model attempt.",
        ),
    ] = False,
) -> None:
    """examgen: Generate English exams from a sample exam.

    Analyze a sample exam, adjust the matrix, then generate a new exam
    with the same structure and export it to Word.
    """
    state["json"] = json_output
    state["verbose"] = verbose
    try:
        settings = Settings()
    except ValidationError as e:
        details = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        _fail(f"Invalid EXAMGEN_* configuration: {details}")
    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _mask(credential: str) -> str:
    """Hide all but the edges of an API key."""
    if not credential:
        return "(not set)"
    if len(credential) <= 8:
        return "*" * len(credential)
    return f"{credential[:4]}...{credential[-4:]}"


def _resolve_config(settings: Settings, model: ModelIdentifier | None) -> GenerationConfig:
    """Combine CLI flag, environment and persisted settings.

    Precedence: command-line flag, then environment, then the settings file.
    """
    stored = load_generation_config(JSONSettingsStore(settings.settings_file))
    credential = settings.api_key or stored.credential
    if model is not None:
        primary = model
    elif settings.model:
        primary = parse_model(settings.model)
    else:
        primary = stored.primary_model
    return GenerationConfig(credential=credential, primary_model=primary)


async def _with_backend(
    settings: Settings,
    config: GenerationConfig,
    func: Callable[[GenerativeBackendProtocol | None], Awaitable[Any]],
) -> Any:
    """Run func with a Gemini backend built from settings.

    Without a credential no backend is built; the pipeline then reports
    the missing key itself.
    """
    if not config.credential.strip():
        return await func(None)

    from examgen.adapters.llm.gemini import GeminiLLM

    async with GeminiLLM(
        api_key=config.credential,
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
    ) as backend:
        return await func(backend)


def _run_stage(settings: Settings, config: GenerationConfig, func: Callable[[Any], Awaitable[Any]]) -> Any:
    """Run one pipeline stage and turn examgen errors into CLI errors."""
    try:
        return asyncio.run(_with_backend(settings, config, func))
    except MissingCredentialError as e:
        _fail(f"{e} Run 'examgen config --api-key <KEY>' or set EXAMGEN_API_KEY.")
    except ExamGenError as e:
        _fail(str(e))


@app.command()
def version() -> None:
    """Show the current version."""
    typer.echo(f"examgen v{__version__}")


@app.command()
def models() -> None:
    """List the available models and the fallback order."""
    if state["json"]:
        data = {
            "default": DEFAULT_MODEL.value,
            "fallbackChain": [m.value for m in DEFAULT_FALLBACK_CHAIN],
            "models": [{"id": m.value, "description": MODEL_DESCRIPTIONS[m]} for m in ModelIdentifier],
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo()
    for model in ModelIdentifier:
        marker = "*" if model is DEFAULT_MODEL else " "
        typer.echo(f"  {marker} {model.value:<26} {MODEL_DESCRIPTIONS[model]}")
    typer.echo()
    typer.echo(f"  Fallback order: {' -> '.join(m.value for m in DEFAULT_FALLBACK_CHAIN)}")
    typer.echo("  (* default; the selected model is always tried first)")
    typer.echo()


@app.command()
def config(
    api_key: Annotated[
        str | None,
        typer.Option(
            "--api-key",
            "-k",
            help="Save the Gemini API key.",
        ),
    ] = None,
    model: Annotated[
        ModelIdentifier | None,
        typer.Option(
            "--model",
            "-m",
            help="Save the preferred model.",
        ),
    ] = None,
    show: Annotated[
        bool,
        typer.Option(
            "--show",
            help="Only display the current settings.",
        ),
    ] = False,
) -> None:
    """Save or show the API key and preferred model.

    Examples:
        examgen config --api-key AIza...
        examgen config --model gemini-3-pro-preview
        examgen config --show
    """
    settings = Settings()
    store = JSONSettingsStore(settings.settings_file)

    if show and (api_key is not None or model is not None):
        _fail("--show cannot be combined with --api-key or --model.")

    if api_key is not None:
        if not api_key.strip():
            _fail("The API key must not be empty.")
        save_credential(store, api_key)
    if model is not None:
        save_model(store, model)

    current = load_generation_config(store)
    if state["json"]:
        data = {
            "settingsFile": str(store.path),
            "apiKey": _mask(current.credential),
            "model": current.primary_model.value,
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"  Settings file: {store.path}")
    typer.echo(f"  API key:       {_mask(current.credential)}")
    typer.echo(f"  Model:         {current.primary_model.value}")
    if settings.api_key or settings.model:
        typer.echo("  (EXAMGEN_API_KEY / EXAMGEN_MODEL from the environment take precedence)")


@app.command()
def analyze(
    file: Annotated[
        Path,
        typer.Argument(help="Sample exam (.docx, .txt or .md)."),
    ],
    model: Annotated[
        ModelIdentifier | None,
        typer.Option(
            "--model",
            "-m",
            help="Model to try first (overrides the saved model).",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Save the analysis as JSON (edit it before 'generate' if needed).",
        ),
    ] = None,
) -> None:
    """Analyze a sample exam: difficulty, structure, CEFR level, passage lengths.

    Examples:
        examgen analyze sample.docx
        examgen analyze sample.docx --output analysis.json
    """
    from examgen.documents import extract_text, save_analysis
    from examgen.generators import analyze_exam

    try:
        text = extract_text(file)
    except DocumentError as e:
        _fail(str(e))

    if not text.strip():
        _fail("No text content found in the document.")

    settings = Settings()
    generation_config = _resolve_config(settings, model)
    analysis = _run_stage(
        settings,
        generation_config,
        lambda backend: analyze_exam(text, generation_config, backend=backend),
    )

    if output:
        try:
            save_analysis(analysis, output)
        except (OSError, DocumentError) as e:
            _fail(str(e))

    if state["json"]:
        typer.echo(analysis.model_dump_json(by_alias=True, exclude_none=True, indent=2))
        return

    typer.echo()
    typer.echo(f"  Difficulty: {analysis.difficulty}")
    typer.echo(f"  CEFR level: {analysis.cefr_level}")
    typer.echo(f"  Structure:  {analysis.structure_summary}")
    typer.echo(
        f"  Reading:    ~{analysis.reading_stats.avg_word_count} words/passage"
        f" - {analysis.reading_stats.difficulty_desc}"
    )
    if analysis.cloze_stats:
        typer.echo(
            f"  Cloze test: ~{analysis.cloze_stats.avg_word_count} words/passage"
            f" - {analysis.cloze_stats.difficulty_desc}"
        )
    if output:
        typer.echo()
        typer.echo(f"  Analysis saved to: {output}")
    typer.echo()


@app.command()
def generate(
    analysis_file: Annotated[
        Path,
        typer.Option(
            "--analysis",
            "-a",
            help="Analysis JSON produced by 'examgen analyze --output'.",
        ),
    ],
    matrix: Annotated[
        Path | None,
        typer.Option(
            "--matrix",
            help="Text file with the exam matrix. Defaults to the built-in matrix.",
        ),
    ] = None,
    model: Annotated[
        ModelIdentifier | None,
        typer.Option(
            "--model",
            "-m",
            help="Model to try first (overrides the saved model).",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Save the exam as JSON.",
        ),
    ] = None,
    docx_output: Annotated[
        Path | None,
        typer.Option(
            "--docx",
            help="Export the exam to a Word document.",
        ),
    ] = None,
) -> None:
    """Generate a new exam from a matrix and a sample exam analysis.

    Examples:
        examgen generate --analysis analysis.json --docx exam.docx
        examgen generate -a analysis.json --matrix matrix.txt -o exam.json
    """
    from examgen.documents import export_exam_to_docx, load_analysis, save_exam
    from examgen.generators import DEFAULT_MATRIX, check_exam, generate_exam

    try:
        analysis = load_analysis(analysis_file)
        matrix_text = matrix.read_text(encoding="utf-8") if matrix else DEFAULT_MATRIX
    except (OSError, DocumentError) as e:
        _fail(str(e))

    settings = Settings()
    generation_config = _resolve_config(settings, model)
    exam = _run_stage(
        settings,
        generation_config,
        lambda backend: generate_exam(matrix_text, analysis, generation_config, backend=backend),
    )

    violations = check_exam(exam)
    for violation in violations:
        location = f"section {violation.section_index + 1}"
        if violation.question_id:
            location += f", question {violation.question_id}"
        logger.warning(f"Generated exam ({location}): {violation.message}")

    try:
        if output:
            save_exam(exam, output)
        if docx_output:
            export_exam_to_docx(exam, docx_output)
    except (OSError, DocumentError) as e:
        _fail(str(e))

    if state["json"] or not (output or docx_output):
        typer.echo(exam.model_dump_json(by_alias=True, exclude_none=True, indent=2))
        return

    typer.echo()
    typer.echo(f"  {exam.title}")
    typer.echo(f"  {exam.subtitle} ({exam.duration} minutes)")
    typer.echo(f"  Sections: {len(exam.sections)}  Items: {exam.item_count}")
    if violations:
        typer.echo(f"  Warnings: {len(violations)} contract violation(s), see log output")
    if output:
        typer.echo(f"  Exam saved to: {output}")
    if docx_output:
        typer.echo(f"  Word document: {docx_output}")
    typer.echo()


@app.command()
def export(
    exam_file: Annotated[
        Path,
        typer.Argument(help="Exam JSON produced by 'examgen generate --output'."),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output .docx path.",
        ),
    ] = Path("english_exam.docx"),
) -> None:
    """Export a saved exam to a Word document.

    Example:
        examgen export exam.json --output exam.docx
    """
    from examgen.documents import export_exam_to_docx, load_exam

    try:
        exam = load_exam(exam_file)
        path = export_exam_to_docx(exam, output)
    except (OSError, DocumentError) as e:
        _fail(str(e))

    typer.echo(f"Exported to {path}")


if __name__ == "__main__":
    app()
