"""
metadata-gen CLI Application.

Main entry point for the metadata-gen command-line interface. Commands
read a document, extract its frontmatter and print metadata, validation
results, keywords or meta tags. Text utilities escape and unescape HTML.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..core.enums import FieldKind, Notation
from ..core.escape import escape_html, unescape_html
from ..core.extractor import compose_document
from ..core.metatags import generate_metatag_groups
from ..core.pipeline import MetadataBundle, PipelineOptions
from ..core.validator import MetadataValidator, ValidationRule
from ..exceptions import MetadataError, ValidationFailedError
from ..exceptions.config_exceptions import ConfigurationError
from ..utils.config import ConfigManager
from ..utils.file_reader import extract_metadata_from_file
from ..utils.logging_config import LoggingManager, LogLevel

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="metadata-gen",
    help="Extract frontmatter metadata and generate HTML meta tags",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def setup_logging(verbose: bool = False, logging_config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Set up logging from the ``logging`` configuration section.

    The root logger gets the configured level and optional log file with
    its format; console output always goes through a Rich handler on
    stderr.

    Args:
        verbose: Enable verbose (DEBUG) logging, overriding the level
        logging_config: Mapping with optional ``level``, ``format`` and
            ``file`` keys (level defaults to warning)

    Returns:
        The package logger
    """
    section = dict(logging_config or {})
    section.setdefault("level", LogLevel.WARNING.name.lower())
    if verbose:
        section["level"] = LogLevel.DEBUG.name.lower()

    manager = LoggingManager.from_config(section, enable_console=False)
    log_level = manager.log_level.value

    rich_handler = RichHandler(
        console=err_console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(log_level)
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logging.getLogger().addHandler(rich_handler)

    package_logger = logging.getLogger("metadata_gen")
    package_logger.setLevel(log_level)
    return package_logger


def _fail(label: str, error: Exception) -> NoReturn:
    logger.debug(f"{label} details", exc_info=True)
    rprint(f"[red]{label}:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def get_config_manager(ctx: typer.Context) -> ConfigManager:
    """
    Get or create the configuration manager for this invocation.

    Logging is reconfigured from the ``logging`` section once the
    configuration loads; --verbose still forces DEBUG.

    Raises:
        typer.Exit: If configuration loading fails
    """
    state = ctx.find_root().obj
    if state.get("config_manager") is None:
        try:
            manager = ConfigManager(config_file=state.get("config_path"), load_env=True)
            manager.load_config()
        except ConfigurationError as e:
            _fail("Configuration Error", e)

        logging_config = dict(manager.get("logging", {}))
        if logging_config.get("file"):
            logging_config["file"] = str(manager.file_ops.resolve_path(logging_config["file"]))
        try:
            setup_logging(state.get("verbose", False), logging_config)
        except (ValueError, OSError) as e:
            _fail("Configuration Error", e)
        state["config_manager"] = manager

    return state["config_manager"]


def get_pipeline_options(ctx: typer.Context) -> PipelineOptions:
    try:
        return PipelineOptions.from_config(get_config_manager(ctx).config)
    except ValueError as e:
        _fail("Configuration Error", e)


def _load_bundle(path: Path, options: PipelineOptions) -> MetadataBundle:
    try:
        return extract_metadata_from_file(path, options)
    except ValidationFailedError as e:
        _print_violations(path, e.violations)
        rprint(f"[red]Error:[/red] {len(e.violations)} validation violation(s) in {escape(str(path))}")
        raise typer.Exit(1)
    except MetadataError as e:
        _fail("Error", e)


def _print_violations(path: Path, violations) -> None:
    table = Table(title=f"Violations in {path}")
    table.add_column("Field", style="cyan")
    table.add_column("Rule", style="red")
    table.add_column("Message")
    for violation in violations:
        table.add_row(escape(violation.path), str(violation.kind), escape(violation.message))
    console.print(table)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: metadatagen.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    metadata-gen: frontmatter extraction, validation and meta tag generation.

    Documents may open with a YAML (---), TOML (+++) or JSON ({) header.

    Common workflows:
    • Inspect metadata: metadata-gen extract post.md
    • Check required fields: metadata-gen validate post.md --require title
    • Render tags: metadata-gen metatags post.md
    """
    setup_logging(verbose)
    ctx.obj = {
        "config_path": config_path,
        "verbose": verbose,
        "config_manager": None,
    }


@app.command()
def extract(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to read"),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--output", "-o", help="Output format"
    ),
    show_body: bool = typer.Option(False, "--body", help="Also print the document body"),
) -> None:
    """Extract frontmatter and show metadata, keywords and meta tags."""
    bundle = _load_bundle(file_path, get_pipeline_options(ctx))

    if output is OutputFormat.JSON:
        data = bundle.to_dict()
        if show_body:
            data["body"] = bundle.body
        typer.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not bundle.has_frontmatter:
        rprint(f"[yellow]No frontmatter found in {escape(str(file_path))}[/yellow]")
    else:
        table = Table(title=f"{bundle.notation} metadata: {file_path}")
        table.add_column("Field", style="cyan")
        table.add_column("Kind", style="magenta")
        table.add_column("Value")
        for key, value in bundle.metadata.items():
            text = value.to_text()
            if text is None:
                text = json.dumps(value.to_native(), ensure_ascii=False, default=str)
            table.add_row(escape(key), str(value.kind), escape(text))
        console.print(table)

        if bundle.keywords:
            rprint(f"[bold]Keywords:[/bold] {escape(', '.join(bundle.keywords))}")
        for tag in bundle.meta_tags:
            console.print(tag, markup=False, highlight=False)

    if show_body:
        typer.echo(bundle.body)


@app.command()
def validate(
    ctx: typer.Context,
    file_paths: List[Path] = typer.Argument(..., help="Documents to validate"),
    require: Optional[List[str]] = typer.Option(
        None,
        "--require",
        "-r",
        help="Required field, optionally typed as FIELD:KIND (repeatable)",
    ),
) -> None:
    """Validate document metadata against configured or given rules."""
    options = get_pipeline_options(ctx)

    rules = list(options.rules)
    for entry in require or []:
        name, _, kind = entry.partition(":")
        try:
            kinds = (FieldKind(kind),) if kind else (FieldKind.ANY,)
        except ValueError:
            rprint(f"[red]Error:[/red] Unknown kind '{escape(kind)}' for field '{escape(name)}'")
            raise typer.Exit(1)
        rules.append(ValidationRule(name, kinds))

    if not rules:
        rprint("[yellow]No validation rules configured; use --require or the 'validation' config key[/yellow]")

    validator = MetadataValidator(rules)
    failed = 0
    for path in file_paths:
        bundle = _load_bundle(path, PipelineOptions(
            keyword_fields=options.keyword_fields,
            field_map=options.field_map,
            separator=options.separator,
        ))
        result = validator.validate(bundle.metadata)
        if result.valid:
            rprint(f"[green]✓[/green] {escape(str(path))}")
        else:
            failed += 1
            _print_violations(path, result.violations)

    if failed:
        rprint(f"[red]Error:[/red] {failed} of {len(file_paths)} document(s) failed validation")
        raise typer.Exit(1)


@app.command()
def keywords(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to read"),
    field: Optional[List[str]] = typer.Option(
        None, "--field", "-f", help="Field to read keywords from (repeatable)"
    ),
) -> None:
    """Print the de-duplicated keywords of a document, one per line."""
    options = get_pipeline_options(ctx)
    if field:
        options.keyword_fields = tuple(field)

    bundle = _load_bundle(file_path, options)
    for keyword in bundle.keywords:
        typer.echo(keyword)


@app.command()
def metatags(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to read"),
    groups: bool = typer.Option(
        False, "--groups", help="Render the platform tag groups (apple, og, twitter, ...)"
    ),
    separator: Optional[str] = typer.Option(
        None, "--separator", "-s", help="Joiner for list values"
    ),
) -> None:
    """Print the HTML meta tags generated from a document's metadata."""
    options = get_pipeline_options(ctx)
    if separator is not None:
        options.separator = separator

    bundle = _load_bundle(file_path, options)
    if groups:
        block = str(generate_metatag_groups(bundle.metadata, options.separator))
    else:
        block = bundle.meta_tag_block

    if block:
        typer.echo(block)


@app.command()
def convert(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Document to read"),
    to: Notation = typer.Option(..., "--to", "-t", help="Target notation"),
    output_file: Optional[Path] = typer.Option(
        None, "--output-file", "-o", help="Write to a file instead of stdout"
    ),
) -> None:
    """Rewrite a document's frontmatter in another notation."""
    bundle = _load_bundle(file_path, PipelineOptions(field_map=()))
    if not bundle.has_frontmatter:
        rprint(f"[red]Error:[/red] No frontmatter found in {escape(str(file_path))}")
        raise typer.Exit(1)

    document = compose_document(bundle.metadata, bundle.body, to)

    if output_file is None:
        typer.echo(document, nl=False)
        return

    try:
        output_file.write_text(document, encoding="utf-8")
    except OSError as e:
        _fail("Error", e)
    rprint(f"[green]Converted {bundle.notation} to {to}:[/green] {escape(str(output_file))}")


@app.command("escape")
def escape_command(text: str = typer.Argument(..., help="Text to escape")) -> None:
    """HTML-escape text (& < > \" ')."""
    typer.echo(escape_html(text))


@app.command("unescape")
def unescape_command(text: str = typer.Argument(..., help="Text to unescape")) -> None:
    """Decode HTML entities produced by escape and numeric references."""
    typer.echo(unescape_html(text))


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli_main()
