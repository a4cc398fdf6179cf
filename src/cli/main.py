"""Main CLI entry point for canvas-sync command.

This module provides the Typer application that serves as the entry point
for the canvas-sync command-line tool. It exposes developer checks over a
project file: a round-trip self-check of the tree adapter, and an export
that strips editor-internal data.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.errors import CLIError
from src.cli.models import CheckSummary, ExitCode, PageCheck
from src.cli.output import OutputHandler
from src.cli.project_file import ProjectFile
from src.document_store.config_loader import SettingsLoader
from src.document_store.errors import DocumentStoreError
from src.document_store.persistence import strip_native_entries
from src.editor_adapter.roundtrip import check_roundtrip

app = typer.Typer(
    name="canvas-sync",
    help="""Developer tools for the canvas editor sync layer.

QUICK START:
  canvas-sync check project.json                     # Round-trip every page
  canvas-sync export project.json --output out.json  # Export without editor data""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Point the 'src' logger at stderr, and optionally at a log file.

    Handlers from an earlier call are removed and closed first, so running
    several commands in one process logs each record once. The root logger
    and third-party loggers are not touched.

    Args:
        verbosity: 0 logs warnings, 1 adds info, 2 and above add debug
        logdir: Directory for a timestamped log file, created if missing
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)

    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)
    )
    app_logger.addHandler(console_handler)

    if not logdir:
        return

    log_dir = Path(logdir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"canvas-sync_{datetime.now():%Y%m%d_%H%M%S}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format)
    )
    app_logger.addHandler(file_handler)
    logger.info(f"Logging to file: {log_file}")


@app.command()
def check(
    project_file: str = typer.Argument(
        ...,
        help="Project file (JSON) whose pages are checked",
        metavar="PROJECT_FILE",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Settings file (defaults to .canvas-sync/config.yaml)",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Convert every page to an editor entry and back, and report differences.

    Exits 0 when every page round-trips cleanly, 2 when any page differs.
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        settings = SettingsLoader.load(config or SettingsLoader.default_path())
        pages = ProjectFile.load(project_file)
    except (CLIError, DocumentStoreError) as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.info(f"Checking {len(pages)} page(s) from {project_file}")

    summary = CheckSummary()
    for page_id, page in pages.items():
        try:
            result = check_roundtrip(page.content, settings.breakpoints)
        except Exception as e:
            logger.exception(f"Round trip crashed for page {page_id}")
            output.error(f"Round trip crashed for page {page_id}: {e}")
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        summary.checks.append(PageCheck(page_id=page_id, label=page.label, result=result))
        output.debug(f"{page_id}: {'passed' if result.passed else 'failed'}")

    output.print_roundtrip_summary(summary)
    raise typer.Exit(summary.exit_code)


@app.command()
def export(
    project_file: str = typer.Argument(
        ...,
        help="Project file (JSON) to export",
        metavar="PROJECT_FILE",
    ),
    output_path: str = typer.Option(
        ...,
        "--output",
        "-o",
        help="Destination file for the exported project",
        metavar="OUT",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Write the project without editor-internal native entries."""
    _configure_logging(verbosity)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        pages = ProjectFile.load(project_file)
        stripped = [page_id for page_id, page in pages.items() if page.native_entry is not None]
        ProjectFile.save(output_path, strip_native_entries(pages))
    except CLIError as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if stripped:
        output.info(f"Stripped editor data from {len(stripped)} page(s)")
    output.success(f"Exported {len(pages)} page(s) to {output_path}")
    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
