"""Main CLI command for generating commit messages."""

from pathlib import Path
from typing import Optional

import typer

from gitmessage import __version__, global_config
from gitmessage.host import CredentialConfigSource, FileSink, StdoutSink, TyperNotifier
from gitmessage.logging import configure_logging, get_logger
from gitmessage.pipeline import CommitMessagePipeline


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gitmessage {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-C",
        help="Directory inside the git working tree to describe",
    ),
    message_file: Optional[Path] = typer.Option(
        None,
        "--message-file",
        "-m",
        help="Write the message to this file (e.g. the file passed to a prepare-commit-msg hook)",
    ),
    max_diff_chars: Optional[int] = typer.Option(
        None,
        "--max-diff-chars",
        min=1,
        help="Maximum diff characters sent to the agent",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each pipeline step to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate an AI-powered git commit message from the working tree changes."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = global_config.load_settings()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)

    if max_diff_chars is not None:
        settings = settings.model_copy(update={"max_diff_chars": max_diff_chars})

    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
    )

    sink = FileSink(message_file) if message_file else StdoutSink()
    pipeline = CommitMessagePipeline(
        config_source=CredentialConfigSource(),
        sink=sink,
        notifier=TyperNotifier(),
        settings=settings,
        logger=get_logger("gitmessage"),
    )

    typer.echo("Generating commit message...", err=True)
    result = pipeline.run(repo)

    if result.outcome.is_error:
        raise typer.Exit(1)
