"""Command-line implementations of the pipeline capabilities."""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from gitmessage import global_config
from gitmessage.config import API_KEY_ENV_VAR
from gitmessage.logging import get_logger
from gitmessage.pipeline import ConfigSource, MessageSink, Notifier, SinkUnavailableError

logger = get_logger(__name__)


class CredentialConfigSource(ConfigSource):
    """Looks up the API key in the environment, then in ~/.gitmessage/credentials.

    A .env file in the working directory is loaded first, without overriding
    variables that are already set.
    """

    def __init__(self, env_var_name: str = API_KEY_ENV_VAR, load_env_file: bool = True):
        self.env_var_name = env_var_name
        if load_env_file:
            load_dotenv()

    def get_credential(self) -> Optional[str]:
        api_key = os.getenv(self.env_var_name)
        if api_key:
            return api_key
        try:
            return global_config.get_credential(self.env_var_name)
        except global_config.GlobalConfigError as e:
            logger.warning("credentials_unreadable", error=str(e))
            return None


class StdoutSink(MessageSink):
    """Prints the message between separator lines."""

    def publish(self, text: str) -> None:
        typer.echo("")
        typer.echo("=" * 60)
        typer.echo(text)
        typer.echo("=" * 60)
        typer.echo("")


class FileSink(MessageSink):
    """Writes the message to a file.

    Pointing it at the file git passes to a prepare-commit-msg hook puts the
    suggestion in the editor git opens for the commit. Existing content such
    as git's comment template is kept below the message.
    """

    def __init__(self, path: Path, keep_existing: bool = True):
        self.path = Path(path)
        self.keep_existing = keep_existing

    def publish(self, text: str) -> None:
        if not self.path.parent.is_dir():
            raise SinkUnavailableError(f"Could not find commit message file directory: {self.path.parent}")

        try:
            existing = ""
            if self.keep_existing and self.path.exists():
                existing = self.path.read_text()
            content = text + "\n"
            if existing:
                content += "\n" + existing
            self.path.write_text(content)
        except OSError as e:
            raise SinkUnavailableError(f"Could not write commit message to {self.path}: {e}") from e


class TyperNotifier(Notifier):
    """Reports outcomes on stderr."""

    def info(self, text: str) -> None:
        typer.echo(text, err=True)

    def error(self, text: str, remedy: Optional[str] = None) -> None:
        typer.echo(f"Error: {text}", err=True)
        if remedy:
            typer.echo(remedy, err=True)
