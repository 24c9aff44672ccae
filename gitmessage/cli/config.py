"""CLI commands for global configuration management."""

import typer

from gitmessage import global_config
from gitmessage.config import API_KEY_ENV_VAR

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global gitmessage configuration in ~/.gitmessage/",
    add_completion=False,
)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        settings = global_config.load_settings()

        source = "~/.gitmessage/config.yaml" if global_config.is_configured() else "defaults"
        typer.echo(f"Current gitmessage configuration ({source}):")
        typer.echo()
        typer.echo(f"  Endpoint: {settings.api_url}")
        typer.echo(f"  Agent ID: {settings.agent_id}")
        typer.echo(f"  Max Diff Chars: {settings.max_diff_chars}")
        typer.echo(f"  Timeout: {settings.timeout}s")
        typer.echo(f"  Log Level: {settings.log_level}")
        typer.echo(f"  Log Format: {settings.log_format}")
        typer.echo()

        api_key = global_config.get_credential(API_KEY_ENV_VAR)
        if api_key:
            typer.echo(f"  API Key ({API_KEY_ENV_VAR}): {_mask(api_key)}")
        else:
            typer.echo(f"  API Key ({API_KEY_ENV_VAR}): not set")

    except Exception as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("set-key")
def config_set_key() -> None:
    """Set or update the Mistral AI API key."""
    try:
        api_key = typer.prompt("Enter your Mistral AI API key", hide_input=True).strip()
        if not api_key:
            typer.echo("API key cannot be empty.", err=True)
            raise typer.Exit(1)

        global_config.save_credential(API_KEY_ENV_VAR, api_key)

        typer.echo("✓ API key saved")

    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("set-agent")
def config_set_agent(
    agent_id: str = typer.Argument(
        ...,
        help="Mistral AI agent identifier (e.g. ag:xxxx:yyyymmdd:git-commit:zzzz)"
    )
) -> None:
    """Set the Mistral AI agent used to write commit messages."""
    agent_id = agent_id.strip()
    if not agent_id:
        typer.echo("Agent ID cannot be empty.", err=True)
        raise typer.Exit(1)

    try:
        global_config.set_agent_id(agent_id)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Agent set to: {agent_id}")
