"""Command line helper for the Strava OAuth flow.

Prints the authorization URI to open in a browser, then exchanges the callback
URL Strava redirects to for a token. Configuration comes from the environment
(see strava_auth.config.settings).
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from strava_auth.config.settings import get_settings
from strava_auth.core.logger import setup_logger_from_settings
from strava_auth.integrations.strava.client import StravaAuthClient
from strava_auth.integrations.strava.errors import StravaAuthError
from strava_auth.integrations.strava.tokens import Token

app = typer.Typer(help="Strava OAuth2 authorization code helper", no_args_is_help=True)
console = Console()


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "****"
    return f"{secret[:4]}****"


def _build_client() -> StravaAuthClient:
    try:
        settings = get_settings()
        setup_logger_from_settings(settings)
        return StravaAuthClient.from_settings(settings)
    except StravaAuthError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


def _render_token(token: Token, show_secrets: bool) -> Table:
    table = Table(title="Strava token", show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    table.add_row("token_type", token.token_type)
    table.add_row("access_token", token.access_token if show_secrets else _mask(token.access_token))
    table.add_row("refresh_token", token.refresh_token if show_secrets else _mask(token.refresh_token))
    table.add_row("expires_at", f"{token.expires_at} ({token.expires_at_datetime.isoformat()})")
    table.add_row("expires_in", str(token.expires_in))
    table.add_row("athlete_id", str(token.athlete.get("id", "")))
    return table


@app.command("authorize-url")
def authorize_url() -> None:
    """Print the Strava authorization URI."""
    client = _build_client()
    console.print(client.get_authorization_uri(), soft_wrap=True)


@app.command()
def exchange(
    callback_url: str = typer.Argument(..., help="URL Strava redirected to, absolute or path-only"),
    base_url: str | None = typer.Option(None, "--base-url", help="Base to resolve a relative callback URL against"),
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print tokens unmasked"),
) -> None:
    """Exchange the code in a callback URL for an access/refresh token pair."""
    client = _build_client()
    try:
        token = asyncio.run(client.get_token(callback_url, base_url))
    except (StravaAuthError, httpx.HTTPError) as e:
        console.print(f"[bold red]Token exchange failed:[/bold red] {e}")
        raise typer.Exit(code=1) from e
    console.print(_render_token(token, show_secrets))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
