from __future__ import annotations

import asyncio
from pathlib import Path
from typing import NoReturn, Optional

from rich import print
from rich.console import Console
from rich.table import Table
import typer

from . import __version__
from .auth import AuthService
from .config import AppConfig, default_settings_path, load_config, repo_root
from .exceptions import AuthError, FileTypeError
from .file_input import read_text_file
from .logger import setup_logger
from .post_parser import parse_posts
from .render import export_html
from .storage import JsonFileStore
from .submission import OutputMode, PortfolioWorkspace

app = typer.Typer(add_completion=False, help="Turn a resume and social posts into a career timeline or portfolio.")
console = Console()


def _auth(cfg: AppConfig) -> AuthService:
    return AuthService(JsonFileStore(cfg.state_path))


def _fail(message: str) -> NoReturn:
    print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show INFO logs on stderr"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write DEBUG logs to this file"),
) -> None:
    setup_logger("INFO" if verbose else "WARNING", log_file)


@app.command()
def ping() -> None:
    """
    Sanity check: config files, env wiring, and basic repo paths.
    """
    cfg = load_config()
    root = repo_root()

    print(f"[bold]deepfolio[/bold] version={__version__}")
    print(f"env={cfg.env}")
    print(f"repo_root={root}")
    print(f"settings.yaml exists={default_settings_path().exists()}")

    # Key presence only (never print keys)
    print(f"OPENAI_API_KEY present={cfg.openai_api_key_present}")
    print(f"model={cfg.openai_model}")
    print(f"temperature timeline={cfg.timeline_temperature} simple_portfolio={cfg.simple_portfolio_temperature}")

    print(f"state_path={cfg.state_path}")
    cfg.output_dir.mkdir(parents=True, exist_ok=True)
    print(f"output_dir={cfg.output_dir}")


@app.command()
def signup(
    email: str = typer.Option(..., "--email", prompt=True),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create a local account and log in."""
    try:
        user = _auth(load_config()).signup(email, password)
    except AuthError as e:
        _fail(str(e))
    print(f"signed up and logged in as [bold]{user.email}[/bold]")


@app.command()
def login(
    email: str = typer.Option(..., "--email", prompt=True),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
) -> None:
    try:
        user = _auth(load_config()).login(email, password)
    except AuthError as e:
        _fail(str(e))
    print(f"logged in as [bold]{user.email}[/bold]")


@app.command()
def guest() -> None:
    """Continue as the guest user."""
    user = _auth(load_config()).login_as_guest()
    print(f"logged in as [bold]{user.email}[/bold] (guest)")


@app.command()
def logout() -> None:
    _auth(load_config()).logout()
    print("logged out")


@app.command()
def whoami() -> None:
    user = _auth(load_config()).restore()
    if user is None:
        print("not logged in")
        return
    print(f"{user.email}" + (" (guest)" if user.is_guest else ""))


@app.command("parse-posts")
def parse_posts_cmd(
    posts: Path = typer.Option(..., "--posts", help="Plain-text file, one post per line"),
) -> None:
    """Show how pasted posts are split into dated records."""
    try:
        text = read_text_file(posts)
    except FileTypeError as e:
        _fail(str(e))

    table = Table("date", "text")
    for p in parse_posts(text):
        table.add_row(p.date, p.text)
    console.print(table)


@app.command()
def generate(
    resume: Optional[Path] = typer.Option(None, "--resume", help="Resume as a .txt file"),
    posts: Optional[Path] = typer.Option(None, "--posts", help="Social posts as a .txt file, one per line"),
    mode: OutputMode = typer.Option(OutputMode.DEEPFOLIO, "--mode", help="Which product to export"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory (default: output.base_dir)"),
    as_json: bool = typer.Option(False, "--json", help="Print the combined result as JSON"),
) -> None:
    """
    Generate the timeline and the simple portfolio, then export the selected one as HTML.
    """
    cfg = load_config()

    try:
        user = _auth(cfg).require_user()
    except AuthError as e:
        _fail(str(e))

    ws = PortfolioWorkspace(config=cfg)
    ws.mode = mode
    try:
        if resume is not None:
            ws.load_resume(resume)
        if posts is not None:
            ws.posts_text = read_text_file(posts)
    except FileTypeError as e:
        _fail(str(e))

    with console.status(f"Generating for {user.email}..."):
        outcome = asyncio.run(ws.submit())

    if outcome.result is None:
        _fail(outcome.error or "Nothing was generated.")

    if outcome.error:
        print(f"[yellow]{outcome.error}[/yellow]")

    if as_json:
        console.print_json(outcome.result.model_dump_json(by_alias=True, exclude_none=True))

    if not ws.is_generated:
        raise typer.Exit(code=1)

    try:
        path = export_html(outcome.result, ws.mode, out or cfg.output_dir)
    except ValueError as e:
        print(f"[yellow]{e}[/yellow]")
        return
    except OSError:
        # logged in export_html
        print(f"[yellow]Could not export the {ws.mode.value} portfolio.[/yellow]")
        return
    print(f"exported: {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
