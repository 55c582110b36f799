"""
cli.py

PURPOSE: Command-line interface for Codestral code tasks.
DEPENDENCIES: typer, rich

ARCHITECTURE NOTES:
The CLI provides commands for:
- run: complete, fix, test or FIM-prompt a piece of code
- infill: fill the gap between a prefix and a suffix (FIM endpoint)
- check-key: probe the API key against the model listing
- config: show the current configuration
Each command builds one client from settings and closes it on exit.
"""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, NoReturn, TypeVar

import typer
from rich.logging import RichHandler

from codestral_mcp import __version__
from codestral_mcp.assistant import CodeAssistant, ToolResult
from codestral_mcp.config import Settings, get_settings
from codestral_mcp.llm import (
    ChatOptions,
    CodestralClient,
    CodestralError,
    ConfigError,
    FimOptions,
    TaskKind,
    create_codestral_client,
)
from codestral_mcp.observability import init_telemetry, shutdown_telemetry
from codestral_mcp.ui import plain

app = typer.Typer(
    name="codestral-mcp",
    help="Complete, fix and test code with Mistral Codestral.",
    add_completion=False,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        plain.print_message(f"codestral-mcp version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Codestral MCP - Code assistance backed by Mistral Codestral."""
    pass


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr through rich."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=plain.err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _read_source(path: Path | None) -> str:
    """Read code from a file, or from stdin when no path is given."""
    if path is None:
        return sys.stdin.read()
    return path.read_text()


def _fail(message: str, as_json: bool) -> NoReturn:
    """Report a failure and exit with status 1."""
    if as_json:
        plain.print_json(ToolResult(text=message, is_error=True).to_dict())
    else:
        plain.print_error(message)
    raise typer.Exit(1)


def _run_with_client(
    settings: Settings,
    work: Callable[[CodestralClient], Awaitable[T]],
    as_json: bool = False,
) -> T:
    """
    Build a client, run work against it and close it.

    Exits with status 1 on configuration or client errors, reported as a
    {text, isError} envelope when as_json is set.
    """
    configure_logging(settings)
    init_telemetry(settings.otel)

    try:
        client = create_codestral_client(settings.mistral)
    except ConfigError as e:
        _fail(f"Error: {e.message}. Set MISTRAL_API_KEY to use this command.", as_json)

    async def runner() -> T:
        async with client:
            return await work(client)

    try:
        return asyncio.run(runner())
    except CodestralError as e:
        _fail(f"Error: {e.message}", as_json)
    finally:
        shutdown_telemetry()


@app.command()
def run(
    source: Annotated[
        Path | None,
        typer.Argument(
            help="File with the code to process (reads stdin when omitted)",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ] = None,
    task: Annotated[
        TaskKind,
        typer.Option(
            "--task",
            "-t",
            help="Task to perform",
            case_sensitive=False,
        ),
    ] = TaskKind.COMPLETE,
    language: Annotated[
        str | None,
        typer.Option(
            "--language",
            "-l",
            help="Programming language of the code",
        ),
    ] = None,
    suffix_file: Annotated[
        Path | None,
        typer.Option(
            "--suffix-file",
            "-s",
            help="File with the code the result must end with (fim task only)",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ] = None,
    temperature: Annotated[
        float,
        typer.Option(
            "--temperature",
            help="Sampling temperature (0.0-2.0)",
            min=0.0,
            max=2.0,
        ),
    ] = 0.7,
    max_tokens: Annotated[
        int,
        typer.Option(
            "--max-tokens",
            help="Maximum tokens in the answer",
            min=1,
        ),
    ] = 1000,
    check_key: Annotated[
        bool,
        typer.Option(
            "--check-key",
            help="Probe the API key before running the task",
        ),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the result as a {text, isError} JSON envelope",
        ),
    ] = False,
) -> None:
    """Run a code task and print the extracted code."""
    settings = get_settings()
    code = _read_source(source)
    suffix = suffix_file.read_text() if suffix_file else None
    if suffix is not None and task != TaskKind.FIM:
        plain.print_error("--suffix-file only applies to the fim task.")
        raise typer.Exit(2)

    options = ChatOptions(model=settings.mistral.model, temperature=temperature, max_tokens=max_tokens)

    async def do_run(client: CodestralClient) -> ToolResult:
        if check_key:
            await client.validate_credential()
        assistant = CodeAssistant(client, chat_options=options)
        return ToolResult(text=await assistant.run(task, code, language, suffix))

    result = _run_with_client(settings, do_run, as_json=as_json)

    if as_json:
        plain.print_json(result.to_dict())
    else:
        plain.print_code(result.text, language)


@app.command()
def infill(
    prefix_file: Annotated[
        Path,
        typer.Argument(
            help="File with the code before the gap",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ],
    suffix_file: Annotated[
        Path | None,
        typer.Option(
            "--suffix-file",
            "-s",
            help="File with the code after the gap",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ] = None,
    max_tokens: Annotated[
        int,
        typer.Option(
            "--max-tokens",
            help="Maximum tokens in the answer",
            min=1,
        ),
    ] = 1000,
) -> None:
    """Fill the gap between a prefix and an optional suffix."""
    settings = get_settings()
    prefix = prefix_file.read_text()
    suffix = suffix_file.read_text() if suffix_file else None

    async def do_infill(client: CodestralClient) -> str:
        assistant = CodeAssistant(client, fim_options=FimOptions(max_tokens=max_tokens))
        return await assistant.infill(prefix, suffix)

    plain.print_code(_run_with_client(settings, do_infill))


@app.command("check-key")
def check_key_cmd() -> None:
    """Check that the configured API key is accepted."""
    settings = get_settings()

    async def do_check(client: CodestralClient) -> None:
        await client.validate_credential()

    _run_with_client(settings, do_check)
    plain.print_success("Successfully connected to Mistral API")


@app.command("config")
def config_cmd() -> None:
    """Show the current configuration."""
    settings = get_settings()
    plain.print_message("[bold]Current Configuration:[/bold]")
    plain.print_message(f"  Log level: {settings.log_level}")
    plain.print_message(f"  Debug: {settings.debug}")
    plain.print_message("")
    plain.print_message("[bold]Mistral Settings:[/bold]")
    plain.print_message(f"  Base URL: {settings.mistral.base_url}")
    plain.print_message(f"  Model: {settings.mistral.model.value}")
    plain.print_message(f"  Timeout: {settings.mistral.timeout}s")
    plain.print_message(f"  Min request interval: {settings.mistral.min_request_interval}s")
    api_key_status = "set" if settings.mistral.api_key.strip() else "not set"
    plain.print_message(f"  API Key: {api_key_status}")
    plain.print_message("")
    plain.print_message("[bold]OpenTelemetry Settings:[/bold]")
    plain.print_message(f"  Enabled: {settings.otel.enabled}")
    plain.print_message(f"  Service name: {settings.otel.service_name}")
    endpoint_status = settings.otel.endpoint if settings.otel.endpoint else "(console only)"
    plain.print_message(f"  Endpoint: {endpoint_status}")


if __name__ == "__main__":
    app()
