# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application: serve the language server, locate flake8, lint a file once."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..config.models import DEFAULT_MAX_PROBLEMS
from ..config.session import Session
from ..logging import configure_logging, fail, info, ok, warn
from ..models import DiagnosticBatch, ValidationRequest
from ..pipeline.publisher import RecordingPublisher
from ..pipeline.validator import DocumentValidator
from ..server import create_server
from ..tool_env.locator import DEFAULT_EXECUTABLE, BinaryLocator

app = typer.Typer(help="Surface flake8 diagnostics in editors over the language server protocol.")

ExecutableOption = Annotated[
    str,
    typer.Option("--flake8-name", help="Executable name searched for on PATH."),
]
SearchPathOption = Annotated[
    str | None,
    typer.Option("--search-path", help="Override PATH used to locate the executable."),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level written to stderr."),
]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate messages with emoji.")]


@app.command("serve")
def serve_command(
    tcp: Annotated[bool, typer.Option("--tcp", help="Listen on TCP instead of stdio.")] = False,
    host: Annotated[str, typer.Option("--host", help="Host bound in TCP mode.")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port bound in TCP mode.")] = 2087,
    name: ExecutableOption = DEFAULT_EXECUTABLE,
    search_path: SearchPathOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Run the language server."""

    configure_logging(log_level.upper())
    server = create_server(locator=BinaryLocator(name, search_path=search_path))
    if tcp:
        server.start_tcp(host, port)
    else:
        server.start_io()


@app.command("locate")
def locate_command(
    name: ExecutableOption = DEFAULT_EXECUTABLE,
    search_path: SearchPathOption = None,
    log_level: LogLevelOption = "WARNING",
    use_emoji: EmojiOption = True,
) -> None:
    """Report the flake8 executable the server would use."""

    configure_logging(log_level.upper())
    binary = BinaryLocator(name, search_path=search_path).locate()
    if binary is None:
        fail(f"No usable {name} executable found on the search path", use_emoji=use_emoji)
        raise typer.Exit(code=1)
    ok(f"{binary.path} (version {binary.version})", use_emoji=use_emoji)


def _render_batch(batch: DiagnosticBatch, path: Path) -> None:
    table = Table(title=str(path))
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    for diagnostic in batch.diagnostics:
        start = diagnostic.range.start
        table.add_row(str(start.line + 1), str(start.character + 1), diagnostic.severity.value, diagnostic.message)
    Console().print(table)


@app.command("check")
def check_command(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True, help="File to lint.")],
    max_problems: Annotated[
        int,
        typer.Option("--max-problems", min=0, help="Maximum diagnostics reported (0 means the default)."),
    ] = DEFAULT_MAX_PROBLEMS,
    root: Annotated[
        Path | None,
        typer.Option("--root", file_okay=False, help="Working directory for flake8; defaults to the current one."),
    ] = None,
    name: ExecutableOption = DEFAULT_EXECUTABLE,
    search_path: SearchPathOption = None,
    log_level: LogLevelOption = "WARNING",
    use_emoji: EmojiOption = True,
) -> None:
    """Run the validation pipeline once against PATH and print its diagnostics."""

    configure_logging(log_level.upper())
    session = Session()
    session.on_initialize(root or Path.cwd(), BinaryLocator(name, search_path=search_path))
    session.apply_settings({"flake8": {"maxNumberOfProblems": max_problems}})
    if not session.linting_enabled:
        fail(f"No usable {name} executable found on the search path", use_emoji=use_emoji)
        raise typer.Exit(code=2)

    publisher = RecordingPublisher()
    validator = DocumentValidator(session, publisher)
    batch = asyncio.run(validator.validate(ValidationRequest(document_uri=path.as_uri())))
    if batch is None:
        warn("No diagnostics were published", use_emoji=use_emoji)
        raise typer.Exit(code=2)
    if not batch.diagnostics:
        ok(f"{path}: no problems found", use_emoji=use_emoji)
        return
    _render_batch(batch, path)
    info(f"{len(batch.diagnostics)} problem(s) reported", use_emoji=use_emoji)
    raise typer.Exit(code=1)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
