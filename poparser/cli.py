from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn, Optional
import logging

import portalocker
import typer

from poparser import hash as pohash
from poparser.catalog import Catalog
from poparser.config import ParserConfig, default_config, load_config
from poparser.errors import ParseError
from poparser.parser import parse_file


def _exit_with_error(message: str, code: int = 1) -> NoReturn:
    """Print error message to stderr and exit with given code."""
    typer.secho(f"Error: {message}", fg="red", err=True)
    raise typer.Exit(code)


app = typer.Typer(add_completion=False, no_args_is_help=True)


@dataclass
class CLIState:
    log_level: str = "WARNING"
    config: ParserConfig = field(default_factory=default_config)


def _require_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if isinstance(state, CLIState):
        return state
    return CLIState()


def _resolve_config(state: CLIState, config_path: Optional[Path]) -> ParserConfig:
    if config_path is None:
        return state.config
    try:
        return load_config(config_path)
    except Exception as exc:
        _exit_with_error(f"Invalid config {config_path}: {exc}")


def _load_catalog(path: Path, config: ParserConfig) -> Catalog:
    try:
        return parse_file(path, config)
    except ParseError as exc:
        _exit_with_error(f"{path}: {exc}")
    except portalocker.exceptions.LockException:
        _exit_with_error(f"{path} is locked by another process.")
    except (OSError, UnicodeDecodeError) as exc:
        _exit_with_error(f"Cannot read {path}: {exc}")


def catalog_payload(catalog: Catalog) -> dict:
    payload = {
        "headers": catalog.headers,
        "entries": [entry.as_dict() for entry in catalog],
    }
    payload["sha256"] = pohash.sha256_hex_bytes(pohash.canonical_json_bytes(payload))
    return payload


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level"),
) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        _exit_with_error(f"Unknown log level: {log_level}")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = CLIState(log_level=log_level.upper())


@app.command()
def inspect(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    config_path: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    state = _require_state(ctx)
    config = _resolve_config(state, config_path)
    catalog = _load_catalog(path, config)
    entries = catalog.entries
    header = catalog.header
    typer.echo(f"File: {path}")
    if header is None:
        typer.echo("Header: none")
    else:
        typer.echo(f"Header: {len(header.lines)} lines")
        if header.nplurals is not None:
            typer.echo(f"Plural forms: {header.nplurals}")
    typer.echo(f"Entries: {len(entries)}")
    typer.echo(f"Fuzzy: {sum(1 for entry in entries if entry.is_fuzzy)}")
    typer.echo(f"Plural: {sum(1 for entry in entries if entry.is_plural)}")
    typer.echo(f"Untranslated: {sum(1 for entry in entries if not entry.is_translated)}")


@app.command()
def dump(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    config_path: Optional[Path] = typer.Option(None, "--config"),
    out: Optional[Path] = typer.Option(None, "--out"),
) -> None:
    state = _require_state(ctx)
    config = _resolve_config(state, config_path)
    catalog = _load_catalog(path, config)
    text = pohash.canonical_json(catalog_payload(catalog))
    if out is None:
        typer.echo(text)
        return
    out.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"Wrote {len(catalog)} entries to {out}.")


if __name__ == "__main__":
    app()
