"""CLI for insertdox."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from insertdox import __version__
from insertdox.config import InsertdoxConfig, load_config
from insertdox.errors import BoilerplateError, ConfigError, ExitCode, InsertdoxError
from insertdox.files import annotate_binary, annotate_file

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}

app = typer.Typer(
    help="Insert Doxygen comment blocks before file headers and function definitions.",
    add_completion=False,
)


@app.command(context_settings=CONTEXT_SETTINGS)
def annotate(
    files: Optional[List[str]] = typer.Argument(
        None, help="Files to annotate in place. Reads stdin when omitted."
    ),
    prototypes: bool = typer.Option(
        False, "-p", "--prototypes", help="Only emit function comments and prototypes."
    ),
    boilerplate: Optional[str] = typer.Option(
        None, "-b", "--boilerplate", help="File copied into every file header comment."
    ),
    config: Optional[str] = typer.Option(None, "-c", "--config", help="Path to config YAML."),
    debug: bool = typer.Option(False, "--debug", help="Log scanner decisions to stderr."),
    version: bool = typer.Option(
        False, "-v", "--version", help="Print the version, then carry on with any files."
    ),
) -> None:
    """Annotate C sources with Doxygen comments."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if version:
        typer.echo(f"insertdox, version {__version__}", err=True)
    result = annotate_command(
        files=files or [],
        prototypes=prototypes,
        boilerplate=boilerplate,
        config=config,
    )
    raise typer.Exit(code=int(result))


def annotate_command(
    files: List[str],
    prototypes: bool = False,
    boilerplate: Optional[str] = None,
    config: Optional[str] = None,
) -> ExitCode:
    try:
        cfg = load_config(config) if config else InsertdoxConfig()
    except ConfigError as exc:
        typer.echo(f"### error: {exc}", err=True)
        return exc.exit_code

    overrides = {}
    if prototypes:
        overrides["prototypes_only"] = True
    if boilerplate:
        overrides["boilerplate"] = boilerplate
    options = cfg.options.model_copy(update=overrides)

    if options.boilerplate and not Path(options.boilerplate).expanduser().is_file():
        typer.echo(f"### error: unable to open '{options.boilerplate}' to read", err=True)
        return ExitCode.boilerplate_missing

    paths: List[Path] = []
    for entry in files:
        if entry.startswith("-"):
            typer.echo(f"### error: unknown option '{entry}'", err=True)
            continue
        paths.append(Path(entry))

    if not paths:
        try:
            annotate_binary(
                typer.get_binary_stream("stdout"), typer.get_binary_stream("stdin"), options
            )
        except InsertdoxError as exc:
            typer.echo(f"### error: {exc}", err=True)
            return exc.exit_code
        return ExitCode.ok

    result = ExitCode.ok
    for path in paths:
        file_options = options.model_copy(update={"filename": path.name})
        try:
            annotate_file(path, file_options, cfg.files)
        except BoilerplateError as exc:
            typer.echo(f"### error: {exc}", err=True)
            return exc.exit_code
        except InsertdoxError as exc:
            typer.echo(f"### error: {exc}", err=True)
            if result is ExitCode.ok:
                result = exc.exit_code
    return result


def main() -> None:
    app()
