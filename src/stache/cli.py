"""Stache CLI Main Entry Point

Renders mustache templates against a JSON or YAML document.

Usage:
    stache data.json page.mustache           # Render to stdout
    stache data.yaml a.mustache b.mustache   # Render several templates
    cat data.json | stache - page.mustache   # Read data from stdin
    stache -o out.html data.json page.mustache
    stache -P partials/ data.json page.mustache
    stache -c stache.yaml data.json page.mustache
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, TextIO

import typer

from ._version import __version__
from .config import StacheConfig, load_config
from .errors import StacheError
from .logs import setup_logging
from .providers.data import DataProvider, load_data
from .render import render

log = logging.getLogger(__name__)

typer_app = typer.Typer(add_completion=False)


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=exit_code)


def read_template(path: Path) -> str:
    """Read a template file, ``-`` meaning stdin."""
    if str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        exit_with_error(f"Can't open file: {path}")


def build_config(
    config_file: Optional[Path],
    strict: bool,
    no_escape: bool,
    partials: Optional[List[Path]],
) -> StacheConfig:
    """Load the config file, if any, and apply command line overrides."""
    if config_file is not None:
        try:
            config = load_config(config_file)
        except FileNotFoundError as e:
            exit_with_error(str(e))
        except Exception as e:
            exit_with_error(f"Invalid config file {config_file}: {e}")
    else:
        config = StacheConfig()

    if strict:
        config.strict = True
    if no_escape:
        config.escape = False
    if partials:
        config.partials = list(partials) + config.partials
    return config


def render_templates(
    data: object, templates: List[Path], config: StacheConfig, output: TextIO
) -> int:
    """Render each template to ``output``; returns the number of failures.

    A failing template is reported and skipped, the others still render.
    """
    failures = 0
    for path in templates:
        template = read_template(path)
        search = list(config.partials)
        if str(path) != "-":
            search.append(path.parent)
        provider = DataProvider(
            data, strict=config.strict, escape=config.escape, partials_path=search
        )
        try:
            result = render(template, provider, config.render)
        except StacheError as e:
            failures += 1
            log.debug(f"{path}: {e}")
            typer.secho(
                f"Template error {e.label} (file {path})",
                err=True,
                fg=typer.colors.RED,
            )
            continue
        log.info(f"Rendered {path}")
        output.write(result)
    output.flush()
    return failures


@typer_app.command()
def cli(
    data_file: Optional[str] = typer.Argument(
        None, metavar="DATA", help="JSON or YAML data file, '-' for stdin."
    ),
    templates: Optional[List[Path]] = typer.Argument(
        None, metavar="TEMPLATE...", help="Templates to render."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write to file instead of stdout."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to a stache.yaml file."
    ),
    partials: Optional[List[Path]] = typer.Option(
        None, "-P", "--partials", help="Directory searched for partials."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on names missing from the data."
    ),
    no_escape: bool = typer.Option(
        False, "--no-escape", help="Do not HTML-escape substitutions."
    ),
    check: bool = typer.Option(
        False, "--check", help="Exit with status 2 if any template fails."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Render mustache templates against a JSON or YAML document.

    \b
    Examples:
        stache data.json page.mustache
        stache -P partials data.yaml page.mustache
        cat data.json | stache - page.mustache
    """
    if version:
        typer.echo(f"stache {__version__}")
        raise typer.Exit()

    setup_logging(verbose)

    if data_file is None:
        exit_with_error("Missing DATA argument (see --help)", 2)

    config = build_config(config_file, strict, no_escape, partials)

    try:
        data = load_data(data_file)
    except Exception as e:
        typer.secho(f"Can't load data file {data_file}", err=True, fg=typer.colors.RED)
        exit_with_error(f"   reason: {e}")

    template_list: List[Path] = list(templates) if templates else []
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as out:
            failures = render_templates(data, template_list, config, out)
    else:
        failures = render_templates(data, template_list, config, sys.stdout)

    if failures and check:
        raise typer.Exit(code=2)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    typer_app(args=argv)


if __name__ == "__main__":
    app()
