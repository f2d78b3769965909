"""routeschema command-line interface powered by Typer."""

import json
import logging
from typing import Annotated

import typer

from routeschema.errors import FormatError, PatternError
from routeschema.route import Route
from routeschema.segments import compile_pattern
from routeschema.validators import AdapterValidator

app = typer.Typer(name="routeschema", add_completion=False, no_args_is_help=True)

# Raw strings in, raw strings out.
_RAW = AdapterValidator(dict[str, str])


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Match and format paths against ``/``-delimited patterns."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _build_route(pattern: str, *, exact: bool = True) -> Route:
    try:
        return Route(pattern, _RAW, format_schema=_RAW, exact=exact)
    except PatternError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


def _parse_assignments(assignments: list[str]) -> dict[str, str]:
    """Turn ``name=value`` arguments into a dict."""
    params: dict[str, str] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        if not sep or not name:
            typer.echo(f"Error: expected NAME=VALUE, got {item!r}.", err=True)
            raise typer.Exit(1)
        params[name] = value
    return params


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command("match")
def match_command(
    pattern: Annotated[str, typer.Argument(help="Pattern, e.g. /org/:organizationId.")],
    path: Annotated[str, typer.Argument(help="Concrete path to match.")],
    exact: Annotated[bool, typer.Option("--exact/--no-exact", help="Reject trailing path components.")] = True,
) -> None:
    """Print the parameters extracted from PATH as JSON."""
    route = _build_route(pattern, exact=exact)
    params = route.match(path)
    if params is None:
        typer.echo(f"Error: {path!r} doesn't match pattern {pattern!r}.", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(params, sort_keys=True))


@app.command("format")
def format_command(
    pattern: Annotated[str, typer.Argument(help="Pattern, e.g. /org/:organizationId.")],
    assignments: Annotated[list[str] | None, typer.Argument(help="Parameters as NAME=VALUE.")] = None,
    partial: Annotated[bool, typer.Option("--partial", help="Keep missing parameters as placeholders.")] = False,
) -> None:
    """Render PATTERN with the given parameters."""
    route = _build_route(pattern)
    params = _parse_assignments(assignments or [])
    try:
        path = route.partial_format(params) if partial else route.format(params)
    except FormatError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(path)


@app.command("segments")
def segments_command(
    pattern: Annotated[str, typer.Argument(help="Pattern to compile.")],
) -> None:
    """List the compiled segments of PATTERN."""
    for segment in compile_pattern(pattern):
        value = segment.name if segment.is_param else segment.literal
        typer.echo(f"{segment.kind.value}\t{value}")
