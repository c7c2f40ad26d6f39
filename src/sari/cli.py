"""
sari CLI - evaluate arithmetic expressions from the command line.

    $ sari "(1 + 2) * 3" "7 / 2"
    9
    3

Each result is printed to stdout and each error message to stderr, in
argument order. The exit status is 0 only if every expression succeeded.
Expressions starting with "-" must come after "--":

    $ sari -- "-7 / 2"
    -3
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text

from sari._version import get_version
from sari.config import ConfigError, SariConfig, load_config
from sari.errors import EvalError
from sari.parser import evaluate
from sari.source import SourceMap
from sari.tokenizer import TokenKind, tokenize

logger = logging.getLogger(__name__)

USAGE = "Usage: sari <expr>..."
LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

app = typer.Typer(
    help="Evaluate integer arithmetic expressions (+, -, *, /, parentheses) "
    "with wrapping 32-bit signed arithmetic.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"sari {get_version()}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send log records to stderr so they never mix with results on stdout."""
    logging.basicConfig(level=level, stream=sys.stderr, format=LOG_FORMAT)
    logging.getLogger("sari").setLevel(level)


def print_error(message: str) -> None:
    err_console.print(Text(message, style="bold red"))


def _evaluate_one(source: str) -> bool:
    try:
        value = evaluate(source)
    except EvalError as e:
        logger.debug("Failed %r: %s", source, e)
        print_error(e.message)
        return False
    logger.debug("Evaluated %r -> %d", source, value)
    typer.echo(str(value))
    return True


def _show_tokens(source: str) -> bool:
    source_map = SourceMap()
    try:
        tokens = list(tokenize(source, source_map))
    except EvalError as e:
        print_error(e.message)
        return False
    for tok in tokens:
        line = f"{source_map.map_span(tok.span)} {tok.kind.name}"
        if tok.kind == TokenKind.INT:
            line += f" {tok.value}"
        typer.echo(line)
    return True


@app.command()
def run(
    expressions: list[str] | None = typer.Argument(
        None, metavar="EXPR...", help="Expressions to evaluate, in order"
    ),
    fail_fast: bool | None = typer.Option(
        None,
        "--fail-fast/--keep-going",
        help="Stop at the first failing expression (default: evaluate all)",
    ),
    tokens: bool = typer.Option(
        False, "--tokens", help="Print each expression's tokens instead of evaluating"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="TOML config file (default: ./sari.toml if present)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Evaluate each EXPR and print its value, or its error on stderr."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e

    config = _apply_flags(config, fail_fast=fail_fast, tokens=tokens, verbose=verbose)
    configure_logging(config.log_level)
    logger.debug("Using config: %s", config.model_dump())

    if not expressions:
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=1)

    handler = _show_tokens if config.show_tokens else _evaluate_one
    failures = 0
    for source in expressions:
        if handler(source):
            continue
        failures += 1
        if config.fail_fast:
            logger.info("Stopping after first failure")
            break

    logger.info("%d expression(s), %d failed", len(expressions), failures)
    if failures:
        raise typer.Exit(code=1)


def _apply_flags(
    config: SariConfig, *, fail_fast: bool | None, tokens: bool, verbose: bool
) -> SariConfig:
    updates: dict[str, object] = {}
    if fail_fast is not None:
        updates["fail_fast"] = fail_fast
    if tokens:
        updates["show_tokens"] = True
    if verbose:
        updates["log_level"] = "DEBUG"
    if not updates:
        return config
    return config.model_copy(update=updates)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
