"""
calcapi command-line interface.

Commands:
- eval: evaluate an expression
- tokens: show the token stream
- ast: show the parsed tree
- serve: run the HTTP API with uvicorn
"""

from __future__ import annotations

import json
import platform
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from calcapi._version import get_version
from calcapi.config import DEFAULT_MAX_NESTING_DEPTH
from calcapi.core.errors import CalcError, InvalidExpressionError
from calcapi.core.expression_lang import evaluate, parse, render, tokenize
from calcapi.core.ir.expressions import expr_to_dict

console = Console()

app = typer.Typer(
    help="calcapi: arithmetic expression calculator (+ - * / and parentheses)",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"calcapi {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """calcapi CLI main callback for global options."""


def format_result(value: float) -> str:
    """Integral results print without a trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _fail(expression: str, error: CalcError) -> NoReturn:
    """Print the error (with a caret under the position when known) and exit 1."""
    typer.echo(f"Error: {error.message}", err=True)
    if isinstance(error, InvalidExpressionError):
        typer.echo(f"  {expression}", err=True)
        typer.echo(f"  {' ' * error.position}^", err=True)
    raise typer.Exit(code=1)


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '2 + 3 * 4'"),
    show_ast: bool = typer.Option(False, "--ast", help="Also print the AST as JSON"),
) -> None:
    """Evaluate an expression and print the result."""
    try:
        ast = parse(tokenize(expression), max_depth=DEFAULT_MAX_NESTING_DEPTH)
        result = evaluate(ast)
    except CalcError as e:
        _fail(expression, e)

    typer.echo(format_result(result))
    if show_ast:
        typer.echo(json.dumps(expr_to_dict(ast), indent=2))


@app.command("tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the token stream for an expression."""
    try:
        tokens = tokenize(expression)
    except CalcError as e:
        _fail(expression, e)

    table = Table(title="Tokens")
    table.add_column("Kind")
    table.add_column("Lexeme")
    table.add_column("Position", justify="right")
    for tok in tokens:
        table.add_row(tok.kind.value, tok.lexeme, str(tok.position))
    console.print(table)


@app.command("ast")
def ast_command(
    expression: str = typer.Argument(..., help="Expression to parse"),
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
) -> None:
    """Parse an expression and show its tree."""
    try:
        ast = parse(tokenize(expression), max_depth=DEFAULT_MAX_NESTING_DEPTH)
    except CalcError as e:
        _fail(expression, e)

    if as_json:
        typer.echo(json.dumps(expr_to_dict(ast), indent=2))
    else:
        typer.echo(render(ast))


@app.command("serve")
def serve_command(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: CALCAPI_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload (dev only)"),
) -> None:
    """Run the calculator HTTP API."""
    import uvicorn

    from calcapi.config import ServerConfig
    from calcapi.logging import setup_logging

    config = ServerConfig.from_env()
    if host is not None:
        config.host = host
    if port is not None:
        config.port = port

    logger = setup_logging(config.log_level, config.log_dir)
    logger.info("Calculator API running on http://%s:%d", config.host, config.port)
    logger.info("  Health check: http://%s:%d/health", config.host, config.port)

    if reload:
        # Reload mode re-imports the app, so it builds its own config from the environment
        uvicorn.run(
            "calcapi.api.app:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=True,
            log_level=config.log_level.lower(),
        )
        return

    from calcapi.api.app import create_app

    uvicorn.run(
        create_app(config=config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


def main() -> None:
    """Console-script entry point."""
    app()
