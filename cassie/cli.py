"""Cassie CLI
---

Command line application for inspecting and evaluating term documents.
"""

import sys
from typing import Dict, Optional, Tuple

import click
from wasabi import msg

from .config import EvaluationConfig


def parse_bind_option(text: str) -> Tuple[str, float]:
    """Split a `--bind` option value of the form `x=28.0`"""
    symbol, sep, value = text.partition("=")
    symbol = symbol.strip()
    if sep == "" or len(symbol) != 1:
        raise click.BadParameter(f"expected a binding like 'x=1.5', got: {text}")
    try:
        return symbol, float(value)
    except ValueError:
        raise click.BadParameter(f"binding for {symbol} is not a number: {value}")


@click.group()
@click.version_option()
def cli():
    """
    Cassie - build and evaluate symbolic term trees.

    Terms are read from JSON documents, e.g.
    {"type": "sum", "terms": [{"type": "variable", "symbol": "x"},
    {"type": "constant", "value": 100}]}
    """


@cli.command("evaluate")
@click.argument("term_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "binds",
    "--bind",
    "-b",
    multiple=True,
    help="A variable value like 'x=28.0'. May be given more than once.",
)
@click.option(
    "bindings_file",
    "--bindings",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="A JSON object of variable values, e.g. {\"x\": 28.0}",
)
@click.option(
    "zero_threshold",
    "--zero-threshold",
    type=float,
    default=EvaluationConfig().zero_threshold,
    help="Divisors smaller than this fail with a division by zero error",
)
@click.option(
    "conventional_quotient",
    "--conventional-quotient",
    is_flag=True,
    default=False,
    help="Evaluate quotients as a / b / c instead of a / a / b / c",
)
def cli_evaluate(
    term_file: str,
    binds: Tuple[str, ...],
    bindings_file: Optional[str],
    zero_threshold: float,
    conventional_quotient: bool,
):
    """Evaluate a term document. Without any bindings the term is reduced, which
    only works for terms that have no variables."""
    from .serialize import read_bindings, read_term

    try:
        term = read_term(term_file)
        bindings: Optional[Dict[str, float]] = None
        if bindings_file is not None:
            bindings = read_bindings(bindings_file)
        for bind in binds:
            symbol, value = parse_bind_option(bind)
            bindings = bindings if bindings is not None else {}
            bindings[symbol] = value
        config = EvaluationConfig(
            zero_threshold=zero_threshold,
            repeat_first_divisor=not conventional_quotient,
        )
    except ValueError as error:
        msg.fail("Invalid input", str(error))
        sys.exit(1)

    if bindings is None:
        result = term.try_reduce(config)
    else:
        result = term.try_evaluate(bindings, config)
    if result.error is not None:
        msg.fail(f"Evaluation failed ({result.error.kind})", str(result.error))
        sys.exit(1)
    msg.good(f"{term} = {result.value}")


@cli.command("show")
@click.argument("term_file", type=click.Path(exists=True, dir_okay=False))
def cli_show(term_file: str):
    """Print a term document as text along with the nodes that make it up."""
    from .serialize import read_term

    try:
        term = read_term(term_file)
    except ValueError as error:
        msg.fail("Invalid input", str(error))
        sys.exit(1)

    msg.divider(str(term))
    variables = term.free_variables()
    if variables:
        msg.info(f"Variables: {', '.join(variables)}")
    else:
        msg.info("No variables, the term can be reduced")

    header = ("Depth", "Type", "Text")
    widths = (5, 14, 55)
    aligns = ("c", "l", "l")
    data = []

    def visit_fn(node, depth, data_list):
        data_list.append((str(depth), node.__class__.__name__, str(node)))

    term.visit_preorder(visit_fn, data=data)
    msg.table(data, header=header, divider=True, widths=widths, aligns=aligns)


if __name__ == "__main__":
    cli()
