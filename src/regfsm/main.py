import json
import logging
from typing import IO, Iterable, Optional

import click
from tqdm import tqdm

from regfsm.automaton import Automaton
from regfsm.parser import RegexpParsingError
from regfsm.pipeline import Conversion, convert_edge_list, convert_regex

STAGES = ("nfa-lambda", "nfa", "dfa")


def describe(automaton: Automaton) -> dict:
    start_state = automaton.start_state
    return {
        "states": [state.id for state in automaton.states],
        "start_state": None if start_state is None else start_state.id,
        "accepting_states": list(automaton.accepting_states),
        "alphabet": sorted(automaton.alphabet),
        "transitions": [
            [transition.start, transition.symbol, transition.end]
            for transition in automaton.transitions
        ],
        "summary": automaton.summary(),
    }


def check_strings(
    conversion: Conversion, texts: Iterable[str], show_progress: bool
) -> dict[str, bool]:
    texts = list(texts)
    return {
        text: conversion.accepts(text)
        for text in tqdm(texts, total=len(texts), disable=not show_progress)
    }


@click.command(name="regfsm", help="Convert a regex into an NFA-λ, an NFA and a DFA")
@click.argument("pattern", type=click.STRING, required=False)
@click.option(
    "--edges",
    type=click.File(),
    default=None,
    help="Read an edge list instead of a pattern",
)
@click.option(
    "--stage",
    "-s",
    type=click.Choice([*STAGES, "all"]),
    default="all",
    show_default=True,
    help="Which automaton to print",
)
@click.option(
    "--test",
    "-t",
    "texts",
    type=click.STRING,
    multiple=True,
    help="A string to check against the DFA, may be repeated",
)
@click.option(
    "--input-file",
    type=click.File(),
    default=None,
    help="File with one string to check per line",
)
@click.option(
    "--out", "-o", type=click.File("w"), default="-", help="Where to write the report"
)
@click.option(
    "--debug",
    "-g",
    is_flag=True,
    show_default=True,
    default=False,
    help="Turn on debug mode",
)
def entry(
    pattern: Optional[str],
    edges: Optional[IO],
    stage: str,
    texts: tuple[str, ...],
    input_file: Optional[IO],
    out: IO,
    debug: bool,
):
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)

    if edges is not None:
        conversion = convert_edge_list(edges.read())
    elif pattern is not None:
        try:
            conversion = convert_regex(pattern)
        except RegexpParsingError as e:
            raise click.BadParameter(str(e), param_hint="PATTERN") from e
    else:
        raise click.UsageError("either PATTERN or --edges is required")

    texts = list(texts)
    if input_file is not None:
        texts.extend(line.rstrip("\n") for line in input_file)

    stages = STAGES if stage == "all" else (stage,)
    report = {
        name: describe(automaton)
        for name, automaton in zip(STAGES, conversion)
        if name in stages
    }
    report["summary"] = conversion.summary()
    if texts:
        report["results"] = check_strings(conversion, texts, debug)

    out.write(json.dumps(report, indent=4, ensure_ascii=False))
    out.write("\n")


if __name__ == "__main__":
    entry()
