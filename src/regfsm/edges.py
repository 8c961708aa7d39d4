import logging
import re
from typing import Final

from regfsm.automaton import (
    EPSILON,
    EPSILON_ALIASES,
    Automaton,
    State,
    Transition,
    alphabet_of,
)

logger = logging.getLogger(__name__)

FIELD_SEPARATOR: Final[re.Pattern] = re.compile(r"\s*,\s*|\s+")
ACCEPT_DIRECTIVE: Final[re.Pattern] = re.compile(
    r"(?:accept|final):\s*(.*)", re.IGNORECASE
)


def split_fields(line: str) -> list[str]:
    """
    Split a line on commas, runs of whitespace, or both

    Examples
    --------
    >>> split_fields("q0, a, q1")
    ['q0', 'a', 'q1']
    >>> split_fields("  q0 a\\tq1 ")
    ['q0', 'a', 'q1']
    >>> split_fields("q0,a")
    ['q0', 'a']
    """
    return [field for field in FIELD_SEPARATOR.split(line.strip()) if field]


def parse_edge_list(text: str) -> Automaton:
    """
    Build an NFA-λ from a list of transitions, one per line

    Each line reads ``from, symbol, to``. The symbols ``e``, ``ε`` and ``λ`` spell an epsilon transition.
    A line containing ``accept:`` or ``final:`` lists the accept states instead of a transition.

    States are created in the order they are first mentioned and the very first one is the start state.
    Without any ``accept:`` or ``final:`` line the last state mentioned becomes the accept state.
    Lines with less than three fields are skipped.

    Parameters
    ----------
    text: str
        The edge list

    Returns
    -------
    Automaton
        An automaton, still with its epsilon transitions

    Examples
    --------
    >>> nfa_lambda = parse_edge_list("q0, a, q1\\nq1, e, q2\\naccept: q2")
    >>> nfa_lambda.states
    (State(q0, start), State(q1), State(q2, accept))
    >>> nfa_lambda.transitions
    (q0 -a-> q1, q1 -ε-> q2)
    >>> sorted(nfa_lambda.alphabet)
    ['a']
    >>> parse_edge_list("p q r\\nr s t").accepting_states
    ('t',)
    """
    # dicts remember insertion order, so this doubles as an ordered set
    seen: dict[str, None] = {}
    transitions: list[Transition] = []
    accepting: set[str] = set()
    has_accept_directive = False

    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        if (directive := ACCEPT_DIRECTIVE.search(line)) is not None:
            has_accept_directive = True
            accepting.update(split_fields(directive.group(1)))
            continue

        if len(fields := split_fields(line)) < 3:
            logger.debug("skipping line %d: %r", number, line)
            continue

        start, symbol, end = fields[:3]
        seen.setdefault(start)
        seen.setdefault(end)
        transitions.append(
            Transition(start, end, EPSILON if symbol in EPSILON_ALIASES else symbol)
        )

    state_ids = list(seen)
    if not has_accept_directive and state_ids:
        accepting = {state_ids[-1]}

    states = tuple(
        State(state, is_start=index == 0, is_accept=state in accepting)
        for index, state in enumerate(state_ids)
    )
    return Automaton(states, tuple(transitions), alphabet_of(transitions))
