import logging
from collections import defaultdict, deque
from functools import reduce
from typing import Final, Iterable

from more_itertools import unique_everseen

from regfsm.automaton import EPSILON, Automaton, State, Transition
from regfsm.utils import StateCounter

logger = logging.getLogger(__name__)

EMPTY_SUBSET_KEY: Final[str] = "∅"

TransitionTable = defaultdict[str, defaultdict[str, list[str]]]


def transition_table(transitions: Iterable[Transition]) -> TransitionTable:
    """Index `transitions` as state -> symbol -> [end states], keeping their order"""
    table: TransitionTable = defaultdict(lambda: defaultdict(list))
    for start, symbol, end in transitions:
        table[start][symbol].append(end)
    return table


def closure_from_table(
    states: Iterable[str], table: TransitionTable
) -> frozenset[str]:
    closure = set()
    stack = list(states)

    while stack:
        if (state := stack.pop()) in closure:
            continue

        closure.add(state)
        # explore the states in the order which they are in
        stack.extend(table[state][EPSILON][::-1])

    return frozenset(closure)


def epsilon_closure(
    states: Iterable[str], transitions: Iterable[Transition] | Automaton
) -> frozenset[str]:
    """
    This is the set of all the states which can be reached from `states` by following epsilon labelled edges
    This is done here using a depth first search

    https://castle.eiu.edu/~mathcs/mat4885/index/Webview/examples/epsilon-closure.pdf

    Parameters
    ----------
    states: Iterable[str]
        The seed states, they are always part of the closure
    transitions: Iterable[Transition] | Automaton
        The transitions to follow, or an automaton whose transitions should be followed

    Examples
    --------
    >>> transitions = [
    ...     Transition("q0", "q1", EPSILON),
    ...     Transition("q1", "q2", EPSILON),
    ...     Transition("q2", "q3", "a"),
    ... ]
    >>> sorted(epsilon_closure({"q0"}, transitions))
    ['q0', 'q1', 'q2']
    >>> sorted(epsilon_closure({"q3"}, transitions))
    ['q3']
    """
    if isinstance(transitions, Automaton):
        transitions = transitions.transitions
    return closure_from_table(states, transition_table(transitions))


def move(states: Iterable[str], symbol: str, table: TransitionTable) -> frozenset[str]:
    """The states reachable from any of `states` by consuming exactly one `symbol`"""
    return frozenset(
        reduce(
            set.union,
            (set(table[state][symbol]) for state in states),
            set(),
        )
    )


def nfa_lambda_to_nfa(nfa_lambda: Automaton) -> Automaton:
    """
    Remove all the epsilon transitions from an NFA-λ

    For every state `s` and symbol `a` the new NFA moves from `s` on `a` to every state in
    closure(move(closure({s}), a)). A state becomes accepting if an accepting state can
    be reached from it through epsilon transitions alone.

    The states of the NFA-λ are all kept, in the same order. The alphabet does not change.

    Examples
    --------
    >>> nfa_lambda = Automaton(
    ...     (State("q0", is_start=True), State("q1"), State("q2", is_accept=True)),
    ...     (Transition("q0", "q1", EPSILON), Transition("q1", "q2", "a")),
    ...     frozenset({"a"}),
    ... )
    >>> nfa = nfa_lambda_to_nfa(nfa_lambda)
    >>> nfa.transitions
    (q0 -a-> q2, q1 -a-> q2)
    >>> nfa.has_epsilon_transitions()
    False
    """
    table = transition_table(nfa_lambda.transitions)
    accepting = set(nfa_lambda.accepting_states)
    position = {state: index for index, state in enumerate(nfa_lambda.state_ids)}
    symbols = sorted(nfa_lambda.alphabet)

    states: list[State] = []
    transitions: list[Transition] = []

    for state in nfa_lambda.states:
        closure = closure_from_table((state.id,), table)

        for symbol in symbols:
            reachable = closure_from_table(move(closure, symbol, table), table)
            transitions.extend(
                Transition(state.id, end, symbol)
                for end in sorted(reachable, key=position.__getitem__)
            )

        states.append(
            State(
                state.id,
                is_start=state.is_start,
                is_accept=state.is_accept or not accepting.isdisjoint(closure),
            )
        )

    nfa = Automaton(
        tuple(states), tuple(unique_everseen(transitions)), nfa_lambda.alphabet
    )
    logger.debug("removed epsilon transitions: %s", nfa.summary())
    return nfa


def subset_key(states: Iterable[str]) -> str:
    """
    The canonical name of a set of NFA states

    Examples
    --------
    >>> subset_key({"q2", "q10", "q1"})
    'q1,q10,q2'
    >>> subset_key(set())
    '∅'
    """
    return ",".join(sorted(states)) or EMPTY_SUBSET_KEY


def nfa_to_dfa(nfa: Automaton) -> Automaton:
    """
    Determinize `nfa` using the subset construction

    Subsets of NFA states are discovered breadth first, starting from the subset holding the
    NFA's start state. Every subset becomes one DFA state, accepting if any of its members accepts.
    Subsets are finally renamed to q0, q1, ... in the order they were discovered.

    Unreachable (state, symbol) pairs get no transition at all, the DFA rejects implicitly.

    Parameters
    ----------
    nfa: Automaton
        An epsilon free NFA. Any epsilon transitions left are followed through
        so that the result is still a DFA.

    Returns
    -------
    Automaton
        A DFA. If `nfa` has no start state, an automaton without states or transitions
        which keeps the alphabet of `nfa`.

    Examples
    --------
    >>> nfa = Automaton(
    ...     (State("s", is_start=True), State("t", is_accept=True)),
    ...     (Transition("s", "s", "a"), Transition("s", "t", "a")),
    ...     frozenset({"a"}),
    ... )
    >>> dfa = nfa_to_dfa(nfa)
    >>> dfa.states
    (State(q0, start), State(q1, accept))
    >>> dfa.transitions
    (q0 -a-> q1, q1 -a-> q1)
    """
    if (start_state := nfa.start_state) is None:
        return Automaton(alphabet=nfa.alphabet)

    table = transition_table(nfa.transitions)
    accepting = set(nfa.accepting_states)
    symbols = sorted(nfa.alphabet)

    initial = closure_from_table((start_state.id,), table)
    # subset key -> does the subset contain an accepting state
    subsets: dict[str, bool] = {
        subset_key(initial): not accepting.isdisjoint(initial)
    }
    queue = deque([initial])
    transitions: list[tuple[str, str, str]] = []

    while queue:
        subset = queue.popleft()
        key = subset_key(subset)

        for symbol in symbols:
            successor = closure_from_table(move(subset, symbol, table), table)
            if not successor:
                continue
            successor_key = subset_key(successor)
            if successor_key not in subsets:
                subsets[successor_key] = not accepting.isdisjoint(successor)
                queue.append(successor)
            transitions.append((key, successor_key, symbol))

    gen_state = StateCounter()
    renamed = {key: gen_state() for key in subsets}

    dfa = Automaton(
        tuple(
            State(renamed[key], is_start=index == 0, is_accept=is_accept)
            for index, (key, is_accept) in enumerate(subsets.items())
        ),
        tuple(
            Transition(renamed[start], renamed[end], symbol)
            for start, end, symbol in transitions
        ),
        nfa.alphabet,
    )
    logger.debug("subset construction: %s", dfa.summary())
    return dfa


if __name__ == "__main__":
    import doctest

    doctest.testmod()
