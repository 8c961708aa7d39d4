from regfsm.automaton import Automaton
from regfsm.fsm import closure_from_table, move, transition_table


def validate_string(dfa: Automaton, text: str) -> bool:
    """
    Check whether `dfa` accepts `text`

    Every character of `text` is one symbol. The walk starts at the start state and
    rejects as soon as there is no transition for the current character.

    Parameters
    ----------
    dfa: Automaton
        A deterministic automaton, e.g. one returned by ``nfa_to_dfa``
    text: str
        The string to check

    Returns
    -------
    bool
        True if the walk consumes all of `text` and stops in an accept state

    Examples
    --------
    >>> from regfsm.pipeline import convert_regex
    >>> dfa = convert_regex("(ab)+").dfa
    >>> validate_string(dfa, "abab")
    True
    >>> validate_string(dfa, "aba")
    False
    >>> validate_string(dfa, "")
    False
    """
    if (start_state := dfa.start_state) is None:
        return False

    delta: dict[tuple[str, str], str] = {}
    for start, symbol, end in dfa.transitions:
        delta.setdefault((start, symbol), end)

    state = start_state.id
    for char in text:
        if (state := delta.get((state, char))) is None:
            return False

    return dfa.get_state(state).is_accept


def simulate_nfa(automaton: Automaton, text: str) -> bool:
    """
    Check whether `automaton` accepts `text` by tracking every state it could be in

    Works on any automaton, epsilon transitions included. It is slower than ``validate_string``
    but needs no determinization, which makes it a handy reference.

    Examples
    --------
    >>> from regfsm.parser import regex_to_nfa_lambda
    >>> nfa_lambda = regex_to_nfa_lambda("a*b")
    >>> simulate_nfa(nfa_lambda, "aaab"), simulate_nfa(nfa_lambda, "ba")
    (True, False)
    """
    if (start_state := automaton.start_state) is None:
        return False

    table = transition_table(automaton.transitions)
    current = closure_from_table((start_state.id,), table)

    for char in text:
        if not (current := closure_from_table(move(current, char, table), table)):
            return False

    return not current.isdisjoint(automaton.accepting_states)
