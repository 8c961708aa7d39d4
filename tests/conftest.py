import pytest

from regfsm.automaton import EPSILON, Automaton


def check_alphabet_consistency(automaton: Automaton, allow_epsilon: bool) -> None:
    assert EPSILON not in automaton.alphabet
    for transition in automaton.transitions:
        if transition.is_epsilon():
            assert allow_epsilon, transition
        else:
            assert transition.symbol in automaton.alphabet, transition


@pytest.fixture
def assert_alphabet_consistency():
    return check_alphabet_consistency
