from itertools import product

import pytest

from regfsm.automaton import EPSILON
from regfsm.edges import parse_edge_list
from regfsm.pipeline import convert_edge_list


def test_round_trip():
    text = "q0, a, q1\nq1, b, q2\naccept: q2"
    nfa_lambda = parse_edge_list(text)
    assert nfa_lambda.start_state.id == "q0"
    assert nfa_lambda.accepting_states == ("q2",)

    conversion = convert_edge_list(text)
    accepted = [
        "".join(chars)
        for length in range(4)
        for chars in product("ab", repeat=length)
        if conversion.accepts("".join(chars))
    ]
    assert accepted == ["ab"]
    for text in ("a", "b", "", "aab"):
        assert not conversion.accepts(text)


@pytest.mark.parametrize(
    "line",
    [
        "q0, a, q1",
        "q0 a q1",
        "q0,a,q1",
        "q0 ,a,  q1",
        "  q0\ta  q1  ",
        "q0, a, q1, ignored",
    ],
)
def test_separators(line):
    nfa_lambda = parse_edge_list(line)
    assert [tuple(transition) for transition in nfa_lambda.transitions] == [
        ("q0", "a", "q1")
    ]


@pytest.mark.parametrize("symbol", ["e", "ε", "λ"])
def test_epsilon_aliases(symbol):
    nfa_lambda = parse_edge_list(f"q0 {symbol} q1\nq1 a q2")
    assert nfa_lambda.transitions[0].symbol == EPSILON
    assert nfa_lambda.alphabet == {"a"}


@pytest.mark.parametrize(
    "directive",
    ["accept: q1, q2", "ACCEPT: q1,q2", "final: q1 q2", "Final:q1 , q2"],
)
def test_accept_directive(directive):
    nfa_lambda = parse_edge_list(f"q0 a q1\nq0 b q2\nq2 c q3\n{directive}")
    assert nfa_lambda.accepting_states == ("q1", "q2")
    assert len(nfa_lambda.transitions) == 3


def test_accept_directives_accumulate():
    nfa_lambda = parse_edge_list("accept: q1\nq0 a q1\nq1 b q2\nfinal: q2")
    assert nfa_lambda.accepting_states == ("q1", "q2")


def test_directive_line_is_never_a_transition():
    nfa_lambda = parse_edge_list("q0 a q1\naccept: q0, q1, q2")
    assert len(nfa_lambda.transitions) == 1
    assert nfa_lambda.state_ids == ("q0", "q1")


def test_unknown_accept_states_are_ignored():
    nfa_lambda = parse_edge_list("q0 a q1\naccept: q9")
    assert nfa_lambda.accepting_states == ()


def test_last_state_is_accept_without_directive():
    nfa_lambda = parse_edge_list("q0 a q1\nq1 b q2")
    assert nfa_lambda.accepting_states == ("q2",)


def test_first_seen_and_last_seen_order():
    # states are ordered by first mention: s, t, r, u
    nfa_lambda = parse_edge_list("s a t\nr b s\nt c u\nu d r")
    assert nfa_lambda.state_ids == ("s", "t", "r", "u")
    assert nfa_lambda.start_state.id == "s"
    assert nfa_lambda.accepting_states == ("u",)


def test_start_is_first_state_even_when_it_is_only_a_target_later():
    nfa_lambda = parse_edge_list("q1 a q0\nq0 b q1")
    assert nfa_lambda.start_state.id == "q1"
    assert nfa_lambda.accepting_states == ("q0",)


def test_short_and_blank_lines_are_skipped():
    nfa_lambda = parse_edge_list("\n   \nq0 a\nq0\nq0 a q1\n\n")
    assert [tuple(transition) for transition in nfa_lambda.transitions] == [
        ("q0", "a", "q1")
    ]
    assert nfa_lambda.state_ids == ("q0", "q1")


@pytest.mark.parametrize("text", ["", "\n\n", "only two"])
def test_nothing_to_parse(text):
    nfa_lambda = parse_edge_list(text)
    assert nfa_lambda.is_empty()
    assert nfa_lambda.transitions == ()
    assert nfa_lambda.alphabet == frozenset()


def test_epsilon_edges_survive_until_reduction():
    text = "q0 e q1\nq1 a q2\nq2 e q0"
    conversion = convert_edge_list(text)
    assert conversion.nfa_lambda.has_epsilon_transitions()
    assert not conversion.nfa.has_epsilon_transitions()
    assert conversion.accepts("a")
    assert conversion.accepts("aaa")
    assert not conversion.accepts("")


def test_nondeterministic_edge_list():
    conversion = convert_edge_list("p a p\np b p\np a q\nq b r\nfinal: r")
    for text in ("ab", "aab", "bab", "abab"):
        assert conversion.accepts(text), text
    for text in ("", "a", "ba", "abb"):
        assert not conversion.accepts(text), text
    assert conversion.dfa.is_deterministic()


@pytest.mark.parametrize(
    "text",
    [
        "q0, a, q1\nq1, b, q2\naccept: q2",
        "q0 e q1\nq1 a q2\nq2 λ q0",
        "p a p\np b p\np a q\nq b r\nfinal: r",
        "s, ε, t\nt, x, u\nu, e, s\naccept: s, u",
    ],
)
def test_alphabet_is_consistent_at_every_stage(text, assert_alphabet_consistency):
    conversion = convert_edge_list(text)
    assert_alphabet_consistency(conversion.nfa_lambda, allow_epsilon=True)
    assert_alphabet_consistency(conversion.nfa, allow_epsilon=False)
    assert_alphabet_consistency(conversion.dfa, allow_epsilon=False)
    assert conversion.nfa.alphabet == conversion.nfa_lambda.alphabet
