import logging
from typing import NamedTuple

from regfsm.automaton import Automaton
from regfsm.edges import parse_edge_list
from regfsm.fsm import nfa_lambda_to_nfa, nfa_to_dfa
from regfsm.matcher import validate_string
from regfsm.parser import regex_to_nfa_lambda

logger = logging.getLogger(__name__)


class Conversion(NamedTuple):
    """The three automata derived from one regex or edge list"""

    nfa_lambda: Automaton
    nfa: Automaton
    dfa: Automaton

    @staticmethod
    def from_nfa_lambda(nfa_lambda: Automaton) -> "Conversion":
        nfa = nfa_lambda_to_nfa(nfa_lambda)
        conversion = Conversion(nfa_lambda, nfa, nfa_to_dfa(nfa))
        logger.debug(conversion.summary())
        return conversion

    def accepts(self, text: str) -> bool:
        return validate_string(self.dfa, text)

    def summary(self) -> str:
        return (
            f"NFA-λ: {len(self.nfa_lambda.states)} states, "
            f"NFA: {len(self.nfa.states)} states, "
            f"DFA: {len(self.dfa.states)} states"
        )


def convert_regex(regex: str) -> Conversion:
    """
    Run `regex` through the whole pipeline: NFA-λ, NFA and finally DFA

    Examples
    --------
    >>> conversion = convert_regex("a*b*")
    >>> conversion.summary()
    'NFA-λ: 8 states, NFA: 8 states, DFA: 3 states'
    >>> [conversion.accepts(text) for text in ("", "aab", "ba")]
    [True, True, False]
    """
    return Conversion.from_nfa_lambda(regex_to_nfa_lambda(regex))


def convert_edge_list(text: str) -> Conversion:
    return Conversion.from_nfa_lambda(parse_edge_list(text))
