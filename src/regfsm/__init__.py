from regfsm.automaton import EPSILON, Automaton, State, Transition
from regfsm.edges import parse_edge_list
from regfsm.fsm import epsilon_closure, nfa_lambda_to_nfa, nfa_to_dfa
from regfsm.matcher import simulate_nfa, validate_string
from regfsm.parser import RegexpParsingError, regex_to_nfa_lambda
from regfsm.pipeline import Conversion, convert_edge_list, convert_regex

__all__ = [
    "EPSILON",
    "Automaton",
    "State",
    "Transition",
    "Conversion",
    "RegexpParsingError",
    "convert_edge_list",
    "convert_regex",
    "epsilon_closure",
    "nfa_lambda_to_nfa",
    "nfa_to_dfa",
    "parse_edge_list",
    "regex_to_nfa_lambda",
    "simulate_nfa",
    "validate_string",
]
