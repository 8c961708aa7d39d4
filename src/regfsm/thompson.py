import logging

from more_itertools import pairwise

from regfsm.automaton import EPSILON, Automaton, State, Transition, alphabet_of
from regfsm.utils import Fragment, StateCounter

logger = logging.getLogger(__name__)


class ThompsonBuilder:
    """
    Builds an NFA-λ out of fragments using Thompson's construction

    The builder owns the states and transitions created so far.
    A fragment is only the pair (start, end) of state ids, so combining fragments
    appends a handful of epsilon transitions and never copies the accumulated lists.

    Examples
    --------
    >>> builder = ThompsonBuilder()
    >>> a, b = builder.base("a"), builder.base("b")
    >>> builder.concatenate(a, b)
    Fragment(start='q0', end='q3')
    >>> nfa = builder.build(builder.zero_or_more(Fragment('q0', 'q3')))
    >>> nfa.start_state, nfa.accepting_states
    (State(q4, start), ('q5',))
    >>> sorted(nfa.alphabet)
    ['a', 'b']
    """

    def __init__(self):
        self._gen_state = StateCounter()
        self._states: list[str] = []
        self._transitions: list[Transition] = []

    def gen_state(self) -> str:
        state = self._gen_state()
        self._states.append(state)
        return state

    def gen_state_fragment(self) -> Fragment[str]:
        return Fragment(self.gen_state(), self.gen_state())

    def add_transition(self, start: str, end: str, symbol: str):
        self._transitions.append(Transition(start, end, symbol))

    def epsilon(self, start: str, end: str):
        self.add_transition(start, end, EPSILON)

    def base(self, symbol: str) -> Fragment[str]:
        fragment = self.gen_state_fragment()
        self.add_transition(fragment.start, fragment.end, symbol)
        return fragment

    def empty(self) -> Fragment[str]:
        return self.base(EPSILON)

    def concatenate(
        self, fragment1: Fragment[str], fragment2: Fragment[str]
    ) -> Fragment[str]:
        self.epsilon(fragment1.end, fragment2.start)
        return Fragment(fragment1.start, fragment2.end)

    def concatenate_all(self, fragments: list[Fragment[str]]) -> Fragment[str]:
        if not fragments:
            return self.empty()
        for fragment1, fragment2 in pairwise(fragments):
            self.epsilon(fragment1.end, fragment2.start)
        return Fragment(fragments[0].start, fragments[-1].end)

    def alternation(self, lower: Fragment[str], upper: Fragment[str]) -> Fragment[str]:
        fragment = self.gen_state_fragment()

        self.epsilon(fragment.start, lower.start)
        self.epsilon(fragment.start, upper.start)
        self.epsilon(lower.end, fragment.end)
        self.epsilon(upper.end, fragment.end)

        return fragment

    def _wrap(
        self, fragment: Fragment[str], *, bypass: bool, loop: bool
    ) -> Fragment[str]:
        # the three quantifiers share the same shape and differ only in
        # whether they may skip the operand and whether they may repeat it
        wrapper = self.gen_state_fragment()

        self.epsilon(wrapper.start, fragment.start)
        if bypass:
            self.epsilon(wrapper.start, wrapper.end)
        if loop:
            self.epsilon(fragment.end, fragment.start)
        self.epsilon(fragment.end, wrapper.end)

        return wrapper

    def zero_or_more(self, fragment: Fragment[str]) -> Fragment[str]:
        return self._wrap(fragment, bypass=True, loop=True)

    def one_or_more(self, fragment: Fragment[str]) -> Fragment[str]:
        return self._wrap(fragment, bypass=False, loop=True)

    def zero_or_one(self, fragment: Fragment[str]) -> Fragment[str]:
        return self._wrap(fragment, bypass=True, loop=False)

    def apply_quantifier(self, quantifier: str, fragment: Fragment[str]) -> Fragment[str]:
        match quantifier:
            case "*":
                return self.zero_or_more(fragment)
            case "+":
                return self.one_or_more(fragment)
            case "?":
                return self.zero_or_one(fragment)
            case _:
                raise ValueError(f"unrecognized quantifier {quantifier!r}")

    def build(self, fragment: Fragment[str]) -> Automaton:
        """
        Freeze everything built so far into an Automaton

        Only `fragment.start` is flagged as the start state and only `fragment.end` as the accept state.
        Inner fragment boundaries lose their flags as soon as they are composed into something bigger.
        """
        states = tuple(
            State(
                state,
                is_start=state == fragment.start,
                is_accept=state == fragment.end,
            )
            for state in self._states
        )
        transitions = tuple(self._transitions)
        logger.debug(
            "built NFA-λ with %d states and %d transitions",
            len(states),
            len(transitions),
        )
        return Automaton(states, transitions, alphabet_of(transitions))
