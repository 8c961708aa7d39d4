from dataclasses import dataclass, field
from typing import Final, Iterable, Iterator, Optional

from more_itertools import first_true

EPSILON: Final[str] = "ε"

# the characters which spell epsilon in a regex
EPSILON_MARKERS: Final[frozenset[str]] = frozenset({"ε", "λ"})

# an edge-list field may also spell epsilon as ``e``
EPSILON_ALIASES: Final[frozenset[str]] = EPSILON_MARKERS | {"e"}


@dataclass(frozen=True, slots=True)
class State:
    id: str
    is_start: bool = False
    is_accept: bool = False

    def __repr__(self):
        flags = [
            flag
            for flag, is_set in (("start", self.is_start), ("accept", self.is_accept))
            if is_set
        ]
        return f"State({', '.join([self.id, *flags])})"


@dataclass(frozen=True, slots=True)
class Transition:
    start: str
    end: str
    symbol: str

    def __iter__(self):
        yield from [self.start, self.symbol, self.end]

    def is_epsilon(self) -> bool:
        return self.symbol == EPSILON

    def __repr__(self):
        return f"{self.start} -{self.symbol}-> {self.end}"


@dataclass(frozen=True, slots=True)
class Automaton:
    """Formally, a finite automaton is a 5-tuple (Q, Σ, q0, T, δ) where
        • Q is finite set of states;
        • Σ is alphabet of input symbols;
        • q0 is start state;
        • T is subset of Q giving the ``accept`` states;
        and
        • δ is the transition relation.

    The same value describes an NFA-λ, an NFA and a DFA, the difference lies only in which
    transitions are present:
        • an NFA-λ may carry transitions labelled with ``EPSILON``
        • an NFA has no ``EPSILON`` transitions
        • a DFA has at most one transition for every (state, symbol) pair

    Instances are never mutated. Every conversion returns a new Automaton.

    Examples
    --------
    >>> automaton = Automaton(
    ...     (State("q0", is_start=True), State("q1", is_accept=True)),
    ...     (Transition("q0", "q1", "a"),),
    ...     frozenset({"a"}),
    ... )
    >>> automaton.start_state
    State(q0, start)
    >>> automaton.accepting_states
    ('q1',)
    >>> automaton.transitions_from("q0", "a")
    ('q1',)
    >>> automaton.is_deterministic()
    True
    """

    states: tuple[State, ...] = ()
    transitions: tuple[Transition, ...] = ()
    alphabet: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        ids = self.state_ids
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate state ids in {ids}")
        known = set(ids)
        for transition in self.transitions:
            if transition.start not in known or transition.end not in known:
                raise ValueError(f"transition {transition!r} references unknown state")
        if EPSILON in self.alphabet:
            raise ValueError("the epsilon marker can not be part of the alphabet")

    @property
    def state_ids(self) -> tuple[str, ...]:
        return tuple(state.id for state in self.states)

    @property
    def start_state(self) -> Optional[State]:
        return first_true(self.states, pred=lambda state: state.is_start)

    @property
    def accepting_states(self) -> tuple[str, ...]:
        return tuple(state.id for state in self.states if state.is_accept)

    def get_state(self, state_id: str) -> Optional[State]:
        return first_true(self.states, pred=lambda state: state.id == state_id)

    def transitions_from(self, state_id: str, symbol: str) -> tuple[str, ...]:
        return tuple(
            transition.end
            for transition in self.transitions
            if transition.start == state_id and transition.symbol == symbol
        )

    def epsilon_transitions(self) -> Iterator[Transition]:
        return filter(Transition.is_epsilon, self.transitions)

    def has_epsilon_transitions(self) -> bool:
        return any(self.epsilon_transitions())

    def is_deterministic(self) -> bool:
        if self.has_epsilon_transitions():
            return False
        seen: dict[tuple[str, str], str] = {}
        for start, symbol, end in self.transitions:
            if seen.setdefault((start, symbol), end) != end:
                return False
        return True

    def is_empty(self) -> bool:
        return not self.states

    def summary(self) -> str:
        return f"{len(self.states)} states, {len(self.transitions)} transitions"

    def __repr__(self):
        return (
            f"Automaton(states={self.states}, "
            f"alphabet={sorted(self.alphabet)}, "
            f"transitions={self.transitions})"
        )


def alphabet_of(transitions: Iterable[Transition]) -> frozenset[str]:
    """
    Collect every non-epsilon symbol used by `transitions`

    Examples
    --------
    >>> sorted(alphabet_of([Transition("q0", "q1", "a"), Transition("q1", "q2", EPSILON)]))
    ['a']
    """
    return frozenset(
        transition.symbol for transition in transitions if not transition.is_epsilon()
    )
