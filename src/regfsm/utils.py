from dataclasses import dataclass
from itertools import count
from typing import Generic, NamedTuple, TypeVar, Union

T = TypeVar("T")


class Fragment(NamedTuple, Generic[T]):
    """
    A partially built automaton with exactly one entry and one exit state

    Attributes
    ----------
    start: T
        The state through which the fragment is entered
    end: T
        The state through which the fragment is left, the ``accept`` state of the fragment

    Notes
    -----
    A fragment holds no transitions of its own. The transitions live in the builder that
    created it, so combining two fragments never copies anything.
    """

    start: T
    end: T


@dataclass(frozen=True, slots=True)
class Literal:
    """A single regex character which has not been turned into a fragment yet"""

    char: str


# a parse token is either a bare character or an already built fragment
Token = Union[Literal, Fragment[str]]


class StateCounter:
    """
    Hands out fresh state ids

    Every parse owns its own counter so that ids are unique within one automaton
    and two parses never share anything.

    Examples
    --------
    >>> counter = StateCounter()
    >>> counter(), counter(), counter()
    ('q0', 'q1', 'q2')
    >>> StateCounter(prefix="s")()
    's0'
    """

    def __init__(self, prefix: str = "q"):
        self._prefix = prefix
        self._counter = count(0)

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._counter)}"
