from dataclasses import dataclass, field
from functools import reduce
from typing import Final, Optional

from regfsm.automaton import EPSILON, EPSILON_MARKERS, Automaton
from regfsm.thompson import ThompsonBuilder
from regfsm.utils import Fragment, Literal, Token

QUANTIFIER_OPTIONS: Final[tuple[str, ...]] = ("*", "+", "?")


class RegexpParsingError(Exception):
    def __init__(self, message: str, regex: str, position: int):
        super().__init__(
            f"{message}\n"
            f"regexp = {regex!r}\n"
            f"left   = {' ' * position + regex[position:]!r}"
        )
        self.regex = regex
        self.position = position


@dataclass(slots=True)
class Group:
    """The alternatives already closed by a ``|`` and the tokens read since, for one open group"""

    alternatives: list[Fragment[str]] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)


class RegexParser:
    """
    A single pass parser which builds Thompson fragments as it goes, keeping open groups on a stack

    Grammar
    -------
        Expression   ::= Sequence ("|" Expression)?
        Sequence     ::= Item*
        Item         ::= Atom Quantifier*
        Atom         ::= "(" Expression ")" | Character
        Quantifier   ::= "*" | "+" | "?"

    Whitespace is skipped everywhere. The characters ``ε`` and ``λ`` are epsilon, not symbols.
    An empty Expression, e.g. ``()`` or either side of ``a|``,
    stands for the empty string.

    Parameters
    ----------
    regex: str
        The pattern to parse
    builder: Optional[ThompsonBuilder]
        The builder that owns the states and transitions, a fresh one is created if not given

    Raises
    ------
    RegexpParsingError
        If the parentheses are unbalanced or a quantifier has nothing to apply to

    Examples
    --------
    >>> parser = RegexParser("ab")
    >>> parser.root
    Fragment(start='q0', end='q3')
    >>> RegexParser("(ab")
    Traceback (most recent call last):
        ...
    regfsm.parser.RegexpParsingError: unbalanced parenthesis: '(' at 0 is never closed
    regexp = '(ab'
    left   = '(ab'
    """

    def __init__(self, regex: str, builder: Optional[ThompsonBuilder] = None):
        self._regex = regex
        self._builder = ThompsonBuilder() if builder is None else builder
        self._root = self.parse_expression(0, len(regex))

    @property
    def root(self) -> Fragment[str]:
        return self._root

    @property
    def builder(self) -> ThompsonBuilder:
        return self._builder

    def error(self, message: str, position: int) -> RegexpParsingError:
        return RegexpParsingError(message, self._regex, position)

    def find_closing_parenthesis(self, position: int, stop: int) -> int:
        """
        Return the index of the ``)`` matching the ``(`` found at `position`

        Nested groups are skipped by counting the depth.
        """
        depth = 0
        for index in range(position, stop):
            match self._regex[index]:
                case "(":
                    depth += 1
                case ")":
                    depth -= 1
                    if depth == 0:
                        return index
        raise self.error(
            f"unbalanced parenthesis: '(' at {position} is never closed", position
        )

    def to_fragment(self, token: Token) -> Fragment[str]:
        match token:
            case Literal(char):
                return self._builder.base(char)
            case Fragment():
                return token
        raise TypeError(f"unexpected token {token!r}")

    def concatenate_tokens(self, tokens: list[Token]) -> Fragment[str]:
        return self._builder.concatenate_all([self.to_fragment(t) for t in tokens])

    def close_group(self, group: Group) -> Fragment[str]:
        """
        Concatenate the pending tokens of `group` into its last alternative and fold the
        alternatives into one fragment, the rightmost union being built first
        """
        alternatives = group.alternatives + [self.concatenate_tokens(group.tokens)]
        return reduce(
            lambda upper, lower: self._builder.alternation(lower, upper),
            reversed(alternatives),
        )

    def parse_expression(self, start: int, stop: int) -> Fragment[str]:
        # open groups, innermost last
        groups: list[Group] = [Group()]
        position = start

        while position < stop:
            char = self._regex[position]

            if char.isspace():
                position += 1
                continue

            group = groups[-1]
            match char:
                case "(":
                    if len(groups) == 1:
                        # groups nested inside a balanced one are balanced too
                        self.find_closing_parenthesis(position, stop)
                    groups.append(Group())
                case ")":
                    if len(groups) == 1:
                        raise self.error(
                            f"unbalanced parenthesis: ')' at {position} has no matching '('",
                            position,
                        )
                    groups.pop()
                    groups[-1].tokens.append(self.close_group(group))
                case "|":
                    # everything to the left binds tighter than the union
                    group.alternatives.append(self.concatenate_tokens(group.tokens))
                    group.tokens = []
                case _ if char in QUANTIFIER_OPTIONS:
                    if not group.tokens:
                        raise self.error(
                            f"quantifier {char!r} at {position} has nothing to repeat",
                            position,
                        )
                    operand = self.to_fragment(group.tokens.pop())
                    group.tokens.append(self._builder.apply_quantifier(char, operand))
                case _:
                    group.tokens.append(
                        Literal(EPSILON if char in EPSILON_MARKERS else char)
                    )

            position += 1

        return self.close_group(groups[-1])

    def __repr__(self):
        return f"Parser({self._regex})"


def regex_to_nfa_lambda(regex: str) -> Automaton:
    """
    Convert `regex` into an NFA-λ using Thompson's construction

    Parameters
    ----------
    regex: str
        A regular expression using ``*``, ``+``, ``?``, ``|`` and parentheses

    Returns
    -------
    Automaton
        An automaton with exactly one start state and one accept state

    Raises
    ------
    RegexpParsingError
        If `regex` is malformed

    Examples
    --------
    >>> nfa_lambda = regex_to_nfa_lambda("a|b")
    >>> nfa_lambda.start_state, nfa_lambda.accepting_states
    (State(q4, start), ('q5',))
    >>> sorted(nfa_lambda.alphabet)
    ['a', 'b']
    >>> regex_to_nfa_lambda("").transitions
    (q0 -ε-> q1,)
    """
    parser = RegexParser(regex)
    return parser.builder.build(parser.root)


if __name__ == "__main__":
    import doctest

    doctest.testmod()
