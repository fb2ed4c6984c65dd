# Copyright 2012 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
Shared vocabulary for the edit-distance automata: the state pair, the outcome
and symbol markers, and the :class:`Automaton` base class.
"""

from collections import namedtuple

from cached_property import cached_property

# Marker constants


class Marker:
    """
    Represents a marker object.

    Markers are singleton names used where a plain value would be ambiguous:
    the accepting and rejecting outcomes of a transition, and the symbols that
    consume any character or no character at all.

    Attributes:
        name (str): The name of the marker.

    Example:
        >>> marker = Marker("GLOB")
        >>> marker.name
        'GLOB'
        >>> repr(marker)
        '<GLOB>'
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<{self.name}>"


# Outcomes
MATCH = Marker("MATCH")
FAIL = Marker("FAIL")

# Symbols
GLOB = Marker("GLOB")
EMPTY = Marker("EMPTY")


class State(namedtuple("State", "index errors")):
    """
    A position in the match process.

    Attributes:
        index (int): The next unconsumed position in the pattern.
        errors (int): The number of edits used so far.
    """

    __slots__ = ()

    def __repr__(self):
        return f"({self.index}, {self.errors})"


START = State(0, 0)


class Exact:
    """
    Transition symbol that consumes one target character equal to ``char``.

    Instances compare and hash by character, so they can be used as keys in a
    transition mapping.
    """

    __slots__ = ("char",)

    def __init__(self, char):
        self.char = char

    def __eq__(self, other):
        return type(other) is Exact and other.char == self.char

    def __hash__(self):
        return hash((Exact, self.char))

    def __repr__(self):
        return f"Exact({self.char!r})"


def advance(symbol):
    """
    Returns the number of target characters consumed by a transition symbol.
    """

    return 0 if symbol is EMPTY else 1


def edit_cost(symbol):
    """
    Returns the number of edits charged for taking a transition symbol.
    """

    return 0 if isinstance(symbol, Exact) else 1


def compatible(symbol, char):
    """
    Checks whether a transition symbol can be taken on the target character
    ``char``.

    Args:
        symbol: An :class:`Exact` instance, ``GLOB`` or ``EMPTY``.
        char (str): The current target character.

    Returns:
        bool: True if the symbol accepts the character. ``GLOB`` and ``EMPTY``
        accept any character; ``EMPTY`` does not consume it.
    """

    if isinstance(symbol, Exact):
        return symbol.char == char
    return True


# Base class


class Automaton:
    """
    Base class for edit-distance automata.

    An automaton is fixed to one pattern and one edit budget for its whole
    lifetime, and answers whether a target string is within ``max_errors``
    single-character insertions, deletions and substitutions of the pattern.

    Attributes:
        pattern (str): The pattern to match against.
        max_errors (int): The maximum number of edits on an accepted path.
    """

    def __init__(self, pattern, max_errors):
        """
        Initializes the automaton.

        Args:
            pattern (str): The pattern to match against.
            max_errors (int): The edit budget. Must not be negative.

        Raises:
            ValueError: If ``max_errors`` is negative.
        """
        if max_errors < 0:
            raise ValueError(f"max_errors must be non-negative, got {max_errors}")
        self.pattern = pattern
        self.max_errors = max_errors

    def __repr__(self):
        return f"{self.__class__.__name__}({self.pattern!r}, {self.max_errors})"

    @cached_property
    def pattern_len(self):
        return len(self.pattern)

    def is_match(self, target):
        """
        Checks if the target is within the edit budget of the pattern.

        Args:
            target (str): The string to check.

        Returns:
            bool: True if the target matches, False otherwise.

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def filter(self, targets):
        """
        Yields the strings in ``targets`` that match this automaton, in order.

        Example:
            >>> aut = SimulatedAutomaton("alfa", 1)
            >>> list(aut.filter(["alfa", "alpha", "alfas", "bravo"]))
            ['alfa', 'alfas']
        """
        for target in targets:
            if self.is_match(target):
                yield target
