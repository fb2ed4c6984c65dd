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

import sys

from loguru import logger

from levautomata.automata.fsa import (
    EMPTY,
    FAIL,
    GLOB,
    MATCH,
    START,
    Automaton,
    Exact,
    State,
    advance,
    compatible,
    edit_cost,
)
from levautomata.automata.simulated import SimulatedAutomaton

# Exceptions


class ConstructionError(Exception):
    """
    Exception raised when building a compiled automaton reaches a state
    outside the valid state space.

    A state is valid if its error count does not exceed the budget and its
    pattern index points at a pattern character. Some budget and pattern
    combinations (a budget of 0, or an empty pattern) lead the construction
    to such a state.

    Attributes:
        message -- explanation of the error
        state -- the offending ``(index, errors)`` state
        pattern -- the pattern being compiled
        max_errors -- the budget being compiled
    """

    def __init__(self, message, state=None, pattern=None, max_errors=None):
        self.message = message
        self.state = state
        self.pattern = pattern
        self.max_errors = max_errors
        super().__init__(message)


# Implementation


class CompiledAutomaton(Automaton):
    """
    Edit-distance automaton backed by a transition table that is built once,
    eagerly, by exploring every state reachable from ``(0, 0)``.

    The table is flat: each reachable state is given a dense integer id in
    discovery order (the start state is 0), and ``_table[id]`` maps each
    transition symbol to an outcome. Pending outcomes are stored as the
    destination state's id; ``MATCH`` and ``FAIL`` are stored as themselves.
    States whose pattern index reaches the end of the pattern are never
    stored; they appear only as ``MATCH``.

    The table is never modified after the constructor returns, so a compiled
    automaton can be queried from several threads at once.
    """

    def __init__(self, source):
        """
        Builds the transition table from the pattern and budget of a
        :class:`SimulatedAutomaton`.

        Args:
            source (SimulatedAutomaton): Supplies the pattern and budget.

        Raises:
            ConstructionError: If exploration reaches a state with more
                errors than the budget or an index past the last pattern
                character.
        """

        super().__init__(source.pattern, source.max_errors)
        self._ids = {}
        self._states = []
        self._table = []
        self._explore()

    @classmethod
    def from_pattern(cls, pattern, max_errors):
        return cls(SimulatedAutomaton(pattern, max_errors))

    def __len__(self):
        return len(self._states)

    def _state_id(self, state):
        # Returns (id, is_new)
        if state in self._ids:
            return self._ids[state], False
        sid = len(self._states)
        self._ids[state] = sid
        self._states.append(state)
        self._table.append(None)
        return sid, True

    def _check_state(self, state):
        if state.errors <= self.max_errors and state.index < self.pattern_len:
            return
        message = (
            f"construction failed: invalid budget/pattern "
            f"(reached state {state!r} with pattern {self.pattern!r} "
            f"and max_errors={self.max_errors})"
        )
        logger.debug(message)
        raise ConstructionError(message, state, self.pattern, self.max_errors)

    def _state_transitions(self, state):
        index, errors = state

        if errors + 1 == self.max_errors:
            preempt = FAIL
        elif index + 1 == self.pattern_len:
            preempt = MATCH
        else:
            preempt = None

        trans = {
            Exact(self.pattern[index]): (
                State(index + 1, errors) if preempt is None else preempt
            )
        }

        # The edit transitions are only offered once the budget is exhausted
        if errors == self.max_errors:
            # Deletion
            trans[EMPTY] = State(index, errors + 1)
            # Insertion and substitution share the GLOB key
            trans[GLOB] = State(index + 1, errors + 1) if preempt is None else preempt

        return trans

    def _explore(self):
        logger.debug(
            "Compiling automaton for {!r} with max_errors={}",
            self.pattern,
            self.max_errors,
        )

        self._state_id(START)
        frontier = [START]
        while frontier:
            state = frontier.pop()
            self._check_state(state)

            entry = {}
            for symbol, outcome in self._state_transitions(state).items():
                if isinstance(outcome, State):
                    sid, is_new = self._state_id(outcome)
                    if is_new:
                        frontier.append(outcome)
                    outcome = sid
                entry[symbol] = outcome
            self._table[self._ids[state]] = entry

        logger.debug("Compiled {!r}: {} states", self.pattern, len(self._states))

    def all_states(self):
        """
        Returns the list of stored states, in id order.
        """
        return list(self._states)

    def state_id(self, state):
        """
        Returns the dense id of a stored state.

        Raises:
            KeyError: If the state is not in the table.
        """
        return self._ids[state]

    def transitions(self, state):
        """
        Returns the transitions of a stored state as a dictionary mapping each
        symbol to ``MATCH``, ``FAIL`` or the destination :class:`State`.

        Returns an empty dictionary if the state is not in the table.
        """
        if state not in self._ids:
            return {}
        states = self._states
        return {
            symbol: states[outcome] if isinstance(outcome, int) else outcome
            for symbol, outcome in self._table[self._ids[state]].items()
        }

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the transition table.

        The start state is marked with ``@``; accepting transitions are marked
        with ``||``.
        """
        for sid, state in enumerate(self._states):
            beg = "@" if sid == 0 else " "
            print(beg, sid, state, file=stream)
            for symbol, outcome in self.transitions(state).items():
                end = "||" if outcome is MATCH else ""
                print("   ", symbol, "->", outcome, end, file=stream)

    def is_match(self, target):
        target_len = len(target)
        states = self._states
        table = self._table

        stack = [(0, 0)]
        seen = set(stack)
        while stack:
            sid, pos = stack.pop()
            if pos >= target_len:
                # No character left to take a transition on
                continue

            char = target[pos]
            errors = states[sid].errors
            for symbol, outcome in table[sid].items():
                if not compatible(symbol, char):
                    continue

                newpos = pos + advance(symbol)
                if outcome is MATCH:
                    remaining = self.max_errors - (errors + edit_cost(symbol))
                    if target_len - newpos <= remaining:
                        return True
                elif outcome is FAIL:
                    continue
                else:
                    item = (outcome, newpos)
                    if item not in seen:
                        seen.add(item)
                        stack.append(item)
        return False
