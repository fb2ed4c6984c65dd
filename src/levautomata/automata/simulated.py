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

from levautomata.automata.fsa import FAIL, MATCH, START, Automaton, State


class SimulatedAutomaton(Automaton):
    """
    Edit-distance automaton that is never materialized.

    The automaton holds only the pattern and the budget. Every query explores
    the nondeterministic state space on demand, starting from ``(0, 0)``, and
    accepts if any path of at most ``max_errors`` edits reaches acceptance.

    Example:
        >>> aut = SimulatedAutomaton("Hello", 2)
        >>> aut.is_match("Hallo")
        True
        >>> aut.is_match("Help!!")
        False
    """

    def step(self, state, char):
        """
        Returns the outcomes offered at ``state`` for the target character
        ``char``.

        Args:
            state (State): The current ``(index, errors)`` pair.
            char (str): The current target character.

        Returns:
            list: ``(State, output)`` pairs. ``output`` is ``MATCH`` if the
            pattern is exhausted, ``FAIL`` if the budget is spent on a
            mismatch, or the number of target characters consumed (0 or 1).
            With budget left the order is deletion, insertion, then
            match/substitution.
        """

        index, errors = state
        if index == self.pattern_len:
            return [(state, MATCH)]

        cost = 0 if self.pattern[index] == char else 1
        both_advance = (State(index + 1, errors + cost), 1)

        if errors == self.max_errors:
            if cost:
                return [(state, FAIL)]
            return [both_advance]

        return [
            # Deletion
            (State(index + 1, errors + 1), 0),
            # Insertion
            (State(index, errors + 1), 1),
            # Match or substitution
            both_advance,
        ]

    def _accepts_at_end(self, state):
        # Target exhausted: the rest of the pattern must be deleted
        return self.pattern_len - state.index <= self.max_errors - state.errors

    def is_match(self, target):
        target_len = len(target)
        stack = [(START, 0)]
        seen = set(stack)
        while stack:
            state, pos = stack.pop()
            if pos >= target_len:
                if self._accepts_at_end(state):
                    return True
                continue

            for newstate, output in self.step(state, target[pos]):
                if output is MATCH:
                    # The characters after this one can only be absorbed as
                    # edits
                    if target_len - pos - 1 < self.max_errors - newstate.errors:
                        return True
                elif output is FAIL:
                    continue
                else:
                    item = (newstate, pos + output)
                    if item not in seen:
                        seen.add(item)
                        stack.append(item)
        return False
