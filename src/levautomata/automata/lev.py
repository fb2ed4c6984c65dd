from collections import namedtuple

from levautomata.automata.compiled import CompiledAutomaton
from levautomata.automata.simulated import SimulatedAutomaton
from levautomata.util import within_distance

Comparison = namedtuple("Comparison", "target simulated compiled reference")


def simulated_automaton(pattern, k):
    """
    Generate a simulated Levenshtein automaton for a given pattern and maximum
    edit distance.

    Args:
        pattern (str): The pattern to generate the automaton for.
        k (int): The maximum edit distance allowed.

    Returns:
        SimulatedAutomaton: The generated automaton.

    """
    return SimulatedAutomaton(pattern, k)


def compiled_automaton(pattern, k):
    """
    Generate a compiled Levenshtein automaton for a given pattern and maximum
    edit distance.

    Args:
        pattern (str): The pattern to generate the automaton for.
        k (int): The maximum edit distance allowed.

    Returns:
        CompiledAutomaton: The generated automaton.

    Raises:
        ConstructionError: If the pattern and budget cannot be compiled.

    """
    return CompiledAutomaton(simulated_automaton(pattern, k))


def compare(simulated, compiled, targets):
    """
    Runs both automata and the reference edit distance over ``targets``.

    ``compiled`` may be None, in which case the ``compiled`` field of every
    result is None.

    Returns:
        list: One :class:`Comparison` per target, in order.
    """
    results = []
    for target in targets:
        results.append(
            Comparison(
                target,
                simulated.is_match(target),
                None if compiled is None else compiled.is_match(target),
                within_distance(simulated.pattern, target, simulated.max_errors),
            )
        )
    return results
