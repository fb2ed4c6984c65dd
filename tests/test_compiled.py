import threading
from io import StringIO

import pytest
from levautomata.automata.compiled import CompiledAutomaton, ConstructionError
from levautomata.automata.fsa import EMPTY, FAIL, GLOB, MATCH, START, Exact, State
from levautomata.automata.simulated import SimulatedAutomaton
from levautomata.util import within_distance
from loguru import logger

HELLO_TARGETS = ("Hello", "Hello,", "Hello,,", "Hello" + " " * 7 + ",")


def compile_pair(pattern, k):
    nfa = SimulatedAutomaton(pattern, k)
    return nfa, CompiledAutomaton(nfa)


def test_hello():
    nfa, dfa = compile_pair("Hello", 2)
    assert dfa.is_match("Hello")
    assert dfa.is_match("Hello,")
    assert dfa.is_match("Hello,,")
    assert not dfa.is_match("Hello" + " " * 7 + ",")

    # On these the two automata agree with each other and with the true
    # edit distance
    for target in HELLO_TARGETS:
        expected = within_distance("Hello", target, 2)
        assert nfa.is_match(target) == expected
        assert dfa.is_match(target) == expected


def test_agrees_on_trailing_characters():
    for k in (2, 3, 4):
        nfa, dfa = compile_pair("alfa", k)
        for n in range(k + 3):
            target = "alfa" + "x" * n
            assert dfa.is_match(target) == nfa.is_match(target), (k, target)
            assert dfa.is_match(target) == (n <= k)


def test_table_shape():
    dfa = CompiledAutomaton.from_pattern("Hello", 2)
    assert len(dfa) == 5
    assert dfa.all_states() == [State(i, 0) for i in range(5)]
    assert dfa.state_id(START) == 0
    assert dfa.state_id(State(3, 0)) == 3

    assert dfa.transitions(START) == {Exact("H"): State(1, 0)}
    assert dfa.transitions(State(3, 0)) == {Exact("l"): State(4, 0)}
    assert dfa.transitions(State(4, 0)) == {Exact("o"): MATCH}
    # Never reached, so never stored
    assert dfa.transitions(State(0, 1)) == {}
    with pytest.raises(KeyError):
        dfa.state_id(State(5, 0))

    for state in dfa.all_states():
        assert state.index < dfa.pattern_len
        assert state.errors <= dfa.max_errors
        symbols = dfa.transitions(state)
        assert GLOB not in symbols
        assert EMPTY not in symbols


def test_single_character_pattern():
    dfa = CompiledAutomaton.from_pattern("a", 2)
    assert dfa.transitions(START) == {Exact("a"): MATCH}
    assert dfa.is_match("a")
    assert dfa.is_match("ab")
    assert dfa.is_match("abc")
    assert not dfa.is_match("abcd")
    assert not dfa.is_match("b")
    assert not dfa.is_match("")


def test_edits_not_reachable():
    # The edit transitions are gated on an exhausted budget, which the start
    # state never has when max_errors > 0, so the compiled automaton only
    # accepts the pattern plus trailing characters. These are the known
    # divergences from the simulated automaton.
    nfa, dfa = compile_pair("Hello", 2)
    for target in ("Hallo", "Helo", "Hell", "ello", "xHello", "Hxllo"):
        assert nfa.is_match(target)
        assert within_distance("Hello", target, 2)
        assert not dfa.is_match(target), target


def test_budget_one_rejects_everything():
    nfa, dfa = compile_pair("Hello", 1)
    assert len(dfa) == 1
    assert dfa.transitions(START) == {Exact("H"): FAIL}
    for target in ("Hello", "Hello,", "Hallo", "H", ""):
        assert not dfa.is_match(target)
    # The simulated automaton still matches the pattern itself
    assert nfa.is_match("Hello")
    assert nfa.is_match("Hello,")


def test_budget_zero_raises():
    nfa = SimulatedAutomaton("Hello", 0)
    with pytest.raises(ConstructionError) as excinfo:
        CompiledAutomaton(nfa)
    e = excinfo.value
    assert e.message.startswith("construction failed: invalid budget/pattern")
    assert str(e) == e.message
    assert e.state.errors == 1
    assert e.pattern == "Hello"
    assert e.max_errors == 0

    with pytest.raises(ConstructionError):
        CompiledAutomaton.from_pattern("a", 0)


def test_empty_pattern_raises():
    for k in range(4):
        with pytest.raises(ConstructionError) as excinfo:
            CompiledAutomaton.from_pattern("", k)
        assert excinfo.value.state == START

    # The simulated automaton accepts immediately, within the budget
    assert SimulatedAutomaton("", 2).is_match("ab")


def test_matches_itself():
    for pattern in ("a", "ab", "Hello", "alfa bravo"):
        for k in (2, 3):
            assert CompiledAutomaton.from_pattern(pattern, k).is_match(pattern)


def test_idempotent():
    dfa = CompiledAutomaton.from_pattern("Hello", 2)
    for target in HELLO_TARGETS + ("Hallo", ""):
        first = dfa.is_match(target)
        for _ in range(3):
            assert dfa.is_match(target) == first


def test_long_pattern():
    pattern = "ab" * 1500
    dfa = CompiledAutomaton.from_pattern(pattern, 2)
    assert len(dfa) == 3000
    assert dfa.is_match(pattern)
    assert dfa.is_match(pattern + "zz")
    assert not dfa.is_match(pattern[:-1])


def test_concurrent_queries():
    dfa = CompiledAutomaton.from_pattern("Hello", 2)
    targets = HELLO_TARGETS * 50
    expected = [dfa.is_match(t) for t in targets]
    results = {}

    def run(n):
        results[n] = [dfa.is_match(t) for t in targets]

    threads = [threading.Thread(target=run, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    for result in results.values():
        assert result == expected


def test_dump():
    dfa = CompiledAutomaton.from_pattern("Hello", 2)
    out = StringIO()
    dfa.dump(out)
    text = out.getvalue()
    assert "@ 0 (0, 0)" in text
    assert "Exact('H') -> (1, 0)" in text
    assert "Exact('o') -> <MATCH> ||" in text


def test_logging():
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        CompiledAutomaton.from_pattern("Hello", 2)
        with pytest.raises(ConstructionError):
            CompiledAutomaton.from_pattern("Hello", 0)
    finally:
        logger.remove(handler_id)

    assert any("Compiled 'Hello': 5 states" in m for m in messages)
    assert any("construction failed" in m for m in messages)


def test_negative_budget():
    with pytest.raises(ValueError):
        CompiledAutomaton.from_pattern("Hello", -1)
