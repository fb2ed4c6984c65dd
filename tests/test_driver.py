from io import StringIO

import pytest
from levautomata.automata.lev import compare, compiled_automaton, simulated_automaton
from levautomata.support.driver import main


def run(argv):
    out = StringIO()
    status = main(argv, stream=out)
    return status, out.getvalue()


def test_defaults():
    status, text = run([])
    assert status == 0
    assert 'Building simulated automaton with pattern "Hello" and fuzziness 2' in text
    assert "5 states." in text
    assert 'Checking string "Hello,,"' in text
    assert "Compiled automaton: True" in text
    assert "Compiled automaton: False" in text
    assert "Edit distance check: False" in text


def test_divergence_and_dump():
    status, text = run(["-d", "Hallo"])
    assert status == 0
    assert "@ 0 (0, 0)" in text
    assert "Simulated automaton: True" in text
    assert "Compiled automaton: False" in text
    assert "Edit distance check: True" in text


def test_construction_failure():
    status, text = run(["-p", "abc", "-k", "0", "abc", "abd"])
    assert status == 1
    assert "Failed: construction failed: invalid budget/pattern" in text
    assert "Compiled automaton:" not in text
    assert "Simulated automaton: True" in text
    assert "Simulated automaton: False" in text


def test_negative_budget():
    with pytest.raises(SystemExit):
        run(["-k", "-1"])


def test_compare():
    nfa = simulated_automaton("Hello", 2)
    dfa = compiled_automaton("Hello", 2)
    results = compare(nfa, dfa, ["Hello", "Hallo"])
    assert [tuple(r) for r in results] == [
        ("Hello", True, True, True),
        ("Hallo", True, False, True),
    ]

    results = compare(nfa, None, ["Hello"])
    assert results[0].compiled is None
    assert results[0].simulated
