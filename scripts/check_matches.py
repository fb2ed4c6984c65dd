#!python

"""
This script builds a simulated and a compiled Levenshtein automaton for one
pattern and prints how each of them answers a list of target strings.

Usage: check_matches.py [-p PATTERN] [-k N] [-d] [target ...]

With no targets, the pattern "Hello" is checked against a few strings with
trailing punctuation.

Note: The levautomata package must be installed in order to run this script.
"""

import sys

from levautomata.support.driver import main

sys.exit(main())
