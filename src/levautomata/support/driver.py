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
Command-line driver that builds both automata for one pattern and budget and
prints how each of them answers a list of target strings, next to the true
edit distance check.

Usage: python -m levautomata.support.driver [options] [target ...]
"""

import sys
from optparse import OptionParser

from levautomata.automata.compiled import ConstructionError
from levautomata.automata.lev import compare, compiled_automaton, simulated_automaton
from levautomata.util import now

DEFAULT_TARGETS = ("Hello", "Hello,", "Hello,,", "Hello       ,")


def _parser():
    p = OptionParser(usage="usage: %prog [options] [target ...]")
    p.add_option(
        "-p",
        "--pattern",
        dest="pattern",
        metavar="PATTERN",
        help="Pattern to match the targets against.",
        default="Hello",
    )
    p.add_option(
        "-k",
        "--max-errors",
        dest="max_errors",
        type="int",
        metavar="N",
        help="Maximum number of edits.",
        default=2,
    )
    p.add_option(
        "-d",
        "--dump",
        dest="dump",
        action="store_true",
        help="Print the compiled transition table.",
        default=False,
    )
    return p


def main(argv=None, stream=sys.stdout):
    """
    Runs the driver.

    Args:
        argv (list, optional): Command-line arguments, without the program
            name. Defaults to ``sys.argv[1:]``.
        stream (file, optional): Where to print. Defaults to sys.stdout.

    Returns:
        int: 0 on success, 1 if the compiled automaton could not be built.
    """

    parser = _parser()
    options, targets = parser.parse_args(argv)
    if options.max_errors < 0:
        parser.error("--max-errors must not be negative")
    targets = targets or DEFAULT_TARGETS
    pattern = options.pattern
    k = options.max_errors

    print(
        f'Building simulated automaton with pattern "{pattern}" and fuzziness {k}...',
        file=stream,
    )
    t = now()
    simulated = simulated_automaton(pattern, k)
    print(f"Done in {now() - t:0.6f} s.", file=stream)

    print("Building compiled automaton from previous automaton...", file=stream)
    t = now()
    status = 0
    try:
        compiled = compiled_automaton(pattern, k)
    except ConstructionError as e:
        print("Failed:", e.message, file=stream)
        compiled = None
        status = 1
    else:
        print(f"Done in {now() - t:0.6f} s, {len(compiled)} states.", file=stream)
        if options.dump:
            compiled.dump(stream)

    for result in compare(simulated, compiled, targets):
        print(f'\nChecking string "{result.target}"', file=stream)
        print("Simulated automaton:", result.simulated, file=stream)
        if compiled is not None:
            print("Compiled automaton:", result.compiled, file=stream)
        print("Edit distance check:", result.reference, file=stream)

    return status


if __name__ == "__main__":
    sys.exit(main())
