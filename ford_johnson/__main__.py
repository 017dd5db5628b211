"""
Command-line interface: sorts non-negative integers with :func:`ford_johnson.merge_insertion_sort`
in several container types, and reports timing and comparison counts.

Copyright © 2025 Hauke Dämpfling (haukex@zero-g.net)

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED “AS IS” AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
"""
import re
import sys
import time
import logging
import argparse
from collections import deque
from collections.abc import Callable, Iterable, MutableSequence, Sequence
from typing import Optional
from ford_johnson import merge_insertion_sort, merge_insertion_max_comparisons, first_unsorted_index

#: The largest accepted input number.
INT_MAX = 2**31 - 1

#: The containers that the input is sorted in, by display name.
CONTAINERS :dict[str, Callable[[Iterable[int]], MutableSequence[int]]] = {
    'list': list,
    'deque': deque,
}

_logger = logging.getLogger(__name__)

def non_negative_int(text :str) -> int:
    """Argument type for decimal integers from 0 to :data:`INT_MAX`."""
    if text.startswith('-'):
        raise argparse.ArgumentTypeError(f"negative numbers are not allowed: {text!r}")
    if not re.fullmatch(r'[0-9]+', text):
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    value = int(text)
    if value > INT_MAX:
        raise argparse.ArgumentTypeError(f"number too large (max. {INT_MAX}): {text!r}")
    return value

def format_sequence(seq :Sequence[int], show :Optional[int] = None) -> str:
    """Formats the items separated by spaces, truncated to ``show`` items if given."""
    if show is not None and len(seq) > show:
        return ' '.join( str(seq[i]) for i in range(show) ) + ' [...]'
    return ' '.join( str(x) for x in seq )

def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ford-johnson',
        description='Sort non-negative integers with the Ford-Johnson merge-insertion sort and count the comparisons.')
    parser.add_argument('-v', '--verbose', action='count', default=0,
        help='log more information (repeat for debug output)')
    parser.add_argument('--show', type=int, metavar='N',
        help='only display the first N numbers of the sequence')
    parser.add_argument('--no-verify', dest='verify', action='store_false',
        help="don't check that the results are sorted")
    parser.add_argument('numbers', type=non_negative_int, nargs='+', metavar='NUMBER',
        help='the numbers to sort')
    return parser

def main(argv :Optional[Sequence[str]] = None) -> int:
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose>1 else logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')
    numbers :list[int] = args.numbers
    max_comps = merge_insertion_max_comparisons(len(numbers))

    results :dict[str, tuple[MutableSequence[int], int, int]] = {}
    for name, container in CONTAINERS.items():
        seq = container(numbers)
        start = time.perf_counter_ns()
        _, comparisons = merge_insertion_sort(seq)
        elapsed_us = ( time.perf_counter_ns() - start ) // 1000
        _logger.info("%s: %d comparisons in %d us", name, comparisons, elapsed_us)
        results[name] = (seq, comparisons, elapsed_us)

    width = max( len(name) for name in results )
    first = next(iter(results.values()))[0]
    print(f"Before: {format_sequence(numbers, args.show)}")
    print(f"After:  {format_sequence(first, args.show)}")
    for name, (_, _, elapsed_us) in results.items():
        print(f"Time to process a range of {len(numbers):,} elements with {name:<{width}} : {elapsed_us:,} us")

    ok = True
    for name, (_, comparisons, _) in results.items():
        within = comparisons <= max_comps
        ok = ok and within
        print(f"Number of comparisons ({name:<{width}}): {comparisons:,} / {max_comps:,} {'OK' if within else 'NOT OK'}")
    if args.verify:
        for name, (seq, _, _) in results.items():
            idx = first_unsorted_index(seq)
            if idx is None:
                print(f"Container {name:<{width}} is SORTED")
            else:
                ok = False
                print(f"Container {name:<{width}} is NOT SORTED (at index {idx}: {seq[idx]} > {seq[idx+1]})")
    return 0 if ok else 1

if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
