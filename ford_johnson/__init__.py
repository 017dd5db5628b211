"""
In-Place Merge-Insertion Sort a.k.a. Ford-Johnson Algorithm
===========================================================

The Ford-Johnson algorithm[1], also known as the merge-insertion sort[2,3] uses the minimum
number of possible comparisons for lists of 22 items or less, and at the time of writing has
the fewest comparisons known for lists of 46 items or less. This package implements it in place
on any mutable, index-addressable sequence (``list``, ``collections.deque``, ``array.array``, ...)
and counts every comparison it makes, so that the count can be checked against the theoretical
worst case given by :func:`merge_insertion_max_comparisons`.

>>> from ford_johnson import merge_insertion_sort, merge_insertion_max_comparisons
>>> merge_insertion_sort([3, 1, 2])
SortResult(sorted=[1, 2, 3], comparisons=3)
>>> result = merge_insertion_sort([11, 2, 17, 0, 16, 8, 6, 15, 10, 3, 21, 1, 18, 9, 14, 19, 12, 5, 4, 20, 13])
>>> result.comparisons <= merge_insertion_max_comparisons(21) == 66
True

Instead of building a separate "main chain" data structure, the items are kept in the input
sequence the whole time and are moved around in *blocks*: at recursion level ``L``, a block is a
contiguous run of ``2**(L-1)`` items, and the last item of a block is its *representative*. The
first phase compares neighboring blocks by their representatives and swaps them so that the larger
one comes second, doubling the block size at each level until only one block is left. The second
phase then walks back down the levels, and at each level moves the "larger" blocks to the front
(the main chain), and inserts the remaining (pending) blocks into it in the order given by the
Jacobsthal numbers, using a binary search that is limited to the part of the main chain that is
known to be relevant.

**References**

1. Ford, L. R., & Johnson, S. M. (1959). A Tournament Problem.
   The American Mathematical Monthly, 66(5), 387-389. https://doi.org/10.1080/00029890.1959.11989306
2. Knuth, D. E. (1998). The Art of Computer Programming: Volume 3: Sorting and Searching (2nd ed.).
   Addison-Wesley. https://cs.stanford.edu/~knuth/taocp.html#vol3
3. https://en.wikipedia.org/wiki/Merge-insertion_sort

API
---

.. autoclass:: ford_johnson.T

.. autoclass:: ford_johnson.ComparisonCounter
    :members:

.. autoclass:: ford_johnson.SortResult

.. autofunction:: ford_johnson.merge_insertion_sort

.. autofunction:: ford_johnson.merge_insertion_max_comparisons

.. autofunction:: ford_johnson.jacobsthal_sequence

.. autofunction:: ford_johnson.insertion_order

.. autofunction:: ford_johnson.is_sorted

.. autofunction:: ford_johnson.first_unsorted_index

Author, Copyright and License
-----------------------------

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
import logging
from collections.abc import Generator, MutableSequence, Sequence
from typing import TypeVar, NamedTuple, Optional
from math import ceil, log2

#: A type of object that can be sorted by :func:`merge_insertion_sort`.
#: Items must be totally ordered by the ``<`` operator; duplicates are allowed.
T = TypeVar('T')

_logger = logging.getLogger(__name__)

class ComparisonCounter:
    """Performs and counts the item comparisons of a sort.

    Every comparison :func:`merge_insertion_sort` makes goes through :meth:`less`. A new counter
    is created for each call unless the caller passes one in, in which case the counts of
    several sorts accumulate in it. A counter must not be shared between concurrent sorts."""

    def __init__(self) -> None:
        #: The number of comparisons made so far.
        self.count :int = 0

    def less(self, a :T, b :T) -> bool:
        """Returns ``a < b`` and increments :attr:`count`."""
        self.count += 1
        return a < b

    def reset(self) -> None:
        """Sets :attr:`count` back to zero."""
        self.count = 0

class SortResult(NamedTuple):
    """The return value of :func:`merge_insertion_sort`."""
    #: The sequence that was passed in, now sorted in ascending order.
    sorted :MutableSequence
    #: The number of comparisons made by this call.
    comparisons :int

# Helper that generates the Jacobsthal numbers, including the duplicate 1.
def _jacobsthal_numbers() -> Generator[int, None, None]:
    # <https://oeis.org/A001045>: a(n) = a(n-1) + 2*a(n-2), with a(0) = 0, a(1) = 1.
    prev :int = 0
    cur :int = 1
    yield prev
    while True:
        yield cur
        prev, cur = cur, cur + 2*prev

def jacobsthal_sequence(bound :int) -> list[int]:
    """Returns the Jacobsthal numbers ``0, 1, 3, 5, 11, 21, ...`` up to and including the first one that is ``>= bound``.

    Since ``J(1) == J(2) == 1``, the second 1 is left out.

    :param bound: Upper bound; zero or less results in an empty list.
    :return: The strictly increasing list of Jacobsthal numbers.
    """
    seq :list[int] = []
    if bound <= 0:
        return seq
    for i,j in enumerate(_jacobsthal_numbers()):
        if i != 2:
            seq.append(j)
        if j >= bound:
            break
    return seq

def insertion_order(num_pending :int, jac_seq :Sequence[int]) -> list[int]:
    """Returns the order in which to insert pending blocks into the main chain.

    Each Jacobsthal number ``j <= num_pending`` is followed by the indices between it and the
    previous Jacobsthal number in descending order, and the indices above the last Jacobsthal
    number are appended in descending order, e.g. ``1, 3, 2, 5, 4, 11, 10, 9, 8, 7, 6, ...``.
    This order guarantees that every pending block is inserted into a part of the main chain
    that has at most ``2**k - 1`` blocks, i.e. needs at most ``k`` comparisons.

    :param num_pending: The number of pending blocks.
    :param jac_seq: The output of :func:`jacobsthal_sequence`.
    :return: A permutation of the 1-based indices ``1..num_pending``.
    """
    order :list[int] = []
    if num_pending <= 0 or not jac_seq:
        return order
    prev :int = 0
    for j in jac_seq:
        if prev < j <= num_pending:
            order.extend(range(j, prev, -1))
            prev = j
    order.extend(range(num_pending, prev, -1))
    return order

# Exchanges the `size` items starting at index `a` with the `size` items starting at index `b`, O(size).
def _swap_blocks(seq :MutableSequence[T], a :int, b :int, size :int) -> None:
    for offset in range(size):
        seq[a+offset], seq[b+offset] = seq[b+offset], seq[a+offset]

# Moves the items in `seq[start:end]` to index `dest <= start`, shifting `seq[dest:start]` to the right, O(end-dest).
def _rotate_block(seq :MutableSequence[T], dest :int, start :int, end :int) -> None:
    assert 0 <= dest <= start <= end <= len(seq)
    size = end - start
    block = [ seq[i] for i in range(start, end) ]
    for i in range(start-1, dest-1, -1):
        seq[i+size] = seq[i]
    for offset, item in enumerate(block):
        seq[dest+offset] = item

# First phase: compare neighboring blocks by their last items and swap them so that the larger
# one comes second, then recurse with doubled block size. Items after the last full pair of
# blocks are not touched. Returns the deepest level at which blocks were compared.
def _sort_pairs(seq :MutableSequence[T], counter :ComparisonCounter, level :int = 1) -> int:
    block_size = 1 << (level-1)
    num_blocks = len(seq) // block_size
    if num_blocks <= 1:
        return level - 1
    _logger.debug("pairing level %d: %d blocks of size %d", level, num_blocks, block_size)
    for i in range(0, len(seq) - 2*block_size + 1, 2*block_size):
        if counter.less( seq[i+2*block_size-1], seq[i+block_size-1] ):
            _swap_blocks(seq, i, i+block_size, block_size)
    return _sort_pairs(seq, counter, level+1)

# The main chain consists of the second block of each pair; the first blocks, an unpaired
# block and any incomplete trailing block are pending.
def _is_main_chain(index :int, block_size :int, total_size :int) -> bool:
    block_num = index // block_size
    if (block_num+1) * block_size > total_size:
        return False
    return block_num % 2 == 1

# Moves all main chain items to the front, keeping the relative order of both parts.
# Returns the index at which the pending items start.
def _rearrange(seq :MutableSequence[T], block_size :int) -> int:
    main_chain :list[T] = []
    pending :list[T] = []
    total_size = len(seq)
    for i, item in enumerate(seq):
        if _is_main_chain(i, block_size, total_size):
            main_chain.append(item)
        else:
            pending.append(item)
    for i, item in enumerate(main_chain + pending):
        seq[i] = item
    return len(main_chain)

# The number of pending blocks at a level, including an unpaired last block.
def _pending_count(num_blocks :int) -> int:
    return num_blocks // 2 + num_blocks % 2

# Index of the first Jacobsthal number >= the pending index; the search for that block
# needs at most this many comparisons.
def _group_index(pend_idx :int, jac_seq :Sequence[int]) -> int:
    for i, j in enumerate(jac_seq):
        if pend_idx <= j:
            return i
    return len(jac_seq)

# The number of main chain blocks (from the start) to search when inserting a block of group `k`.
def _search_window(k :int, pos_pending :int, block_size :int) -> int:
    if k <= 0:
        return 0
    return min(2**k - 1, pos_pending // block_size)

# How many of the pending blocks that were already inserted came before `pend_idx` in the pending area.
def _count_smaller(order :Sequence[int], done :int, pend_idx :int) -> int:
    return sum( 1 for i in order[:done] if i < pend_idx )

# Binary search of the first `num_blocks` blocks of `seq` by their last items. Returns the
# index of the item **before** which a block whose last item is `value` needs to be inserted.
def _bin_insert_index(seq :Sequence[T], value :T, block_size :int, num_blocks :int, counter :ComparisonCounter) -> int:
    left, right = 0, num_blocks
    while left < right:
        mid = left + (right-left) // 2
        if counter.less( value, seq[mid*block_size + block_size - 1] ):
            right = mid
        else:
            left = mid + 1
    return left * block_size

# Second phase, for one level: split the sequence into main chain and pending blocks and insert
# the pending blocks in the Jacobsthal order.
def _insert_pending(seq :MutableSequence[T], block_size :int, num_pending :int, jac_seq :Sequence[int], counter :ComparisonCounter) -> None:
    pos_pending = _rearrange(seq, block_size)
    order = insertion_order(num_pending, jac_seq)
    assert sorted(order) == list(range(1, num_pending+1))
    _logger.debug("inserting %d pending blocks of size %d after index %d in order %r",
        num_pending, block_size, pos_pending, order)

    for i, pend_idx in enumerate(order):
        # The pending area shrinks from the front each time a block is inserted, so locate the
        # block by how many of the blocks before it in the pending area are already gone.
        start = pos_pending + ( pend_idx - 1 - _count_smaller(order, i, pend_idx) ) * block_size
        end = start + block_size
        assert pos_pending <= start and end <= len(seq)

        if pend_idx == 1:
            # The first pending block is not larger than the first main chain block, which is the smallest.
            insert_pos = 0
        else:
            k = _group_index(pend_idx, jac_seq)
            window = _search_window(k, pos_pending, block_size)
            insert_pos = _bin_insert_index(seq, seq[end-1], block_size, window, counter)
            _logger.debug("pending block %d (group %d): searched %d blocks, inserting at %d",
                pend_idx, k, window, insert_pos)
        assert insert_pos <= start

        if insert_pos < start:
            _rotate_block(seq, insert_pos, start, end)
        pos_pending += block_size  # the main chain grew by one block

def merge_insertion_sort(array :MutableSequence[T], counter :Optional[ComparisonCounter] = None) -> SortResult:
    """Merge-Insertion Sort (Ford-Johnson algorithm), in place.

    :param array: Sequence to sort, modified in place. It only needs to support ``len()`` and
        getting and setting items by integer index. Duplicate items are allowed.
    :param counter: Optional :class:`ComparisonCounter` to accumulate comparisons in;
        a fresh one is used if not given.
    :return: The same ``array``, now sorted in ascending order, and the number of comparisons
        made by this call, which is never more than :func:`merge_insertion_max_comparisons`.
    """
    if counter is None:
        counter = ComparisonCounter()
    initial_count = counter.count
    if len(array) <= 1:
        return SortResult(array, 0)

    # Phase 1: order the blocks in pairs, recursively, down to a single block.
    depth = _sort_pairs(array, counter)
    jac_seq = jacobsthal_sequence( len(array)//2 + 1 )

    # Phase 2: at each level, from the deepest one back up, insert the pending blocks.
    # At the deepest level, the main chain is a single block and trivially sorted; at each
    # following level, the blocks of the main chain are the sorted blocks of the level above.
    for level in range(depth, 0, -1):
        block_size = 1 << (level-1)
        num_pending = _pending_count( len(array) // block_size )
        if num_pending > 1:
            _insert_pending(array, block_size, num_pending, jac_seq, counter)

    comparisons = counter.count - initial_count
    _logger.debug("sorted %d items with %d comparisons", len(array), comparisons)
    return SortResult(array, comparisons)

def merge_insertion_max_comparisons(n :int) -> int:
    """Returns the maximum number of comparisons that :func:`merge_insertion_sort` will perform depending on the input length.

    :param n: The number of items in the list to be sorted.
    :return: The expected maximum number of comparisons.
    """
    if n<0:
        raise ValueError("must specify zero or more items")
    # Knuth, TAOCP Vol. 3, 5.3.1: F(n) = sum of ceil(log2(3k/4)) for k = 1..n
    return sum( ceil(log2(3*k/4)) for k in range(1, n+1) )

def first_unsorted_index(seq :Sequence[T]) -> Optional[int]:
    """Returns the first index ``i`` where ``seq[i] > seq[i+1]``, or ``None`` if the sequence is in ascending order."""
    for i in range(len(seq)-1):
        if seq[i+1] < seq[i]:
            return i
    return None

def is_sorted(seq :Sequence[T]) -> bool:
    """Returns whether the sequence is in ascending (non-decreasing) order."""
    return first_unsorted_index(seq) is None
