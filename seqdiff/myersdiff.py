# This implementation is based on the Myers diff algorithm.
# See http://www.xmailserver.org/diff2.pdf
#
# The divide-and-conquer "middle snake" search runs off an explicit work stack
# instead of recursion. Sequences are passed with offsets and lengths and are
# never sliced.

import logging
from collections.abc import Callable, Sequence

from seqdiff.chunk import Chunk
from seqdiff.errors import InvariantError
from seqdiff.window import Window


logger = logging.getLogger(__name__)

Comparer = Callable[[object, object], bool]


def find_modifications(
    a: Sequence,
    aoff: int,
    n: int,
    b: Sequence,
    boff: int,
    m: int,
    comparer: Comparer,
) -> tuple[list[bool], list[bool]]:
    """
    Computes the shortest edit script between a[aoff:aoff+n] and b[boff:boff+m].

    Returns two masks, ``modified_a`` (length n) and ``modified_b`` (length m).
    Unmarked positions, read in order, form a longest common subsequence under
    ``comparer``; marked positions are deletions (in a) and insertions (in b).
    ``comparer`` is always called as ``comparer(a_item, b_item)``.
    """
    modified_a = [False] * n
    modified_b = [False] * m

    # Diagonals k = x - y range over [-max_k, max_k]; every sub-problem biases
    # its own k by an offset so the lists are indexed from zero.
    max_k = n + m + 1
    vector_size = 2 * max_k + 2
    # Furthest x reached on each diagonal by the forward search from (lower_a, lower_b)
    down = [0] * vector_size
    # Furthest (smallest) x reached on each diagonal by the reverse search from (upper_a, upper_b)
    up = [0] * vector_size

    stack = [(0, n, 0, m)]
    sub_problems = 0

    while stack:
        lower_a, upper_a, lower_b, upper_b = stack.pop()
        sub_problems += 1

        # Common prefix
        while lower_a < upper_a and lower_b < upper_b and comparer(a[aoff + lower_a], b[boff + lower_b]):
            lower_a += 1
            lower_b += 1

        # Common suffix
        while lower_a < upper_a and lower_b < upper_b and comparer(a[aoff + upper_a - 1], b[boff + upper_b - 1]):
            upper_a -= 1
            upper_b -= 1

        if lower_a == upper_a:
            # Whatever is left of b was inserted.
            for y in range(lower_b, upper_b):
                modified_b[y] = True
            continue
        if lower_b == upper_b:
            # Whatever is left of a was deleted.
            for x in range(lower_a, upper_a):
                modified_a[x] = True
            continue

        cut_a, cut_b = _middle_snake(
            a, aoff, lower_a, upper_a,
            b, boff, lower_b, upper_b,
            comparer, down, up, max_k,
        )

        stack.append((lower_a, cut_a, lower_b, cut_b))
        stack.append((cut_a, upper_a, cut_b, upper_b))

    logger.debug(f"Myers search over {n}x{m} items solved {sub_problems} sub-problems")
    return modified_a, modified_b


def _middle_snake(a, aoff, lower_a, upper_a, b, boff, lower_b, upper_b, comparer, down, up, max_k):  # noqa: C901
    """
    Finds a point (cut_a, cut_b) lying on a shortest edit path through the box
    [lower_a, upper_a) x [lower_b, upper_b).

    The forward and reverse searches advance one edit at a time until their
    frontiers overlap on a diagonal. With an odd delta the overlap can only be
    seen from the forward pass, with an even delta only from the reverse pass.
    ``down`` and ``up`` are scratch vectors shared by every sub-problem of one
    search; each sub-problem only reads entries it has written itself.
    """
    # Diagonal on which the forward search starts
    down_k = lower_a - lower_b
    # Diagonal on which the reverse search starts
    up_k = upper_a - upper_b

    delta = (upper_a - lower_a) - (upper_b - lower_b)
    odd_delta = (delta & 1) != 0

    down_offset = max_k - down_k
    up_offset = max_k - up_k

    max_d = ((upper_a - lower_a + upper_b - lower_b) // 2) + 1

    down[down_offset + down_k + 1] = lower_a
    up[up_offset + up_k - 1] = upper_a

    for d in range(max_d + 1):
        down_start = down_k - d
        down_end = down_k + d
        up_start = up_k - d
        up_end = up_k + d

        # Forward pass
        for k in range(down_start, down_end + 1, 2):
            idx_k = down_offset + k
            if k == down_start:
                # Step down (insertion)
                x = down[idx_k + 1]
            else:
                # Step right (deletion), unless stepping down reaches further
                x = down[idx_k - 1] + 1
                if k < down_end and down[idx_k + 1] >= x:
                    x = down[idx_k + 1]
            y = x - k

            while x < upper_a and y < upper_b and comparer(a[aoff + x], b[boff + y]):
                x += 1
                y += 1
            down[idx_k] = x

            if odd_delta and up_start < k < up_end and up[up_offset + k] <= x:
                return x, x - k

        # Reverse pass
        for k in range(up_start, up_end + 1, 2):
            idx_k = up_offset + k
            if k == up_end:
                # Step up (insertion)
                x = up[idx_k - 1]
            else:
                # Step left (deletion), unless stepping up reaches further
                x = up[idx_k + 1] - 1
                if k > up_start and up[idx_k - 1] < x:
                    x = up[idx_k - 1]
            y = x - k

            while x > lower_a and y > lower_b and comparer(a[aoff + x - 1], b[boff + y - 1]):
                x -= 1
                y -= 1
            up[idx_k] = x

            if not odd_delta and down_start <= k <= down_end and x <= down[down_offset + k]:
                cut_a = down[down_offset + k]
                return cut_a, cut_a - k

    raise InvariantError(
        f"No middle snake found within {max_d} steps for a[{lower_a}:{upper_a}] / b[{lower_b}:{upper_b}]"
    )


def build_chunks(a: Window, modified_a: list[bool], b: Window, modified_b: list[bool]) -> tuple[Chunk, ...]:
    """
    Groups the modification masks of ``a`` and ``b`` into ordered chunks.

    Runs where both sides are unmarked become equal chunks. At each boundary
    the marked run of ``a`` is drained first and emitted as a deletion, then
    the marked run of ``b`` as an insertion, so a replaced region always reads
    as one deletion followed by one insertion.
    """
    chunks = []
    n = len(a)
    m = len(b)
    item_a = item_b = 0
    start_a = start_b = 0

    def emit_equal():
        if item_a - start_a != item_b - start_b:
            raise InvariantError(
                f"Equal run lengths differ: a[{start_a}:{item_a}] vs b[{start_b}:{item_b}]"
            )
        chunks.append(Chunk(a.get_subset(start_a, item_a - start_a), b.get_subset(start_b, item_b - start_b)))

    while item_a < n or item_b < m:
        # Unchanged items
        if item_a < n and not modified_a[item_a] and item_b < m and not modified_b[item_b]:
            item_a += 1
            item_b += 1
            continue

        if item_a > start_a:
            emit_equal()
        start_a = item_a
        start_b = item_b

        while item_a < n and (item_b >= m or modified_a[item_a]):
            item_a += 1
        while item_b < m and (item_a >= n or modified_b[item_b]):
            item_b += 1

        if item_a > start_a:
            chunks.append(Chunk(a.get_subset(start_a, item_a - start_a), None))
        if item_b > start_b:
            chunks.append(Chunk(None, b.get_subset(start_b, item_b - start_b)))

        start_a = item_a
        start_b = item_b

    if item_a > start_a:
        emit_equal()

    return tuple(chunks)
