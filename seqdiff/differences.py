import logging
import operator
from collections.abc import Callable, Iterator, Sequence

from seqdiff.chunk import Chunk
from seqdiff.errors import ArgumentError
from seqdiff.myersdiff import build_chunks, find_modifications
from seqdiff.window import Window


logger = logging.getLogger(__name__)


class Differences(Sequence):
    """
    All the differences between two sequences.

    The comparison runs once, in the constructor, and the result never
    changes afterwards. The instance behaves as a read-only sequence of
    ``Chunk`` objects in alignment order: concatenating every chunk's ``a``
    side rebuilds ``a``, and likewise for ``b``.

    Args:
        a: The first ("old") sequence.
        b: The second ("new") sequence.
        comparer: Equivalence function called as ``comparer(a_item, b_item)``.
            Defaults to ``==``; it does not need to be hashable-consistent.
        offset_a, length_a: Optional window into ``a`` (``length_a=None``
            means "to the end").
        offset_b, length_b: Optional window into ``b``.

    Raises:
        ArgumentError: ``a``, ``b`` or ``comparer`` is missing.
        RangeError: A window lies outside its sequence.
    """

    def __init__(
        self,
        a: Sequence,
        b: Sequence,
        comparer: Callable[[object, object], bool] = operator.eq,
        *,
        offset_a: int = 0,
        length_a: int | None = None,
        offset_b: int = 0,
        length_b: int | None = None,
    ) -> None:
        if a is None:
            raise ArgumentError("The 'a' sequence cannot be None.")
        if b is None:
            raise ArgumentError("The 'b' sequence cannot be None.")
        if comparer is None or not callable(comparer):
            raise ArgumentError("A callable comparer is required.")

        self.a = Window(a, offset_a, length_a)
        self.b = Window(b, offset_b, length_b)

        modified_a, modified_b = find_modifications(
            self.a.data, self.a.offset, len(self.a),
            self.b.data, self.b.offset, len(self.b),
            comparer,
        )
        self.chunks: tuple[Chunk, ...] = build_chunks(self.a, modified_a, self.b, modified_b)
        self.edit_distance = sum(modified_a) + sum(modified_b)

        logger.debug(f"Diffed {len(self.a)} vs {len(self.b)} items: "
                     f"{len(self.chunks)} chunks, edit distance {self.edit_distance}")

    @property
    def are_equal(self) -> bool:
        """True when every chunk is an equal chunk (two empty inputs are equal)."""
        return all(chunk.are_equal for chunk in self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, index):
        return self.chunks[index]

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def get_opcodes(self) -> list[tuple[str, int, int, int, int]]:
        """
        Returns difflib-style 5-tuples ``(tag, i1, i2, j1, j2)``.

        Indices are positions in the backing sequences, so ``a[i1:i2]`` and
        ``b[j1:j2]`` slice the caller's original inputs even when a window was
        given. A deletion directly followed by an insertion is reported as one
        ``replace``.
        """
        return _chunks_to_opcodes(self.chunks, self.a.offset, self.b.offset)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(chunks={len(self.chunks)}, are_equal={self.are_equal})"


def _chunks_to_opcodes(chunks, i: int, j: int) -> list[tuple[str, int, int, int, int]]:
    opcodes = []
    for chunk in chunks:
        if chunk.are_equal:
            size = len(chunk.a)
            opcodes.append(('equal', i, i + size, j, j + size))
            i += size
            j += size
        elif chunk.a is not None:
            size = len(chunk.a)
            opcodes.append(('delete', i, i + size, j, j))
            i += size
        else:
            size = len(chunk.b)
            if opcodes and opcodes[-1][0] == 'delete':
                _, i1, i2, _, _ = opcodes[-1]
                opcodes[-1] = ('replace', i1, i2, j, j + size)
            else:
                opcodes.append(('insert', i, i, j, j + size))
            j += size
    return opcodes


def diff(a: Sequence, b: Sequence, comparer: Callable[[object, object], bool] = operator.eq, **window) -> Differences:
    """Shorthand for ``Differences(a, b, comparer, **window)``."""
    return Differences(a, b, comparer, **window)
