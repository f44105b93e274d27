import enum
import locale
from collections import namedtuple
from collections.abc import Callable, Iterator, Sequence

from seqdiff.differences import Differences
from seqdiff.errors import ArgumentError


# One aligned piece of a string comparison.
# a / b: the text of each side, or None when the side is absent.
# offset_a / offset_b: where that text starts in the original string, or None.
StringChunk = namedtuple('StringChunk', ['are_equal', 'a', 'offset_a', 'b', 'offset_b'])

_LINE_BREAKS = ('\r', '\n')


class TextOptions(enum.IntFlag):
    NONE = 0
    # Any whitespace character (line breaks included) matches any other.
    IGNORE_WHITESPACE = 1
    # '\r' and '\n' match each other.
    NORMALIZE_LINE_ENDINGS = 2
    # Characters are compared case-folded.
    IGNORE_CASE = 4


def culture_char_equal(x: str, y: str) -> bool:
    """Compares two characters using the collation rules of the current locale (LC_COLLATE)."""
    if x == y:
        return True
    # strcoll cannot take NUL; a NUL only matches itself.
    if x == "\x00" or y == "\x00":
        return False
    return locale.strcoll(x, y) == 0


def apply_text_options(comparer: Callable[[str, str], bool], options: TextOptions) -> Callable[[str, str], bool]:
    """Wraps a character comparer so it honours ``options``."""
    if options & TextOptions.IGNORE_CASE:
        comparer = _ignoring_case(comparer)
    if options & TextOptions.IGNORE_WHITESPACE:
        # Line breaks are whitespace, so this already covers NORMALIZE_LINE_ENDINGS.
        comparer = _ignoring_whitespace(comparer)
    elif options & TextOptions.NORMALIZE_LINE_ENDINGS:
        comparer = _normalizing_line_endings(comparer)
    return comparer


def _ignoring_case(inner):
    return lambda x, y: inner(x.casefold(), y.casefold())


def _ignoring_whitespace(inner):
    return lambda x, y: y.isspace() if x.isspace() else inner(x, y)


def _normalizing_line_endings(inner):
    return lambda x, y: y in _LINE_BREAKS if x in _LINE_BREAKS else inner(x, y)


class StringDifferences(Sequence):
    """
    Character-level differences between two strings.

    Behaves as a read-only sequence of ``StringChunk``. Concatenating the
    ``a`` text of every chunk (skipping ``None``) rebuilds ``a``; the same
    holds for ``b``.
    """

    def __init__(
        self,
        a: str,
        b: str,
        comparer: Callable[[str, str], bool] | None = None,
        text_options: TextOptions = TextOptions.NONE,
    ) -> None:
        if a is None:
            raise ArgumentError("The 'a' string cannot be None.")
        if b is None:
            raise ArgumentError("The 'b' string cannot be None.")
        if comparer is None:
            comparer = culture_char_equal
        elif not callable(comparer):
            raise ArgumentError("The comparer must be callable.")

        self.a = a
        self.b = b
        self.text_options = TextOptions(text_options)

        differences = Differences(a, b, apply_text_options(comparer, self.text_options))
        self.edit_distance = differences.edit_distance
        self._opcodes = differences.get_opcodes()

        chunks = []
        for chunk in differences:
            text_a = offset_a = text_b = offset_b = None
            if chunk.a is not None:
                offset_a = chunk.a.offset
                text_a = a[offset_a:offset_a + len(chunk.a)]
            if chunk.b is not None:
                offset_b = chunk.b.offset
                text_b = b[offset_b:offset_b + len(chunk.b)]
            chunks.append(StringChunk(chunk.are_equal, text_a, offset_a, text_b, offset_b))
        self.chunks: tuple[StringChunk, ...] = tuple(chunks)

    @property
    def are_equal(self) -> bool:
        return all(chunk.are_equal for chunk in self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, index):
        return self.chunks[index]

    def __iter__(self) -> Iterator[StringChunk]:
        return iter(self.chunks)

    def get_opcodes(self) -> list[tuple[str, int, int, int, int]]:
        """difflib-style opcodes over character positions."""
        return list(self._opcodes)

    def __repr__(self) -> str:
        return f"StringDifferences(chunks={len(self.chunks)}, are_equal={self.are_equal})"


def diff_strings(a: str, b: str, comparer=None, text_options: TextOptions = TextOptions.NONE) -> StringDifferences:
    return StringDifferences(a, b, comparer, text_options)
