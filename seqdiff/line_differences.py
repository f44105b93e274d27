import enum
import logging
import operator
from collections.abc import Callable, Iterator, Sequence

from seqdiff.differences import Differences
from seqdiff.errors import ArgumentError
from seqdiff.window import Window


logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], list[str]]

# Characters str.splitlines() breaks on
_LINE_TERMINATORS = frozenset("\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029")


class LineEndings(enum.Enum):
    """What happens to line terminators before lines are compared."""

    # Terminators stay part of every line, so "a\n" and "a\r\n" differ.
    KEEP = 'keep'
    # Terminators are removed, so "a\n", "a\r\n" and a final "a" all match.
    STRIP = 'strip'


def split_lines(text: str) -> list[str]:
    """Default tokenizer: one token per line, terminators kept."""
    return text.splitlines(keepends=True)


def strip_line_ending(line: str) -> str:
    """Removes one trailing line terminator; the rest of the line is left alone."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line and line[-1] in _LINE_TERMINATORS:
        return line[:-1]
    return line


class LineChunk:
    """
    One aligned run of lines.

    ``lines_a`` / ``lines_b`` are windows over the compared line tokens;
    ``a`` / ``b`` are the exact slices of the original text (terminators
    included) and ``offset_a`` / ``offset_b`` their character offsets.
    ``line_a`` / ``line_b`` are the index of the first line. Every attribute
    of an absent side is None.
    """

    __slots__ = ('are_equal', 'lines_a', 'a', 'offset_a', 'line_a', 'lines_b', 'b', 'offset_b', 'line_b')

    def __init__(self, are_equal: bool, lines_a: Window | None, a: str | None, offset_a: int | None,
                 lines_b: Window | None, b: str | None, offset_b: int | None) -> None:
        values = {
            'are_equal': are_equal,
            'lines_a': lines_a,
            'a': a,
            'offset_a': offset_a,
            'line_a': lines_a.offset if lines_a is not None else None,
            'lines_b': lines_b,
            'b': b,
            'offset_b': offset_b,
            'line_b': lines_b.offset if lines_b is not None else None,
        }
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (f"LineChunk(are_equal={self.are_equal}, a={self.a!r} @ line {self.line_a}, "
                f"b={self.b!r} @ line {self.line_b})")


class LineDifferences(Sequence):
    """
    Line-level differences between two strings.

    Each string is cut into line tokens by ``tokenizer`` and the token lists
    are aligned with the generic engine. The result is a read-only sequence
    of ``LineChunk``.

    Args:
        a: The first ("old") text.
        b: The second ("new") text.
        comparer: Compares two line tokens; defaults to ``==``.
        line_endings: Whether tokens keep their terminators (see ``LineEndings``).
        tokenizer: ``str -> list[str]``; the tokens must concatenate back to
            the input, terminators included.
    """

    def __init__(
        self,
        a: str,
        b: str,
        comparer: Callable[[str, str], bool] | None = None,
        line_endings: LineEndings = LineEndings.STRIP,
        tokenizer: Tokenizer = split_lines,
    ) -> None:
        if a is None:
            raise ArgumentError("The 'a' string cannot be None.")
        if b is None:
            raise ArgumentError("The 'b' string cannot be None.")
        if comparer is None:
            comparer = operator.eq
        elif not callable(comparer):
            raise ArgumentError("The comparer must be callable.")
        if tokenizer is None or not callable(tokenizer):
            raise ArgumentError("A callable tokenizer is required.")

        self.a = a
        self.b = b
        self.line_endings = LineEndings(line_endings)

        self.lines_a, starts_a = self._tokenize(a, tokenizer, 'a')
        self.lines_b, starts_b = self._tokenize(b, tokenizer, 'b')

        differences = Differences(self.lines_a, self.lines_b, comparer)
        self.edit_distance = differences.edit_distance
        self._opcodes = differences.get_opcodes()

        chunks = []
        for chunk in differences:
            text_a = offset_a = text_b = offset_b = None
            if chunk.a is not None:
                offset_a = starts_a[chunk.a.offset]
                text_a = a[offset_a:starts_a[chunk.a.offset + len(chunk.a)]]
            if chunk.b is not None:
                offset_b = starts_b[chunk.b.offset]
                text_b = b[offset_b:starts_b[chunk.b.offset + len(chunk.b)]]
            chunks.append(LineChunk(chunk.are_equal, chunk.a, text_a, offset_a, chunk.b, text_b, offset_b))
        self.chunks: tuple[LineChunk, ...] = tuple(chunks)

        logger.debug(f"Line diff ({self.line_endings.value} line endings): "
                     f"{len(self.lines_a)} vs {len(self.lines_b)} lines, {len(self.chunks)} chunks")

    def _tokenize(self, text: str, tokenizer: Tokenizer, side: str) -> tuple[tuple[str, ...], list[int]]:
        """Returns the compared tokens and the start offset of each line (plus the end of text)."""
        raw = list(tokenizer(text))
        if "".join(raw) != text:
            raise ArgumentError(f"The tokenizer output for '{side}' does not rebuild the original text.")

        starts = [0]
        for line in raw:
            starts.append(starts[-1] + len(line))

        if self.line_endings is LineEndings.STRIP:
            return tuple(strip_line_ending(line) for line in raw), starts
        return tuple(raw), starts

    @property
    def are_equal(self) -> bool:
        return all(chunk.are_equal for chunk in self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, index):
        return self.chunks[index]

    def __iter__(self) -> Iterator[LineChunk]:
        return iter(self.chunks)

    def get_opcodes(self) -> list[tuple[str, int, int, int, int]]:
        """difflib-style opcodes over line indices."""
        return list(self._opcodes)

    def __repr__(self) -> str:
        return f"LineDifferences(chunks={len(self.chunks)}, are_equal={self.are_equal})"


def diff_lines(
    a: str,
    b: str,
    comparer=None,
    line_endings: LineEndings = LineEndings.STRIP,
    tokenizer: Tokenizer = split_lines,
) -> LineDifferences:
    return LineDifferences(a, b, comparer, line_endings, tokenizer)
