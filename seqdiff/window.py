from collections.abc import Iterator, Sequence

from seqdiff.errors import ArgumentError, RangeError


class Window(Sequence):
    """
    A read-only view (offset + length) over an indexable sequence.

    The backing sequence is shared, never copied or mutated. ``offset`` is
    always the absolute position in the backing sequence, so sub-windows of
    sub-windows still report where they sit in the original input.
    """

    __slots__ = ('data', 'offset', 'length')

    def __init__(self, data: Sequence, offset: int = 0, length: int | None = None) -> None:
        if data is None:
            raise ArgumentError("Window requires a backing sequence, got None.")
        size = len(data)
        if offset < 0 or offset > size:
            raise RangeError(f"Offset {offset} is outside a sequence of length {size}.")
        if length is None:
            length = size - offset
        elif length < 0 or offset + length > size:
            raise RangeError(f"Length {length} at offset {offset} overruns a sequence of length {size}.")

        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'offset', offset)
        object.__setattr__(self, 'length', length)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index):
        if isinstance(index, slice):
            start, stop, step = index.indices(self.length)
            if step != 1:
                raise ArgumentError("Window slices do not support a step.")
            return self.get_subset(start, max(0, stop - start))
        if index < 0 or index >= self.length:
            raise RangeError(f"Index {index} is outside a window of length {self.length}.")
        return self.data[self.offset + index]

    def __iter__(self) -> Iterator:
        data = self.data
        for i in range(self.offset, self.offset + self.length):
            yield data[i]

    def get_subset(self, offset: int, length: int) -> 'Window':
        """Returns a sub-window; bounds are checked against this window."""
        if offset == 0 and length == self.length:
            return self
        if offset < 0 or offset > self.length:
            raise RangeError(f"Subset offset {offset} is outside a window of length {self.length}.")
        if length < 0 or offset + length > self.length:
            raise RangeError(f"Subset length {length} at offset {offset} overruns a window of length {self.length}.")
        return Window(self.data, self.offset + offset, length)

    def __repr__(self) -> str:
        return f"Window(offset={self.offset}, length={self.length}, items={list(self)!r})"
