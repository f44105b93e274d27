from seqdiff.errors import InvariantError
from seqdiff.window import Window


class Chunk:
    """
    One aligned segment of a comparison.

    An equal chunk carries both windows (same length, pairwise equal under the
    comparer that produced it). A deletion carries only ``a``, an insertion
    only ``b``.
    """

    __slots__ = ('a', 'b')

    def __init__(self, a: Window | None, b: Window | None) -> None:
        if a is None and b is None:
            raise InvariantError("A chunk needs at least one side.")
        object.__setattr__(self, 'a', a)
        object.__setattr__(self, 'b', b)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def are_equal(self) -> bool:
        return self.a is not None and self.b is not None

    def __repr__(self) -> str:
        if self.are_equal:
            return f"Chunk(equal, a@{self.a.offset}={list(self.a)!r}, b@{self.b.offset}={list(self.b)!r})"
        if self.a is not None:
            return f"Chunk(delete, a@{self.a.offset}={list(self.a)!r})"
        return f"Chunk(insert, b@{self.b.offset}={list(self.b)!r})"
