"""Exceptions raised by the diff engine and its facades."""


class ArgumentError(ValueError):
    """A caller passed a missing sequence, string or comparer."""


class RangeError(ArgumentError, IndexError):
    """An offset/length pair or an index lies outside its window."""


class InvariantError(RuntimeError):
    """
    The engine reached a state that valid input can never produce.

    Seeing this means the alignment cannot be trusted; it is a bug in the
    engine, not in the caller's data.
    """
