from typing import Hashable, Mapping, Tuple
from frozendict import frozendict
from pomdpformat.core.utils.funcutils import cached_property
from pomdpformat.errors import FormatError

WILDCARD = '*'

class NameSpace(tuple):
    """
    Ordered, immutable labels of the states, actions or observations
    of a model. Labels are looked up by 0-based position.
    """
    def __new__(cls, names, kind="name"):
        if isinstance(names, cls):
            return names
        self = super().__new__(cls, names)
        self.kind = kind
        if len(self._index) != len(self):
            duplicates = sorted({n for n in self if self.count(n) > 1})
            raise FormatError(f"duplicate {kind} labels {duplicates}")
        return self

    @classmethod
    def from_count(cls, count : int, kind="name") -> "NameSpace":
        """Labels "0" to "count-1", used when a header only gives a size."""
        return cls([str(i) for i in range(count)], kind=kind)

    def __repr__(self):
        return f"{self.__class__.__name__}({super().__repr__()})"

    def __hash__(self):
        return tuple.__hash__(self)

    @cached_property
    def _index(self) -> Mapping[Hashable, int]:
        return frozendict({e: ei for ei, e in enumerate(self)})

    def index(self, name) -> int:
        return self._index[name]

    def resolve(self, token : str, lineno=None) -> Tuple[int, ...]:
        """
        Indices referred to by a field of a table line: every index for
        the wildcard, the position of a label, or a bare integer position.
        """
        if token == WILDCARD:
            return tuple(range(len(self)))
        try:
            return (self._index[token],)
        except KeyError:
            pass
        if token.isdecimal() and int(token) < len(self):
            return (int(token),)
        raise FormatError(f"unknown {self.kind} {token!r}", lineno)
