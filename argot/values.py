"""
Value containers backing every declaration.

- SingleValue: one slot, overwrite semantics.
- MultiValue: ordered sequence, append semantics (arrival order is preserved).

Containers are only mutated while a registry parses; afterwards callers read them
through the owning declaration handle.
"""
from .utils import Unset, coalesce


class SingleValue:
    """
    Single-slot container.

    Starts empty unless an initial value is given (flags start with their default).
    store() overwrites whatever was there before.
    """

    __slots__ = ("_value",)

    def __init__(self, initial=Unset, /):
        self._value = initial

    @property
    def empty(self):
        return self._value is Unset

    @property
    def value(self):
        """The stored value, or None when nothing was stored."""
        return coalesce(self._value)

    def get(self, default=None, /):
        """Return the stored value, or `default` when the container is empty."""
        return coalesce(self._value, default)

    def store(self, value, /):
        self._value = value

    def __bool__(self):
        return not self.empty

    def __repr__(self):
        return f"single-value({self._value!r})"


class MultiValue:
    """
    Append-only ordered container.

    Successive parse calls on the same registry keep accumulating here.
    """

    __slots__ = ("_values",)

    def __init__(self):
        self._values = []

    @property
    def empty(self):
        return not self._values

    @property
    def value(self):
        """Snapshot of the stored values in arrival order."""
        return tuple(self._values)

    def get(self, default=None, /):
        return self.value if self._values else default

    def store(self, value, /):
        self._values.append(value)

    def __iter__(self):
        return iter(tuple(self._values))

    def __len__(self):
        return len(self._values)

    def __bool__(self):
        return bool(self._values)

    def __repr__(self):
        return f"multi-value({self._values!r})"


__all__ = (
    "SingleValue",
    "MultiValue",
)
