"""
Switch and counter contracts for hand-written initializers.

- Switch: presence-only flag that can be set once (set() twice is an error).
- Counter: repeatable flag that counts occurrences up to a bound (-vvv → 3).

Both raise small, token-free signals (SwitchAlreadySetError, CounterOverflowError);
initializers translate them into user-facing faults with the offending token via
argfold.initializers.try_set() / try_increment().
"""
import functools
from abc import ABC, abstractmethod


class SwitchAlreadySetError(Exception):
    """
    the switch was already set.
    """


class CounterOverflowError(Exception):
    """
    the counter is already at its maximum.
    """


class Switch(ABC):
    """
    something that can be used as a switch flag.

    implementations must raise SwitchAlreadySetError from set() when the switch
    was already set, and leave their state unchanged in that case.
    """

    @abstractmethod
    def set(self):
        ...

    @abstractmethod
    def is_set(self):
        ...

    def __bool__(self):
        return self.is_set()


class Flag(Switch):
    """
    boolean switch.

        >>> flag = Flag()
        >>> flag.set(); bool(flag)
        True
    """
    __slots__ = ("_value",)

    def __init__(self, value=False, /):
        if not isinstance(value, bool):
            raise TypeError("Flag() argument must be a boolean")
        self._value = value

    def set(self):
        if self._value:
            raise SwitchAlreadySetError
        self._value = True

    def is_set(self):
        return self._value

    def __eq__(self, other, /):
        if isinstance(other, Flag):
            return self._value is other._value
        if isinstance(other, bool):
            return self._value is other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        return "Flag(%r)" % self._value


class Counter(ABC):
    """
    something that can be used as a counter flag.

    implementations must raise CounterOverflowError from increment() on overflow
    and keep their observable value unchanged in that case.
    """

    @abstractmethod
    def increment(self):
        ...


@functools.total_ordering
class Count(Counter):
    """
    bounded occurrence counter.

    the default maximum (255) is the 8-bit bound; pass maximum=None for an
    unbounded counter.
    """
    __slots__ = ("_value", "_maximum")

    def __init__(self, value=0, /, maximum=255):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("Count() argument must be an integer")
        if maximum is not None and (not isinstance(maximum, int) or isinstance(maximum, bool)):
            raise TypeError("Count() maximum must be an integer or None")
        if value < 0 or (maximum is not None and value > maximum):
            raise ValueError("Count() argument out of range")
        self._value = value
        self._maximum = maximum

    @property
    def maximum(self):
        return self._maximum

    def increment(self):
        if self._maximum is not None and self._value >= self._maximum:
            raise CounterOverflowError
        self._value += 1

    def __int__(self):
        return self._value

    def __index__(self):
        return self._value

    def __eq__(self, other, /):
        if isinstance(other, Count):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other, /):
        if isinstance(other, Count):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        if self._maximum == 255:
            return "Count(%d)" % self._value
        return "Count(%d, maximum=%r)" % (self._value, self._maximum)


__all__ = (
    "SwitchAlreadySetError",
    "CounterOverflowError",
    "Switch",
    "Flag",
    "Counter",
    "Count",
)
