"""
Argfold initializers: the incremental build protocol and its drivers.

Protocol
- An initializer is a caller-defined, stateful aggregate that is fed one token at a
  time and finalized once:
  • accept(token): integrate one token, raising an ArgumentException subclass on
    failure (unknown option, duplicate, missing/unexpected value, extra positional,
    counter overflow, conversion failure). After '--' the lexer only produces
    positionals, so initializers usually just switch to positional handling.
  • finish(): consume the initializer, returning the typed output or raising
    (typically RequiredOptionError). Called at most once.
- Initializer is an ABC whose subclass hook also recognizes any class that provides
  both methods.
- A target type may expose __initializer__() returning a fresh initializer; this is
  how a result type names its builder.

Drivers (all take a target and an already-materialized argument sequence)
- from_args: accumulate every fault, call finish() at the end, raise ParseExit with
  all faults in token order (the finish fault last) or return the output.
- from_args_first: stop at the first fault and raise it; finish() is never called
  after a token fault.
- from_args_iter: lazy variant of from_args yielding each token fault as it happens,
  then the output of finish() (or its fault), then stopping.
- run: outer convenience that reads sys.argv[1:] when no arguments are given and
  surfaces faults through trigger().

Helpers for hand-written initializers
- try_insert(owner, name, token, convert): single-assignment slot with conversion.
- try_set(switch, token) / try_increment(counter, token): switch and counter updates
  translated into faults carrying the offending token.
"""
import sys
from abc import ABC, abstractmethod

from .faults import *
from .switches import SwitchAlreadySetError, CounterOverflowError
from .tokens import tokenize
from .utils import Unset


class Initializer(ABC):
    """
    abstract incremental builder (accept tokens, finish once).
    """

    @abstractmethod
    def accept(self, token, /):
        ...

    @abstractmethod
    def finish(self):
        ...

    @classmethod
    def __subclasshook__(cls, other):
        if cls is Initializer:
            if all(callable(getattr(other, method, None)) for method in ("accept", "finish")):
                return True
        return NotImplemented


def _resolve(target):
    """
    obtain a fresh initializer from a target.

    accepted targets, in order
    - an initializer instance (used as-is; it must be untouched)
    - an object exposing __initializer__() (usually the output type)
    - an initializer class (instantiated without arguments)
    """
    if isinstance(target, Initializer) and not isinstance(target, type):
        return target
    if callable(hook := getattr(target, "__initializer__", None)):
        initializer = hook()
    elif isinstance(target, type) and issubclass(target, Initializer):
        initializer = target()
    else:
        raise TypeError("target must be an initializer or provide an __initializer__ method")
    if not isinstance(initializer, Initializer):
        raise TypeError("__initializer__() must return an initializer")
    return initializer


def try_insert(owner, name, token, convert=Unset, /):
    """
    fill the single-assignment slot owner.<name> from a token value.

    rules
    - an option token without value → ExpectedValueError
    - a slot already filled (not Unset) → UnexpectedMultiError
    - convert(value) raising ValueError/TypeError → ValueParseError carrying that error
    """
    if token.value is None:
        raise ExpectedValueError(token=token)
    if getattr(owner, name) is not Unset:
        raise UnexpectedMultiError(token=token)
    if convert is Unset:
        value = token.value
    else:
        try:
            value = convert(token.value)
        except (ValueError, TypeError) as error:
            raise ValueParseError(token=token, payload=error) from error
    setattr(owner, name, value)


def try_set(switch, token, /):
    """
    set a switch from a flag token.
    """
    if token.value is not None:
        raise UnexpectedValueError(token=token)
    try:
        switch.set()
    except SwitchAlreadySetError:
        raise UnexpectedMultiError(token=token) from None


def try_increment(counter, token, /):
    """
    count one occurrence of a repeatable flag token.
    """
    if token.value is not None:
        raise UnexpectedValueError(token=token)
    try:
        counter.increment()
    except CounterOverflowError:
        raise TooManyOptionsError(token=token) from None


def from_args(target, args, /):
    """
    build the target, accumulating every fault.

    every token is fed regardless of earlier faults; finish() is always called.
    succeeds only when no token faulted and finish() succeeded, otherwise raises
    ParseExit with the faults in order (even if there is only one).
    """
    initializer = _resolve(target)
    faults = []

    for token in tokenize(args):
        try:
            initializer.accept(token)
        except ArgumentException as fault:
            faults.append(fault)

    try:
        output = initializer.finish()
    except ArgumentException as fault:
        faults.append(fault)

    if faults:
        raise ParseExit(faults)
    return output


def from_args_first(target, args, /):
    """
    build the target, stopping at the first fault (raised as-is).
    """
    initializer = _resolve(target)
    for token in tokenize(args):
        initializer.accept(token)
    return initializer.finish()


class FromArgsIter:
    """
    lazy accumulating driver.

    yields each token fault (as a value, not raised) as soon as it happens, then
    the output of finish() or the fault it raised, then stops. single pass; always
    yields at least one item.
    """
    __slots__ = ("_lexer", "_initializer")

    def __init__(self, target, args, /):
        self._initializer = _resolve(target)
        self._lexer = tokenize(args)

    def __iter__(self):
        return self

    def __next__(self):
        if self._initializer is None:
            raise StopIteration

        for token in self._lexer:
            try:
                self._initializer.accept(token)
            except ArgumentException as fault:
                return fault

        initializer, self._initializer = self._initializer, None
        try:
            return initializer.finish()
        except ArgumentException as fault:
            return fault

    def __length_hint__(self):
        return 0 if self._initializer is None else 1


def from_args_iter(target, args, /):
    return FromArgsIter(target, args)


def run(target, args=Unset, /, **options):
    """
    parse process arguments for a target and surface faults.

    parameters
    - args: Unset reads sys.argv[1:]; otherwise an iterable of strings.
    - options: forwarded to trigger() (shell, fancy, colorful, deferred, prog);
      shell defaults to True, printing the faults to stderr and exiting with 1.

    returns the output of the target's initializer, or None when the faults were
    printed in deferred shell mode.
    """
    if args is Unset:
        args = sys.argv[1:]
    options.setdefault("shell", True)
    try:
        return from_args(target, list(args))
    except ParseExit as faults:
        trigger(faults, **options)


__all__ = (
    "Initializer",
    "FromArgsIter",
    "try_insert",
    "try_set",
    "try_increment",
    "from_args",
    "from_args_first",
    "from_args_iter",
    "run",
)
