"""
Argfold faults (parse/build errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
- ArgumentException: base type carrying a message + options; knows how to render
  itself (rich), how to be surfaced (__trigger__) and how to be copied with
  overrides (__replace__, used by copy.replace).
- One exception class per failure cause (unknown option, duplicate option, missing
  value, unexpected value, missing positional, unexpected positional, missing
  required option, counter overflow, value conversion failure).
- ParseExit: ExceptionGroup bundling every fault of an accumulating parse, in order.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Messages reproduce the offending token exactly as typed ('-x', '--opt value')
  and, when known, its ordinal position ("at third position").
- Lowercased tone, short titles, a single clear hint.

View vs owned
- Faults raised while folding a lexed stream carry view tokens (argfold.tokens.Token).
- into_owned() returns a copy whose token is an OwnToken; a ValueParseError payload
  is converted only when it provides into_owned() itself, otherwise it is carried
  through unchanged.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, ordinal

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - options (1111x): UNKNOWN_OPTION, UNEXPECTED_MULTI, EXPECTED_VALUE,
      UNEXPECTED_VALUE, REQUIRED_OPTION, TOO_MANY_OPTIONS
    - positionals (1112x): EXPECTED_POSITIONAL, UNEXPECTED_POSITIONAL
    - conversions (1113x): VALUE_PARSE
    """
    # --- option errors (1111x) ---
    UNKNOWN_OPTION          = 11111
    UNEXPECTED_MULTI        = 11112
    EXPECTED_VALUE          = 11113
    UNEXPECTED_VALUE        = 11114
    REQUIRED_OPTION         = 11115
    TOO_MANY_OPTIONS        = 11116

    # --- positional errors (1112x) ---
    EXPECTED_POSITIONAL     = 11121
    UNEXPECTED_POSITIONAL   = 11122

    # --- conversion errors (1113x) ---
    VALUE_PARSE             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _located(token):
    # "'-x' at third position" or just "'-x'" for owned tokens
    if token.position is None:
        return repr(str(token))
    return "%r at %s position" % (str(token), ordinal(token.position))


class ArgumentException(Exception):
    """
    base of every parse/build fault.

    construction
    - ArgumentException(message=Unset, /, **options)
      when message is omitted, it is built from the class __template__ and the
      options (most subclasses only need token=...).

    well-known options
    - token: offending token (view or owned), or absent.
    - title/code/hint: rendering metadata; default to the class attributes.
    - shell/fancy/colorful/deferred: surfacing switches consumed by __trigger__.
    """
    __title__ = "argument error"
    __code__ = None
    __hint__ = ""
    __template__ = "%(token)s"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Text | Unset)
        options.setdefault("token", None)
        if message is Unset:
            message = self._describe(options)
        self.message = message
        self.options = MappingProxyType(options)

    @classmethod
    def _describe(cls, options):
        return cls.__template__ % cls._substitutions(options)

    @staticmethod
    def _substitutions(options):
        token = options["token"]
        return defaultdict(str, options, token=_located(token) if token is not None else "")

    @property
    def token(self):
        return self.options["token"]

    @property
    def title(self):
        return self.options.get("title", self.__title__)

    @property
    def code(self):
        return self.options.get("code", self.__code__)

    @property
    def hint(self):
        return self.options.get("hint", self.__hint__ % self._substitutions(self.options))

    @property
    def is_owned(self):
        return self.token is None or self.token.is_owned

    def into_owned(self):
        """
        copy of this fault whose token is an OwnToken.
        """
        if self.token is None:
            return self
        return copy.replace(self, token=self.token.into_owned())

    def __str__(self):
        return str(self.message)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, str(self.message))

    def __eq__(self, other, /):
        if not isinstance(other, ArgumentException):
            return NotImplemented
        return type(self) is type(other) and str(self) == str(other) and self.token == other.token

    def __hash__(self):
        return hash((type(self), str(self)))

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", self.options.get("prog", "argfold")), "prog-name"),
            " — ",
            text(self.code.normalize() if self.code is not None else "-", "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ArgumentException):
    __title__ = "unknown option"
    __code__ = FaultCode.UNKNOWN_OPTION
    __hint__ = "check the spelling or run with '--help' to see all options"
    __template__ = "unknown option %(token)s"


class UnexpectedMultiError(ArgumentException):
    __title__ = "duplicated option"
    __code__ = FaultCode.UNEXPECTED_MULTI
    __hint__ = "keep a single occurrence; this option can be specified only once"
    __template__ = "option %(token)s was already provided"


class ExpectedValueError(ArgumentException):
    __title__ = "missing value"
    __code__ = FaultCode.EXPECTED_VALUE
    __hint__ = "pass a value after a space (for example: %(flag)s <value>)"
    __template__ = "option %(token)s requires a value"

    @staticmethod
    def _substitutions(options):
        substitutions = ArgumentException._substitutions(options)
        if options["token"] is not None:
            substitutions["flag"] = options["token"].flag or str(options["token"])
        return substitutions


class UnexpectedValueError(ArgumentException):
    __title__ = "unexpected value"
    __code__ = FaultCode.UNEXPECTED_VALUE
    __hint__ = "flags take no value; pass the value as a positional after '--' if intended"
    __template__ = "flag %(token)s cannot take a value"


class ExpectedPositionalError(ArgumentException):
    __title__ = "missing positional"
    __code__ = FaultCode.EXPECTED_POSITIONAL
    __hint__ = "add the missing positional value"
    __template__ = "expected a positional argument, found %(token)s"


class UnexpectedPositionalError(ArgumentException):
    __title__ = "unexpected positional"
    __code__ = FaultCode.UNEXPECTED_POSITIONAL
    __hint__ = "remove this extra value"
    __template__ = "unexpected positional argument %(token)s"


class RequiredOptionError(ArgumentException):
    """
    a required option was never provided; named by its static key.
    """
    __title__ = "missing required option"
    __code__ = FaultCode.REQUIRED_OPTION
    __hint__ = "add the option %(key)r"
    __template__ = "missing required option %(key)r"

    def __init__(self, message=Unset, /, **options):
        if not isinstance(options.get("key"), str):
            raise TypeError("RequiredOptionError() requires a string key")
        super().__init__(message, **options)

    @property
    def key(self):
        return self.options["key"]


class TooManyOptionsError(ArgumentException):
    __title__ = "too many options"
    __code__ = FaultCode.TOO_MANY_OPTIONS
    __hint__ = "repeat this option fewer times"
    __template__ = "option %(token)s was repeated too many times"


class ValueParseError(ArgumentException):
    """
    conversion of an option or positional value failed.

    the caller-supplied payload (usually the conversion exception) is carried
    through unchanged; its text becomes part of the message.
    """
    __title__ = "invalid value"
    __code__ = FaultCode.VALUE_PARSE
    __hint__ = "check the value format"

    def __init__(self, message=Unset, /, **options):
        if "payload" not in options:
            raise TypeError("ValueParseError() requires a payload")
        super().__init__(message, **options)

    @staticmethod
    def _substitutions(options):
        substitutions = ArgumentException._substitutions(options)
        substitutions["payload"] = options["payload"]
        return substitutions

    @classmethod
    def _describe(cls, options):
        if options["token"] is None:
            return "invalid value: %s" % options["payload"]
        return "invalid value for %(token)s: %(payload)s" % cls._substitutions(options)

    @property
    def payload(self):
        return self.options["payload"]

    @property
    def is_owned(self):
        return super().is_owned and not hasattr(self.payload, "into_owned")

    def into_owned(self):
        fault = super().into_owned()
        if hasattr(fault.payload, "into_owned"):
            return copy.replace(fault, payload=fault.payload.into_owned())
        return fault


class ParseExit(ExceptionGroup):
    """
    every fault of an accumulating parse, in token order (finish fault last).
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad arguments", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad arguments", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def into_owned(self):
        return type(self)([exception.into_owned() for exception in self.exceptions], **self.options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", self.options.get("prog", "argfold")), "prog-name"),
            " — ",
            text(self.message.title(), "title"),
            " ]"
        )

        overrides = {"colorful": colorful, "ratio": 2 / 3}
        renders = [copy.replace(exception, **overrides) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich stderr console and the process exits
      (unless deferred); otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentException",
    "UnknownOptionError",
    "UnexpectedMultiError",
    "ExpectedValueError",
    "UnexpectedValueError",
    "ExpectedPositionalError",
    "UnexpectedPositionalError",
    "RequiredOptionError",
    "TooManyOptionsError",
    "ValueParseError",
    "ParseExit",
    "trigger",
    "getdoc",
)
