r"""
Argfold tokens and the argument lexer.

Overview
- TokenKind: the four lexical shapes (positional, short option, long option, `--`).
- Token: view form. Holds a reference to the argument sequence it was lexed from plus
  the argument index (and for shorts, the character offset); key/value/text are read
  from that sequence on access, nothing is copied while lexing.
- OwnToken: owned form. Stores its key/value as plain strings and survives any later
  change to the original argument list.
- Lexer / tokenize(): single-pass automaton turning raw arguments into tokens.

Lexical surface
    --          separator; everything after is positional
    --KEY       long option, no value
    --KEY VALUE long option with value (VALUE must not look like an option, or be exactly '-')
    -K          short option, no value
    -K VALUE    short option with value (same VALUE rule)
    -ABC        three short options A, B, C, none take values
    -           positional argument literally '-'
    anything    positional argument

Conversions
- Token.into_owned() is the only way to go from a view to an owned token.
- OwnToken.borrow() builds a view over a synthesized argument tuple.
- Both forms compare and hash by (kind, key, value), so a view equals its owned copy,
  and both print the exact textual form ('-k value', '--key', '--', ...).

Quick example:
    >>> [str(token) for token in tokenize(["-vv", "--out", "a.txt", "--", "-x"])]
    ['-v', '-v', '--out a.txt', '--', '-x']
"""
from collections.abc import Sequence
from enum import Enum


class TokenKind(Enum):
    """
    lexical shape of a token.
    """
    POSITIONAL = "positional"
    SHORT = "short"
    LONG = "long"
    DASHDASH = "dashdash"


class BaseToken:
    """
    Shared behavior of the view and owned token forms.

    Subclasses provide kind/key/value; this base derives equality, hashing, the
    textual form and structural matching from them.

    Field meaning per kind
    - POSITIONAL: key is None, value is the argument text.
    - SHORT: key is a single character, value is the attached value or None.
    - LONG: key is the text after '--', value is the attached value or None.
    - DASHDASH: key and value are None.
    """
    __slots__ = ()
    __match_args__ = ("kind", "key", "value")

    @property
    def text(self):
        """
        the exact textual form of the token (same as str(token)).
        """
        match self.kind:
            case TokenKind.POSITIONAL:
                return self.value
            case TokenKind.DASHDASH:
                return "--"
            case TokenKind.SHORT:
                prefix = "-"
            case TokenKind.LONG:
                prefix = "--"
            case _:
                raise RuntimeError("unexpected token kind")
        if self.value is None:
            return prefix + self.key
        return "%s%s %s" % (prefix, self.key, self.value)

    @property
    def flag(self):
        """
        the option name as typed ('-k', '--key'), or None for positionals and '--'.
        """
        match self.kind:
            case TokenKind.SHORT:
                return "-" + self.key
            case TokenKind.LONG:
                return "--" + self.key
        return None

    def __eq__(self, other, /):
        if not isinstance(other, BaseToken):
            return NotImplemented
        return (self.kind, self.key, self.value) == (other.kind, other.key, other.value)

    def __hash__(self):
        return hash((self.kind, self.key, self.value))

    def __str__(self):
        return self.text

    def __repr__(self):
        match self.kind:
            case TokenKind.POSITIONAL:
                fields = repr(self.value)
            case TokenKind.DASHDASH:
                fields = ""
            case _:
                fields = repr(self.key) if self.value is None else "%r, %r" % (self.key, self.value)
        return "%s.%s(%s)" % (type(self).__name__, self.kind.value, fields)


class Token(BaseToken):
    """
    View form of a token.

    A Token keeps a reference to the argument sequence it came from and reads its
    key/value from it on access. Mutating that sequence after lexing changes what the
    view reports; call into_owned() to get a self-contained copy first.

    Tokens are produced by Lexer; construct OwnToken instances instead when building
    tokens by hand.
    """
    __slots__ = ("_kind", "_source", "_index", "_offset", "_valued")

    def __init__(self, kind, source, index, /, offset=0, valued=False):
        if not isinstance(kind, TokenKind):
            raise TypeError("Token() first argument must be a token kind")
        if not isinstance(source, Sequence) or isinstance(source, str):
            raise TypeError("Token() second argument must be a sequence of strings")
        if not 0 <= index < len(source):
            raise IndexError("Token() index out of range")
        self._kind = kind
        self._source = source
        self._index = index
        self._offset = offset
        self._valued = valued

    @property
    def kind(self):
        return self._kind

    @property
    def key(self):
        match self._kind:
            case TokenKind.SHORT:
                return self._source[self._index][self._offset]
            case TokenKind.LONG:
                return self._source[self._index][2:]
        return None

    @property
    def value(self):
        match self._kind:
            case TokenKind.POSITIONAL:
                return self._source[self._index]
            case TokenKind.SHORT | TokenKind.LONG if self._valued:
                return self._source[self._index + 1]
        return None

    @property
    def position(self):
        """
        1-based position of the argument this token starts at.
        """
        return self._index + 1

    @property
    def consumed(self):
        """
        raw arguments this token newly consumed, in order.

        The first short of a cluster consumes the whole cluster argument; the remaining
        shorts of that cluster consume nothing new.
        """
        if self._kind is TokenKind.SHORT and self._offset > 1:
            return ()
        if self._valued:
            return tuple(self._source[self._index:self._index + 2])
        return (self._source[self._index],)

    @property
    def is_owned(self):
        return False

    def into_owned(self):
        """
        materialize this view into an OwnToken with identical semantic content.
        """
        return OwnToken(self.kind, self.key, self.value)


class OwnToken(BaseToken):
    """
    Owned form of a token.

    Stores kind/key/value directly. Use the positional()/short()/long()/dashdash()
    constructors, or Token.into_owned().
    """
    __slots__ = ("_kind", "_key", "_value")

    def __init__(self, kind, key=None, value=None, /):
        if not isinstance(kind, TokenKind):
            raise TypeError("OwnToken() first argument must be a token kind")
        match kind:
            case TokenKind.POSITIONAL:
                if key is not None or not isinstance(value, str):
                    raise TypeError("positional token requires only a string value")
            case TokenKind.SHORT:
                if not isinstance(key, str) or len(key) != 1:
                    raise TypeError("short token key must be a single character")
            case TokenKind.LONG:
                if not isinstance(key, str):
                    raise TypeError("long token key must be a string")
            case TokenKind.DASHDASH:
                if key is not None or value is not None:
                    raise TypeError("double dash token takes no key or value")
        if kind in (TokenKind.SHORT, TokenKind.LONG) and not isinstance(value, str | None):
            raise TypeError("option token value must be a string or None")
        self._kind = kind
        self._key = key
        self._value = value

    @classmethod
    def positional(cls, text, /):
        return cls(TokenKind.POSITIONAL, None, text)

    @classmethod
    def short(cls, key, value=None, /):
        return cls(TokenKind.SHORT, key, value)

    @classmethod
    def long(cls, key, value=None, /):
        return cls(TokenKind.LONG, key, value)

    @classmethod
    def dashdash(cls):
        return cls(TokenKind.DASHDASH)

    @property
    def kind(self):
        return self._kind

    @property
    def key(self):
        return self._key

    @property
    def value(self):
        return self._value

    @property
    def position(self):
        # owned tokens are detached from the argument list
        return None

    @property
    def is_owned(self):
        return True

    def into_owned(self):
        return self

    def borrow(self):
        """
        view this token as a Token over a synthesized argument tuple.
        """
        match self._kind:
            case TokenKind.POSITIONAL:
                return Token(self._kind, (self._value,), 0)
            case TokenKind.DASHDASH:
                return Token(self._kind, ("--",), 0)
            case TokenKind.SHORT:
                head, offset = "-" + self._key, 1
            case _:
                head, offset = "--" + self._key, 0
        if self._value is None:
            return Token(self._kind, (head,), 0, offset)
        return Token(self._kind, (head, self._value), 0, offset, True)


class Lexer:
    """
    Single-pass argument lexer.

    State (all forward-only)
    - cursor: index of the next raw argument to read.
    - cluster/offset: argument index and next character offset of a pending short
      cluster ('-xyz'); drained completely before the next raw argument is read.
    - positional: set after '--', never cleared; every later argument is positional.

    Rules
    - '--' yields DASHDASH and switches to positional-only mode.
    - '--key' yields LONG; '-k' yields SHORT; both take the next argument as value
      when it does not start with '-' or is exactly '-'.
    - '-xyz' yields SHORT x, y, z without values (clustered shorts never take one).
    - '-' and anything else yield POSITIONAL verbatim.

    The argument sequence is referenced, not copied, when it is a real sequence;
    other iterables are materialized into a tuple first. Items are checked to be
    strings as they are reached.
    """
    __slots__ = ("_args", "_cursor", "_cluster", "_offset", "_positional")

    def __init__(self, args, /):
        if isinstance(args, str):
            raise TypeError("Lexer() argument must be a sequence of strings, not a string")
        if not isinstance(args, Sequence):
            args = tuple(args)
        self._args = args
        self._cursor = 0
        self._cluster = None
        self._offset = 0
        self._positional = False

    @property
    def positional(self):
        """
        whether '--' has been seen (positional-only mode).
        """
        return self._positional

    def _argument(self, index):
        argument = self._args[index]
        if not isinstance(argument, str):
            raise TypeError("argument at index %d must be a string, not %s" % (index, type(argument).__name__))
        return argument

    def _lookahead(self):
        # one argument of lookahead; '-' is accepted as a value
        if self._cursor < len(self._args):
            candidate = self._argument(self._cursor)
            if candidate == "-" or not candidate.startswith("-"):
                self._cursor += 1
                return True
        return False

    def __iter__(self):
        return self

    def __next__(self):
        if self._cluster is not None:
            index, offset = self._cluster, self._offset
            if offset + 1 < len(self._args[index]):
                self._offset = offset + 1
            else:
                self._cluster = None
            return Token(TokenKind.SHORT, self._args, index, offset)

        if self._cursor >= len(self._args):
            raise StopIteration

        index = self._cursor
        self._cursor += 1
        argument = self._argument(index)

        if self._positional:
            return Token(TokenKind.POSITIONAL, self._args, index)

        if argument == "--":
            self._positional = True
            return Token(TokenKind.DASHDASH, self._args, index)

        if argument.startswith("--"):
            return Token(TokenKind.LONG, self._args, index, valued=self._lookahead())

        if argument.startswith("-") and len(argument) > 1:
            if len(argument) == 2:
                return Token(TokenKind.SHORT, self._args, index, 1, self._lookahead())
            self._cluster = index
            self._offset = 2
            return Token(TokenKind.SHORT, self._args, index, 1)

        return Token(TokenKind.POSITIONAL, self._args, index)

    def __length_hint__(self):
        # each token consumes at most two arguments; pending shorts are one each
        remaining = len(self._args) - self._cursor
        pending = len(self._args[self._cluster]) - self._offset if self._cluster is not None else 0
        return (remaining + 1) // 2 + pending


def tokenize(args, /):
    """
    lex an already-materialized sequence of argument strings.

    the program path (argv[0]) is never stripped here; pass sys.argv[1:] yourself.
    returns a single-pass Lexer iterator.
    """
    return Lexer(args)


__all__ = (
    "TokenKind",
    "BaseToken",
    "Token",
    "OwnToken",
    "Lexer",
    "tokenize",
)
