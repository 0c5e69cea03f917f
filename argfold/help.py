"""
Help text layout on top of argfold.wrap.

Layout (sections separated by one blank line)

    <description, wrapped to the width>

    Usage:
      <usage, wrapped to width - 2, continuation lines indented by 2>

    Positional arguments:
        NAME        <description>

    Options:
        -s, --long <val>    <description> [default: X]

Labels are indented by 4 columns; descriptions start at 4 + longest label of the
block + 4 and wrap with a hanging indent. A width of None means unbounded.

Palette keys (override through __styles__ in __main__, used when colorful=True)
- section-label, positional-name, option-name
"""
import sys
from collections import defaultdict

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from .utils import Unset
from .wrap import lines

_INDENT = 4


def _fill(chunks, width, indent):
    # wrapped lines joined with a hanging indent
    return ("\n" + " " * indent).join(lines(max(width, 1), chunks))


class PositionalHelp:
    """
    help entry of a positional argument.
    """
    __slots__ = ("name", "descr")

    def __init__(self, name, descr="", /):
        if not isinstance(name, str) or not name:
            raise TypeError("PositionalHelp() name must be a non-empty string")
        if not isinstance(descr, str):
            raise TypeError("PositionalHelp() description must be a string")
        self.name = name
        self.descr = descr

    @property
    def label(self):
        return self.name

    def chunks(self):
        return [self.descr]


class OptionHelp:
    """
    help entry of an option.

    parameters
    - short: single character, long: name without dashes; at least one is required.
    - descr: description text.
    - value: whether the option takes a value (implied by metavar or default).
    - metavar: value placeholder shown as <metavar> (defaults to <val>).
    - default: rendered as '[default: X]' after the description.
    """
    __slots__ = ("short", "long", "descr", "value", "metavar", "default")

    def __init__(self, short=None, long=None, descr="", /, *, value=False, metavar=None, default=None):
        if short is None and long is None:
            raise TypeError("OptionHelp() requires a short or a long name")
        if short is not None and (not isinstance(short, str) or len(short) != 1):
            raise TypeError("OptionHelp() short name must be a single character")
        if long is not None and (not isinstance(long, str) or not long):
            raise TypeError("OptionHelp() long name must be a non-empty string")
        if not isinstance(descr, str):
            raise TypeError("OptionHelp() description must be a string")
        self.short = short
        self.long = long
        self.descr = descr
        self.value = value or metavar is not None or default is not None
        self.metavar = metavar
        self.default = default

    @property
    def names(self):
        return ", ".join(name for name in (
            "-" + self.short if self.short is not None else None,
            "--" + self.long if self.long is not None else None,
        ) if name)

    @property
    def label(self):
        if not self.value:
            return self.names
        return "%s <%s>" % (self.names, self.metavar or "val")

    def chunks(self):
        if self.default is None:
            return [self.descr]
        if not self.descr:
            return ["[default: ", str(self.default), "]"]
        return [self.descr, " [default: ", str(self.default), "]"]


class Description:
    """
    full help page: description, usage, positional arguments and options.
    """

    def __init__(self, descr, usage, positionals=(), options=(), /, *, colorful=False):
        if not isinstance(descr, str) or not isinstance(usage, str):
            raise TypeError("Description() description and usage must be strings")
        self.descr = descr
        self.usage = usage
        self.positionals = tuple(positionals)
        self.options = tuple(options)
        self.colorful = colorful

        if not all(isinstance(entry, PositionalHelp) for entry in self.positionals):
            raise TypeError("Description() positionals must be PositionalHelp entries")
        if not all(isinstance(entry, OptionHelp) for entry in self.options):
            raise TypeError("Description() options must be OptionHelp entries")

    def render(self, width=None, /):
        """
        lay the help page out for a width (None: unbounded) as a rich Text.
        """
        styles = defaultdict(str, {
            "section-label": "bold #FFFFFF",
            "positional-name": "bold #FFD600",
            "option-name": "bold #00E6FF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        limit = sys.maxsize if width is None else width
        sections = []

        if self.descr:
            sections.append(Text(_fill([self.descr], limit, 0)))

        usage = Text().append("Usage:", styler("section-label"))
        usage.append("\n  ").append(_fill([self.usage], limit - 2, 2) if self.usage else "")
        sections.append(usage)

        for title, entries, style in (
            ("Positional arguments:", self.positionals, "positional-name"),
            ("Options:", self.options, "option-name"),
        ):
            if not entries:
                continue
            block = Text().append(title, styler("section-label"))
            column = _INDENT + max(cell_len(entry.label) for entry in entries) + _INDENT
            for entry in entries:
                block.append("\n").append(" " * _INDENT).append(entry.label, styler(style))
                if descr := _fill(entry.chunks(), limit - column, column):
                    block.append(" " * (column - _INDENT - cell_len(entry.label))).append(descr)
            sections.append(block)

        return Text("\n\n").join(sections)

    def print(self, width=Unset, /, *, console=Unset):
        """
        print the help page; Unset width uses the terminal width when known.
        """
        if console is Unset:
            console = Console()
        if width is Unset:
            width = console.width if console.is_terminal else None
        console.print(self.render(width), soft_wrap=True, highlight=False)

    def __rich_console__(self, console, options):
        yield self.render(options.max_width)

    def __str__(self):
        return self.render().plain


__all__ = (
    "PositionalHelp",
    "OptionHelp",
    "Description",
)
