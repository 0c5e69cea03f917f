"""
Greedy, display-width aware word wrapping over a stream of text chunks.

The chunks are one logical text; chunk boundaries carry no meaning and a line may
span several of them. Widths are terminal cells (rich.cells), not characters or
bytes, so wide glyphs count double and combining marks count zero.

Output items
- Part(text): a piece that did not end a line; the next item continues the line.
- Break(text): the content before a line break; a newline follows it.

This is single-pass and non-backtracking: it breaks at the last space that fits
(the space is consumed) or mid-word when no space fits. It does not try to
minimize raggedness.
"""
from rich.cells import cell_len, get_character_cell_size


class Item:
    __slots__ = ("text",)
    __match_args__ = ("text",)

    def __init__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("%s() argument must be a string" % type(self).__name__)
        self.text = text

    def __eq__(self, other, /):
        if not isinstance(other, Item):
            return NotImplemented
        return type(self) is type(other) and self.text == other.text

    def __hash__(self):
        return hash((type(self), self.text))

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.text)


class Part(Item):
    """
    chunk content that did not require a line break.
    """
    __slots__ = ()


class Break(Item):
    """
    content preceding a line break.
    """
    __slots__ = ()


def split_width(text, width, /):
    """
    split text at the last point where the left side fits in width cells.

    - a space that ends the fitting prefix is not counted and is consumed.
    - without such a space the split is at the exact cell limit (mid-word).
    - when the whole text fits it is returned as (text, "").

        >>> split_width("DO NOT BECOME ADDICTED TO OXYGEN", 6)
        ('DO NOT', 'BECOME ADDICTED TO OXYGEN')
    """
    spent = 0
    last = None
    soft, hard = None, 0

    for index, character in enumerate(text):
        spent += get_character_cell_size(character)
        if character == " ":
            last = index
            used = spent - 1
        else:
            used = spent
        if used > width:
            break
        soft, hard = last, index + 1

    if soft is None:
        return text[:hard], text[hard:]
    if hard == len(text):
        return text, ""
    return text[:soft], text[soft + 1:]


class Wrap:
    """
    lazy line breaker over chunks of text.

    parameters
    - width: maximum line width in terminal cells (>= 0).
    - chunks: iterable of strings; it must yield at least one chunk (ValueError
      otherwise). Empty chunks are skipped.

    when nothing fits on an empty line (zero width, or a glyph wider than the
    limit) a single character is emitted as a Break, so iteration always ends.
    """
    __slots__ = ("_width", "_spent", "_chunks", "_current")

    def __init__(self, width, chunks, /):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("Wrap() width must be an integer")
        if width < 0:
            raise ValueError("Wrap() width must not be negative")
        self._width = width
        self._spent = 0
        self._chunks = iter(chunks)
        try:
            self._current = next(self._chunks)
        except StopIteration:
            raise ValueError("Wrap() requires at least one chunk") from None
        if not self._current:
            self._current = self._advance()

    def _advance(self):
        for chunk in self._chunks:
            if chunk:
                return chunk
        return ""

    def __iter__(self):
        return self

    def __next__(self):
        if not self._current:
            raise StopIteration

        left, right = split_width(self._current, self._width - self._spent)

        if not left and right == self._current and not self._spent:
            left, right = self._current[:1], self._current[1:]
            self._current = right or self._advance()
            return Break(left)

        self._spent += cell_len(left)

        if self._width > self._spent:
            if not right:
                self._current = self._advance()
                return Part(left)
            self._current = right
            self._spent = 0
            return Break(left)

        # exactly filled
        self._current = right or self._advance()
        self._spent = 0
        return Break(left)


def lines(width, chunks, /):
    """
    wrap chunks into a list of line strings (Parts joined, one line per Break).

    a trailing empty line left by a final Break is dropped.
    """
    result = [""]
    for item in Wrap(width, chunks):
        result[-1] += item.text
        if isinstance(item, Break):
            result.append("")
    if len(result) > 1 and not result[-1]:
        result.pop()
    return result


__all__ = (
    "Item",
    "Part",
    "Break",
    "split_width",
    "Wrap",
    "lines",
)
