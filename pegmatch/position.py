from collections import namedtuple
from functools import total_ordering


@total_ordering
class Position:
    """
    An offset into one input text.

    Positions are immutable. The matching methods never change the position
    they are called on; they return a new position (or ``None`` when the input
    does not match).
    """
    __slots__ = ('text', 'offset')

    def __init__(self, text, offset=0):
        if not 0 <= offset <= len(text):
            raise ValueError(f'Offset {offset} is outside of the input.')
        self.text = text
        self.offset = offset

    @classmethod
    def from_start(cls, text):
        return cls(text, 0)

    def __eq__(self, other):
        return (isinstance(other, Position)
            and self.text is other.text
            and self.offset == other.offset)

    def __lt__(self, other):
        return self.offset < other.offset

    def __hash__(self):
        return hash(self.offset)

    def __repr__(self):
        return f'Position({self.offset})'

    def at_start(self):
        return self.offset == 0

    def at_end(self):
        return self.offset == len(self.text)

    def remaining(self):
        return len(self.text) - self.offset

    def _advance(self, count):
        return Position(self.text, self.offset + count)

    def match_literal(self, string):
        if self.text.startswith(string, self.offset):
            return self._advance(len(string))
        return None

    def match_literal_ci(self, string):
        """Returns ``(position, matched_text)``, since the casing may differ."""
        end = self.offset + len(string)
        if end > len(self.text):
            return None
        actual = self.text[self.offset:end]
        if actual.lower() == string.lower():
            return Position(self.text, end), actual
        return None

    def match_char_in_range(self, low, high):
        if self.offset < len(self.text) and low <= self.text[self.offset] <= high:
            return self._advance(1), self.text[self.offset]
        return None

    def match_any_char(self):
        if self.offset < len(self.text):
            return self._advance(1), self.text[self.offset]
        return None

    def skip(self, count):
        if count <= self.remaining():
            return self._advance(count)
        return None

    def skip_until(self, strings):
        # The delimiter itself is not consumed.
        text = self.text
        for offset in range(self.offset, len(text) + 1):
            if any(text.startswith(s, offset) for s in strings):
                return Position(text, offset)
        return None

    def mismatch_offset(self, string, ignore_case=False):
        """Returns the offset of the first character that differs from `string`."""
        text = self.text
        offset = self.offset
        for expected in string:
            if offset >= len(text):
                break
            actual = text[offset]
            if ignore_case:
                actual, expected = actual.lower(), expected.lower()
            if actual != expected:
                break
            offset += 1
        return offset

    def span_to(self, other):
        if self.text is not other.text:
            raise ValueError('Positions refer to different inputs.')
        return Span(self.text, self.offset, other.offset)

    def line_col(self):
        return line_col(self.text, self.offset)


def line_col(text, offset):
    """Returns the 1-based line and column of `offset` within `text`."""
    line = text.count('\n', 0, offset) + 1
    line_start = text.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


class Span(namedtuple('Span', 'source, start, end')):
    __slots__ = ()

    def __new__(cls, source, start, end):
        if end < start:
            raise ValueError(f'Invalid span: end {end} is before start {start}.')
        return super().__new__(cls, source, start, end)

    def __repr__(self):
        return f'Span({self.start}, {self.end}, {self.text!r})'

    def __str__(self):
        return self.text

    def __eq__(self, other):
        return (isinstance(other, Span)
            and self.source is other.source
            and self.start == other.start
            and self.end == other.end)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.start, self.end))

    @property
    def text(self):
        return self.source[self.start:self.end]

    def start_pos(self):
        return Position(self.source, self.start)

    def end_pos(self):
        return Position(self.source, self.end)
