from ..failures import UnmatchedBuiltin, UnmatchedCharRange, UnmatchedLiteral
from ..nodes import Terminal
from .base import Expr, Success
from .structural import Choice


class Literal(Expr):
    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError(f'Expected str. Received: {type(value)}.')
        self.value = value

    def __str__(self):
        return UnmatchedLiteral(self.value).label

    def _parse(self, state, pos, atomic):
        end = pos.match_literal(self.value)
        if end is None:
            failure = UnmatchedLiteral(self.value)
            state.tracker.record_fail(failure, pos.mismatch_offset(self.value))
            yield None
        else:
            yield Success(end, Terminal('literal', pos.span_to(end), self.value))


class Insens(Expr):
    """Matches a string case-insensitively. The node keeps the actual text."""

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError(f'Expected str. Received: {type(value)}.')
        self.value = value

    def __str__(self):
        return UnmatchedLiteral(self.value, ignore_case=True).label

    def _parse(self, state, pos, atomic):
        match = pos.match_literal_ci(self.value)
        if match is None:
            failure = UnmatchedLiteral(self.value, ignore_case=True)
            offset = pos.mismatch_offset(self.value, ignore_case=True)
            state.tracker.record_fail(failure, offset)
            yield None
        else:
            end, content = match
            yield Success(end, Terminal('insens', pos.span_to(end), content))


class CharRange(Expr):
    """Matches one character between `low` and `high`, inclusive."""

    def __init__(self, low, high):
        if len(low) != 1 or len(high) != 1:
            raise ValueError('CharRange bounds must be single characters.')
        if low > high:
            raise ValueError(f'Empty character range: {low!r}..{high!r}')
        self.low = low
        self.high = high

    def __str__(self):
        return UnmatchedCharRange(self.low, self.high).label

    def _parse(self, state, pos, atomic):
        match = pos.match_char_in_range(self.low, self.high)
        if match is None:
            state.tracker.record_fail(UnmatchedCharRange(self.low, self.high), pos)
            yield None
        else:
            end, char = match
            yield Success(end, Terminal('char', pos.span_to(end), char))


class AnyChar(Expr):
    def __str__(self):
        return 'ANY'

    def _parse(self, state, pos, atomic):
        match = pos.match_any_char()
        if match is None:
            state.tracker.record_fail(UnmatchedBuiltin('ANY'), pos)
            yield None
        else:
            end, char = match
            yield Success(end, Terminal('any', pos.span_to(end), char))


class StartOfInput(Expr):
    def __str__(self):
        return 'SOI'

    def _parse(self, state, pos, atomic):
        if pos.at_start():
            yield Success(pos, Terminal('soi', pos.span_to(pos), ''))
        else:
            state.tracker.record_fail(UnmatchedBuiltin('SOI'), pos)
            yield None


class EndOfInput(Expr):
    def __str__(self):
        return 'EOI'

    def _parse(self, state, pos, atomic):
        if pos.at_end():
            yield Success(pos, Terminal('eoi', pos.span_to(pos), ''))
        else:
            state.tracker.record_fail(UnmatchedBuiltin('EOI'), pos)
            yield None


class Newline(Expr):
    # CRLF must come first, so that it is not split into two line endings.
    endings = (('\r\n', 'CRLF'), ('\n', 'LF'), ('\r', 'CR'))

    def __str__(self):
        return 'NEWLINE'

    def _parse(self, state, pos, atomic):
        for ending, kind in self.endings:
            end = pos.match_literal(ending)
            if end is not None:
                yield Success(end, Terminal('newline', pos.span_to(end), kind))
                return
        state.tracker.record_fail(UnmatchedBuiltin('NEWLINE'), pos)
        yield None


class Skip(Expr):
    """
    Skips input until one of the delimiters is next.

    The delimiter itself is not consumed. Fails if the input ends first.
    """

    def __init__(self, *delimiters):
        if not delimiters:
            raise ValueError('Skip requires at least one delimiter.')
        self.delimiters = delimiters

    def __str__(self):
        args = ', '.join(UnmatchedLiteral(x).label for x in self.delimiters)
        return f'Skip({args})'

    def _parse(self, state, pos, atomic):
        end = pos.skip_until(self.delimiters)
        if end is None:
            end_of_input = len(pos.text)
            for delimiter in self.delimiters:
                state.tracker.record_fail(UnmatchedLiteral(delimiter), end_of_input)
            yield None
        else:
            span = pos.span_to(end)
            yield Success(end, Terminal('skip', span, span.text))


class SkipChar(Expr):
    """Skips exactly `count` characters."""

    def __init__(self, count):
        if count < 0:
            raise ValueError('SkipChar count must not be negative.')
        self.count = count

    def __str__(self):
        return f'SkipChar({self.count})'

    def _parse(self, state, pos, atomic):
        end = pos.skip(self.count)
        if end is None:
            state.tracker.record_fail(UnmatchedBuiltin(str(self)), pos)
            yield None
        else:
            span = pos.span_to(end)
            yield Success(end, Terminal('skip', span, span.text))


class AlwaysFail(Expr):
    def __str__(self):
        return 'AlwaysFail'

    def _parse(self, state, pos, atomic):
        yield None


class Empty(Expr):
    def __str__(self):
        return 'Empty'

    def _parse(self, state, pos, atomic):
        yield Success(pos, Terminal('empty', pos.span_to(pos), ''))


ANY = AnyChar()
SOI = StartOfInput()
EOI = EndOfInput()
NEWLINE = Newline()
ALWAYS_FAIL = AlwaysFail()
EMPTY = Empty()


ASCII_DIGIT = CharRange('0', '9')
ASCII_NONZERO_DIGIT = CharRange('1', '9')
ASCII_BIN_DIGIT = CharRange('0', '1')
ASCII_OCT_DIGIT = CharRange('0', '7')
ASCII_HEX_DIGIT = Choice(ASCII_DIGIT, CharRange('a', 'f'), CharRange('A', 'F'))
ASCII_ALPHA_LOWER = CharRange('a', 'z')
ASCII_ALPHA_UPPER = CharRange('A', 'Z')
ASCII_ALPHA = Choice(ASCII_ALPHA_LOWER, ASCII_ALPHA_UPPER)
ASCII_ALPHANUMERIC = Choice(ASCII_ALPHA, ASCII_DIGIT)
ASCII = CharRange('\x00', '\x7f')
