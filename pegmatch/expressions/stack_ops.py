from ..failures import UnmatchedLiteral
from ..nodes import PushNode, Terminal
from .base import Expr, Step, Success, conv


class Push(Expr):
    """Matches `expr` and pushes the span that it consumed onto the stack."""

    def __init__(self, expr):
        self.expr = conv(expr)

    def __str__(self):
        return f'PUSH({self.expr})'

    def _parse(self, state, pos, atomic):
        result = yield Step(self.expr, pos, atomic)
        if result is None:
            yield None
            return
        span = pos.span_to(result.pos)
        state.stack.push(span)
        yield Success(result.pos, PushNode(span, result.node))


class Peek(Expr):
    """Matches the text of the top of the stack."""

    kind = 'peek'

    def __str__(self):
        return 'PEEK'

    def _parse(self, state, pos, atomic):
        top = state.stack.peek()
        if top is None:
            state.tracker.record_empty_stack(pos)
            yield None
            return
        end = _match_text(state, pos, top.text)
        if end is None:
            yield None
            return
        self._consume(state)
        yield Success(end, Terminal(self.kind, pos.span_to(end), top.text))

    def _consume(self, state):
        pass


class Pop(Peek):
    """Matches the text of the top of the stack, and then pops it."""

    kind = 'pop'

    def __str__(self):
        return 'POP'

    def _consume(self, state):
        state.stack.pop()


class PeekAll(Expr):
    """Matches the whole stack, from the top down."""

    kind = 'peek_all'

    def __str__(self):
        return 'PEEK_ALL'

    def _parse(self, state, pos, atomic):
        spans = state.stack.slice(0)
        end = _match_spans(state, pos, spans)
        if end is None:
            yield None
            return
        self._consume(state)
        span = pos.span_to(end)
        yield Success(end, Terminal(self.kind, span, span.text))

    def _consume(self, state):
        pass


class PopAll(PeekAll):
    """Matches the whole stack, from the top down, and then clears it."""

    kind = 'pop_all'

    def __str__(self):
        return 'POP_ALL'

    def _consume(self, state):
        state.stack.clear()


class PeekSlice(Expr):
    """
    Matches a slice of the stack, from the top down, without popping it.

    Index 0 is the top of the stack. Negative indexes count from the bottom,
    and an `end` of None means "through the bottom".
    """

    def __init__(self, start, end=None):
        self.start = start
        self.end = end

    def __str__(self):
        end = '' if self.end is None else self.end
        return f'PEEK[{self.start}..{end}]'

    def _parse(self, state, pos, atomic):
        spans = state.stack.slice(self.start, self.end)
        if spans is None:
            state.tracker.record_out_of_bound(self.start, self.end, pos)
            yield None
            return
        end = _match_spans(state, pos, spans)
        if end is None:
            yield None
            return
        span = pos.span_to(end)
        yield Success(end, Terminal('peek_slice', span, span.text))


class Drop(Expr):
    """Pops the top of the stack without matching anything."""

    def __str__(self):
        return 'DROP'

    def _parse(self, state, pos, atomic):
        top = state.stack.pop()
        if top is None:
            state.tracker.record_empty_stack(pos)
            yield None
        else:
            yield Success(pos, Terminal('drop', pos.span_to(pos), top.text))


def _match_spans(state, pos, spans):
    return _match_text(state, pos, ''.join(span.text for span in spans))


def _match_text(state, pos, text):
    end = pos.match_literal(text)
    if end is None:
        state.tracker.record_fail(UnmatchedLiteral(text), pos.mismatch_offset(text))
    return end


PEEK = Peek()
PEEK_ALL = PeekAll()
POP = Pop()
POP_ALL = PopAll()
DROP = Drop()
