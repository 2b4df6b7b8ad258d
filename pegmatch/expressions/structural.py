from ..nodes import ChoiceNode, OptNode, PredicateNode, RepNode, SeqNode
from .base import Expr, Step, Success, conv


class Seq(Expr):
    def __init__(self, *exprs):
        if not exprs:
            raise ValueError('Seq requires at least one expression.')
        self.exprs = [conv(x) for x in exprs]

    def __str__(self):
        return ' ~ '.join(x._operand_string() for x in self.exprs)

    def _operand_string(self):
        return f'({self})'

    def _parse(self, state, pos, atomic):
        start = pos
        items = []
        for i, expr in enumerate(self.exprs):
            if i and not atomic:
                skipped = yield Step(state.ignored, pos, atomic)
                pos = skipped.pos

            item = yield Step(expr, pos, atomic)

            # Stack changes made by earlier items are kept. Wrap the sequence
            # in Restorable to undo them.
            if item is None:
                yield None
                return

            items.append(item.node)
            pos = item.pos
        yield Success(pos, SeqNode(start.span_to(pos), items))


class Choice(Expr):
    """Ordered choice. The first alternative that matches wins."""

    def __init__(self, *exprs):
        if not exprs:
            raise ValueError('Choice requires at least one expression.')
        self.exprs = [conv(x) for x in exprs]

    def __str__(self):
        return ' | '.join(x._operand_string() for x in self.exprs)

    def _operand_string(self):
        return f'({self})'

    def _parse(self, state, pos, atomic):
        # Every alternative records its failures into the same tracker, which
        # keeps whichever of them got furthest.
        for index, expr in enumerate(self.exprs):
            result = yield Step(expr, pos, atomic)
            if result is not None:
                node = ChoiceNode(pos.span_to(result.pos), index, result.node)
                yield Success(result.pos, node)
                return
        yield None


class Opt(Expr):
    def __init__(self, expr):
        self.expr = conv(expr)

    def __str__(self):
        return f'{self.expr._operand_string()}?'

    def _parse(self, state, pos, atomic):
        state.stack.snapshot()
        result = yield Step(self.expr, pos, atomic)
        if result is None:
            state.stack.restore()
            yield Success(pos, OptNode(pos.span_to(pos), None))
        else:
            state.stack.clear_snapshot()
            yield Success(result.pos, OptNode(pos.span_to(result.pos), result.node))


class Rep(Expr):
    """
    Greedy repetition.

    Matches `expr` as many times as it can, skipping ignored text between
    matches. Fails if fewer than `min` matches are found. Stops after `max`
    matches, when given. Separately, the parse state's `repeat_limit` caps the
    number of matches, so that an expression which matches the empty string
    cannot loop forever.
    """

    def __init__(self, expr, min=0, max=None):
        if min < 0 or (max is not None and max < min):
            raise ValueError(f'Invalid repetition bounds: {min}..{max}')
        self.expr = conv(expr)
        self.min = min
        self.max = max

    def __str__(self):
        operand = self.expr._operand_string()
        if (self.min, self.max) == (0, None):
            return f'{operand}*'
        if (self.min, self.max) == (1, None):
            return f'{operand}+'
        return f'{operand}{{{self.min}, {"" if self.max is None else self.max}}}'

    def _parse(self, state, pos, atomic):
        start = pos
        items = []
        limit = state.repeat_limit

        while self.max is None or len(items) < self.max:
            if items and not atomic:
                skipped = yield Step(state.ignored, pos, atomic)
                pos = skipped.pos

            item = yield Step(self.expr, pos, atomic)

            # The failure that ends the loop is not an error. Ignored text
            # skipped before it stays consumed.
            if item is None:
                break

            items.append(item.node)
            pos = item.pos

            if limit is not None and len(items) > limit:
                state.tracker.record_repeat_limit(limit, pos)
                yield None
                return

        if len(items) < self.min:
            yield None
        else:
            yield Success(pos, RepNode(start.span_to(pos), items))


def RepOnce(expr):
    return Rep(expr, min=1)


class Positive(Expr):
    """Succeeds, without consuming input, if `expr` matches here."""

    def __init__(self, expr):
        self.expr = conv(expr)

    def __str__(self):
        return f'&{self.expr._operand_string()}'

    def _parse(self, state, pos, atomic):
        state.stack.snapshot()
        with state.tracker.positive_during():
            result = yield Step(self.expr, pos, atomic)
        state.stack.restore()

        if result is None:
            state.tracker.record_predicate(True, str(self.expr), pos)
            yield None
        else:
            yield Success(pos, PredicateNode(pos.span_to(pos), True, result.node))


class Negative(Expr):
    """Succeeds, without consuming input, if `expr` does not match here."""

    def __init__(self, expr):
        self.expr = conv(expr)

    def __str__(self):
        return f'!{self.expr._operand_string()}'

    def _parse(self, state, pos, atomic):
        state.stack.snapshot()
        with state.tracker.negative_during():
            result = yield Step(self.expr, pos, atomic)
        state.stack.restore()

        if result is None:
            yield Success(pos, PredicateNode(pos.span_to(pos), False, None))
        else:
            state.tracker.record_predicate(False, str(self.expr), pos)
            yield None


class Restorable(Expr):
    """Undoes the stack changes of `expr` if it fails."""

    def __init__(self, expr):
        self.expr = conv(expr)

    def __str__(self):
        return f'Restorable({self.expr})'

    def _parse(self, state, pos, atomic):
        state.stack.snapshot()
        result = yield Step(self.expr, pos, atomic)
        if result is None:
            state.stack.restore()
        else:
            state.stack.clear_snapshot()
        yield result
