import logging

from .expressions.base import Step, conv
from .expressions.rules import IGNORED, Lazy, Ref, Rule
from .expressions.terminals import ALWAYS_FAIL, EOI
from .position import Position
from .stack import Stack
from .tracker import Tracker


logger = logging.getLogger(__name__)


DEFAULT_REPEAT_LIMIT = 1024


class ParseState:
    """
    Everything that one top-level parse shares across its matchers: the
    input text, the backreference stack, the failure tracker, the rule table
    and the configuration.
    """

    def __init__(self, text, rules=None, whitespace=None, comment=None,
            repeat_limit=DEFAULT_REPEAT_LIMIT):
        if not isinstance(text, str):
            raise TypeError(f'Expected str. Received: {type(text)}.')
        if repeat_limit is not None and repeat_limit < 0:
            raise ValueError('repeat_limit must not be negative.')
        self.text = text
        self.rules = {} if rules is None else rules
        self.whitespace = ALWAYS_FAIL if whitespace is None else conv(whitespace)
        self.comment = ALWAYS_FAIL if comment is None else conv(comment)
        self.repeat_limit = repeat_limit
        self.stack = Stack()
        self.tracker = Tracker(text)
        self.ignored = IGNORED

        # The expressions that Ignored tries, in order.
        self.skippers = tuple(
            x for x in (self.whitespace, self.comment) if x is not ALWAYS_FAIL
        )

    def start(self):
        return Position.from_start(self.text)


def run(expr, state, pos, atomic=False):
    """
    Evaluates `expr` at `pos`, returning a `Success` or None.

    Matchers are generators. Instead of calling its sub-expressions, a matcher
    yields a `Step`, and this loop evaluates it and sends back the result. So
    the depth of the grammar is not limited by Python's recursion limit.
    """
    stack = [expr._parse(state, pos, atomic)]
    result = None
    while stack:
        result = stack[-1].send(result)
        if isinstance(result, Step):
            stack.append(result.expr._parse(state, result.pos, result.atomic))
            result = None
        else:
            stack.pop().close()
    return result


def parse(expr, text, **config):
    """Matches `expr` against all of `text`, and returns the resulting node."""
    return _parse(conv(expr), ParseState(text, **config), require_end=True)[1]


def parse_partial(expr, text, **config):
    """
    Matches `expr` against a prefix of `text`.

    Returns a pair ``(position, node)``, where `position` is where the match
    ended.
    """
    return _parse(conv(expr), ParseState(text, **config), require_end=False)


def _parse(expr, state, require_end):
    result = run(expr, state, state.start())
    if result is None:
        raise _failed(state)

    if not require_end:
        return result.pos, result.node

    pos = result.pos
    if not _is_atomic(expr, state):
        pos = run(state.ignored, state, pos).pos

    if run(EOI, state, pos) is None:
        raise _failed(state)

    return pos, result.node


def _is_atomic(expr, state):
    # Follow references to the rule that actually ran.
    while isinstance(expr, (Ref, Lazy)):
        if isinstance(expr, Ref):
            expr = state.rules.get(expr.name)
        else:
            expr = expr.resolve()
    return isinstance(expr, Rule) and expr.is_atomic


def _failed(state):
    error = state.tracker.finish()
    logger.debug('Parse failed at index %d: %s', error.offset, error.expected)
    return error
