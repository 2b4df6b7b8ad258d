import logging

from ..nodes import RuleNode
from .base import Expr, Step, Success, conv


logger = logging.getLogger(__name__)


# Rule kinds. They differ in how they set atomicity for their body:
# atomic and compound atomic rules force it on, non-atomic rules force it
# off, and normal and silent rules leave it as the caller had it.
NORMAL = 'normal'
SILENT = 'silent'
ATOMIC = 'atomic'
COMPOUND_ATOMIC = 'compound_atomic'
NON_ATOMIC = 'non_atomic'

_FORCED_ATOMICITY = {
    ATOMIC: True,
    COMPOUND_ATOMIC: True,
    NON_ATOMIC: False,
}


class Rule(Expr):
    """
    A named grammar rule.

    Failures inside the rule are reported with the rule's name, except for
    silent rules. A silent rule also produces no node of its own: it yields
    its body's node directly. An atomic rule's node keeps only its span.
    """

    def __init__(self, name, expr, kind=NORMAL):
        if kind not in (NORMAL, SILENT, ATOMIC, COMPOUND_ATOMIC, NON_ATOMIC):
            raise ValueError(f'Unknown rule kind: {kind!r}')
        self.name = name
        self.expr = conv(expr)
        self.kind = kind
        self.grammar = None

    def __str__(self):
        return self.name

    @property
    def is_atomic(self):
        return _FORCED_ATOMICITY.get(self.kind) is True

    def parse(self, text, **config):
        if self.grammar is not None:
            return self.grammar.parse(text, self, **config)
        return super().parse(text, **config)

    def parse_partial(self, text, **config):
        if self.grammar is not None:
            return self.grammar.parse_partial(text, self, **config)
        return super().parse_partial(text, **config)

    def _parse(self, state, pos, atomic):
        inner_atomic = _FORCED_ATOMICITY.get(self.kind, atomic)
        tracing = logger.isEnabledFor(logging.DEBUG)
        if tracing:
            logger.debug('%s ... (at index %d)', self.name, pos.offset)

        if self.kind == SILENT:
            result = yield Step(self.expr, pos, inner_atomic)
        else:
            with state.tracker.enter_rule(self.name):
                result = yield Step(self.expr, pos, inner_atomic)

        if tracing:
            if result is None:
                logger.debug('%s failed (at index %d)', self.name, pos.offset)
            else:
                logger.debug('%s matched %d..%d', self.name, pos.offset, result.pos.offset)

        if result is None or self.kind == SILENT:
            yield result
            return

        node = None if self.kind == ATOMIC else result.node
        yield Success(result.pos, RuleNode(self.name, pos.span_to(result.pos), node))


def Atomic(name, expr):
    return Rule(name, expr, kind=ATOMIC)


def CompoundAtomic(name, expr):
    return Rule(name, expr, kind=COMPOUND_ATOMIC)


def NonAtomic(name, expr):
    return Rule(name, expr, kind=NON_ATOMIC)


def Silent(name, expr):
    return Rule(name, expr, kind=SILENT)


class Ref(Expr):
    """Refers to a rule of the grammar by name."""

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name

    def _parse(self, state, pos, atomic):
        try:
            rule = state.rules[self.name]
        except KeyError:
            raise KeyError(f'Undefined rule: {self.name!r}') from None
        return rule._parse(state, pos, atomic)


class Lazy(Expr):
    """Builds its expression on first use, so that grammars can be recursive."""

    def __init__(self, func):
        self.func = func
        self.expr = None

    def __str__(self):
        return 'Lazy' if self.expr is None else str(self.expr)

    def resolve(self):
        if self.expr is None:
            self.expr = conv(self.func())
        return self.expr

    def _parse(self, state, pos, atomic):
        return self.resolve()._parse(state, pos, atomic)


class Ignored(Expr):
    """
    Skips insignificant text: the WHITESPACE and COMMENT rules.

    Does nothing when atomic. Otherwise it tries WHITESPACE and then COMMENT,
    each as an atomic rule, for as long as either one keeps matching. Never
    fails, and records no failures.
    """

    def __str__(self):
        return 'Ignored'

    def _parse(self, state, pos, atomic):
        if atomic or not state.skippers:
            yield Success(pos, None)
            return

        with state.tracker.muted():
            progress = True
            while progress:
                progress = False
                for skipper in state.skippers:
                    while True:
                        result = yield Step(skipper, pos, True)
                        # Stop on an empty match, which would loop forever.
                        if result is None or result.pos == pos:
                            break
                        pos = result.pos
                        progress = True

        yield Success(pos, None)


IGNORED = Ignored()
