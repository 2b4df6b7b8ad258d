from contextlib import contextmanager

from .failures import (
    EmptyStack, PredicateFailed, RepeatLimitExceeded, SliceOutOfBound,
    nest_in_rules,
)
from .position import Position, line_col


# The kinds of a recorded failure.
ORDINARY = None
POSITIVE = 'positive'
NEGATIVE = 'negative'


class ParseError(Exception):
    """Indicates that the input does not match the grammar."""

    def __init__(self, text, offset, records=()):
        self.text = text
        self.offset = offset
        self.line, self.column = line_col(text, offset)
        # A list of (failure, rules, kind) triples, all recorded at `offset`.
        # `rules` holds the names of the enclosing rules, outermost first.
        self.records = list(records)
        super().__init__(self.error_message())

    @property
    def entries(self):
        """Returns (failure, kind) pairs, with failures nested in their rules."""
        return [(nest_in_rules(f, rules), kind) for f, rules, kind in self.records]

    @property
    def failures(self):
        return [nest_in_rules(f, rules) for f, rules, _ in self.records]

    @property
    def expected(self):
        return _unique(
            f.label for f, _, kind in self.records
            if kind != NEGATIVE and f.is_expectation
        )

    @property
    def problems(self):
        """Describes the failures that are not about what the input should be."""
        return _unique(
            f.describe() for f, _, _ in self.records if not f.is_expectation
        )

    @property
    def unexpected(self):
        return _unique(
            f.expr for f, _, kind in self.records
            if kind == NEGATIVE and isinstance(f, PredicateFailed)
        )

    @property
    def predicate(self):
        """Returns 'positive' or 'negative' if a lookahead caused the failure."""
        kinds = {kind for _, _, kind in self.records}
        return kinds.pop() if len(kinds) == 1 else ORDINARY

    @property
    def rules(self):
        return _unique(rules[-1] for _, rules, _ in self.records if rules)

    def error_message(self):
        parts = []
        if self.expected:
            parts.append('expected ' + _or_list(self.expected))
        if self.unexpected:
            parts.append('unexpected ' + _or_list(self.unexpected))
        parts.extend(self.problems)
        if not parts:
            parts = ['no match']
        context = f' (in {", ".join(self.rules)})' if self.rules else ''
        return (
            f'Parse error at line {self.line}, column {self.column} '
            f'(index {self.offset}){context}: {"; ".join(parts)}\n'
            f'{self.excerpt()}'
        )

    def excerpt(self):
        start = self.text.rfind('\n', 0, self.offset) + 1
        end = self.text.find('\n', self.offset)
        if end < 0:
            end = len(self.text)
        line = self.text[start:end].rstrip('\r')
        return f'    {line}\n    {" " * (self.column - 1)}^'


class Tracker:
    """
    Keeps the failures that got furthest into the input.

    A failure nearer than the furthest offset is discarded, a failure at the
    furthest offset is added to the others, and a failure beyond it replaces
    everything recorded so far.
    """

    def __init__(self, text):
        self.text = text
        self.furthest = -1
        self._records = []
        self._rules = []
        self._kinds = []
        self._muted = 0

    def __repr__(self):
        return f'Tracker(furthest={self.furthest}, records={self._records!r})'

    @property
    def entries(self):
        return [(nest_in_rules(f, rules), kind) for f, rules, kind in self._records]

    @property
    def kind(self):
        return self._kinds[-1] if self._kinds else ORDINARY

    def record_fail(self, failure, pos, kind=None):
        if self._muted:
            return
        offset = pos.offset if isinstance(pos, Position) else pos
        if offset < self.furthest:
            return
        if offset > self.furthest:
            self.furthest = offset
            self._records = []
        # The rule chain stays a flat tuple, so that comparing two records
        # does not recurse through nested failures.
        record = (failure, tuple(self._rules), self.kind if kind is None else kind)
        if record not in self._records:
            self._records.append(record)

    def record_empty_stack(self, pos):
        self.record_fail(EmptyStack(), pos)

    def record_out_of_bound(self, start, end, pos):
        self.record_fail(SliceOutOfBound(start, end), pos)

    def record_repeat_limit(self, limit, pos):
        self.record_fail(RepeatLimitExceeded(limit), pos)

    def record_predicate(self, positive, label, pos):
        kind = POSITIVE if positive else NEGATIVE
        self.record_fail(PredicateFailed(positive, label), pos, kind=kind)

    @contextmanager
    def enter_rule(self, rule):
        self._rules.append(rule)
        try:
            yield
        finally:
            self._rules.pop()

    @contextmanager
    def positive_during(self):
        self._kinds.append(POSITIVE)
        try:
            yield
        finally:
            self._kinds.pop()

    @contextmanager
    def negative_during(self):
        # A failure inside a negative lookahead is what makes it succeed,
        # so nothing recorded in here is worth reporting.
        self._kinds.append(NEGATIVE)
        self._muted += 1
        try:
            yield
        finally:
            self._muted -= 1
            self._kinds.pop()

    @contextmanager
    def muted(self):
        self._muted += 1
        try:
            yield
        finally:
            self._muted -= 1

    def run_positive(self, func, *args):
        with self.positive_during():
            return func(*args)

    def run_negative(self, func, *args):
        with self.negative_during():
            return func(*args)

    def merge(self, other):
        """Combines the furthest failures of two trackers into this one."""
        if other.furthest > self.furthest:
            self.furthest = other.furthest
            self._records = list(other._records)
        elif other.furthest == self.furthest:
            for record in other._records:
                if record not in self._records:
                    self._records.append(record)
        return self

    def finish(self):
        return ParseError(self.text, max(self.furthest, 0), self._records)


def _unique(items):
    result = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


def _or_list(labels):
    if len(labels) == 1:
        return labels[0]
    return ', '.join(labels[:-1]) + ' or ' + labels[-1]
