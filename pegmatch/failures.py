"""
The kinds of failure that the engine records in its tracker.

A failure is never raised by itself. Matchers record failures into the
tracker, and the tracker turns the furthest ones into a `ParseError` when the
whole parse fails.
"""

from collections import namedtuple


class Failure:
    __slots__ = ()

    # False for failures that are not about the input text, like an empty
    # backreference stack. These are described rather than listed.
    is_expectation = True

    # The text that appears in "expected ..." lists.
    @property
    def label(self):
        raise NotImplementedError('label')

    def describe(self):
        return f'expected {self.label}'

    def innermost(self):
        return self


class UnmatchedLiteral(Failure, namedtuple('UnmatchedLiteral', 'literal, ignore_case')):
    __slots__ = ()

    def __new__(cls, literal, ignore_case=False):
        return super().__new__(cls, literal, ignore_case)

    @property
    def label(self):
        prefix = '^' if self.ignore_case else ''
        return f'{prefix}{_quote(self.literal)}'


class UnmatchedCharRange(Failure, namedtuple('UnmatchedCharRange', 'low, high')):
    __slots__ = ()

    @property
    def label(self):
        return f'{_quote(self.low, _CHAR)}..{_quote(self.high, _CHAR)}'

    def describe(self):
        return f'expected a character in {self.label}'


class UnmatchedBuiltin(Failure, namedtuple('UnmatchedBuiltin', 'name')):
    __slots__ = ()

    @property
    def label(self):
        return self.name


class PredicateFailed(Failure, namedtuple('PredicateFailed', 'positive, expr')):
    __slots__ = ()

    @property
    def label(self):
        return f'{"&" if self.positive else "!"}{self.expr}'

    def describe(self):
        if self.positive:
            return f'expected {self.expr} to match here'
        return f'expected {self.expr} not to match here'


class EmptyStack(Failure, namedtuple('EmptyStack', '')):
    __slots__ = ()
    is_expectation = False

    @property
    def label(self):
        return 'a non-empty stack'

    def describe(self):
        return 'the backreference stack is empty'


class SliceOutOfBound(Failure, namedtuple('SliceOutOfBound', 'start, end')):
    __slots__ = ()
    is_expectation = False

    @property
    def label(self):
        end = '' if self.end is None else self.end
        return f'PEEK[{self.start}..{end}]'

    def describe(self):
        return f'stack slice {self.label} is out of bounds'


class RepeatLimitExceeded(Failure, namedtuple('RepeatLimitExceeded', 'limit')):
    __slots__ = ()
    is_expectation = False

    @property
    def label(self):
        return f'at most {self.limit} repetitions'

    def describe(self):
        return f'too many repetitions (the limit is {self.limit})'


class NestedRuleFailure(Failure, namedtuple('NestedRuleFailure', 'rule, cause')):
    __slots__ = ()

    @property
    def label(self):
        return self.innermost().label

    def describe(self):
        return self.innermost().describe()

    def innermost(self):
        cause = self.cause
        while isinstance(cause, NestedRuleFailure):
            cause = cause.cause
        return cause

    def rule_chain(self):
        """Returns the rule names from the outermost rule inward."""
        chain = [self.rule]
        cause = self.cause
        while isinstance(cause, NestedRuleFailure):
            chain.append(cause.rule)
            cause = cause.cause
        return chain


def nest_in_rules(failure, rules):
    """Wraps `failure` in one `NestedRuleFailure` per rule, outermost first."""
    for rule in reversed(rules):
        failure = NestedRuleFailure(rule, failure)
    return failure


_STRING, _CHAR = '"', "'"

_ESCAPES = {'\\': '\\\\', '\n': '\\n', '\r': '\\r', '\t': '\\t'}


def _quote(text, quote=_STRING):
    body = ''.join(_ESCAPES.get(c, c) for c in text).replace(quote, '\\' + quote)
    return quote + body + quote
