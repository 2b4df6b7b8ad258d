import logging

from . import engine
from .expressions.rules import NORMAL, Rule
from .tracker import ParseError


logger = logging.getLogger(__name__)


class Grammar:
    """
    A table of named rules.

    The rules named ``WHITESPACE`` and ``COMMENT``, when present, define the
    text that non-atomic sequences and repetitions skip between their items.
    Rules refer to each other with `Ref`, which is resolved against this table
    at parse time.

    Example::

        g = Grammar([
            Rule('pair', ['(', Ref('pair'), ')'] | Empty()),
        ])
        g.parse('(())')
    """

    def __init__(self, rules=(), start=None, name='grammar',
            repeat_limit=engine.DEFAULT_REPEAT_LIMIT):
        self.name = name
        self.repeat_limit = repeat_limit
        self.rules = {}
        self.start = None
        for rule in rules:
            self.add(rule)
        if start is not None:
            self.start = self[start] if isinstance(start, str) else start

    def __repr__(self):
        return f'Grammar({self.name!r}, rules={list(self.rules)!r})'

    def __contains__(self, name):
        return name in self.rules

    def __getitem__(self, name):
        try:
            return self.rules[name]
        except KeyError:
            raise KeyError(f'{self.name} has no rule named {name!r}') from None

    def __iter__(self):
        return iter(self.rules.values())

    def add(self, rule):
        if not isinstance(rule, Rule):
            raise TypeError(f'Expected Rule. Received: {type(rule)}.')
        if rule.name in self.rules:
            raise ValueError(f'Duplicate rule: {rule.name!r}')
        if rule.grammar is not None and rule.grammar is not self:
            raise ValueError(f'Rule {rule.name!r} already belongs to {rule.grammar.name}')
        rule.grammar = self
        self.rules[rule.name] = rule

        # The first rule that is not a skipper is the default start rule.
        if self.start is None and rule.name not in ('WHITESPACE', 'COMMENT'):
            self.start = rule
        return rule

    def rule(self, name, expr, kind=NORMAL):
        return self.add(Rule(name, expr, kind=kind))

    def parse(self, text, rule=None, **config):
        return self._run(engine.parse, text, rule, config)

    def parse_partial(self, text, rule=None, **config):
        return self._run(engine.parse_partial, text, rule, config)

    def _run(self, func, text, rule, config):
        rule = self._start_rule(rule)
        config.setdefault('repeat_limit', self.repeat_limit)
        config.setdefault('whitespace', self.rules.get('WHITESPACE'))
        config.setdefault('comment', self.rules.get('COMMENT'))
        try:
            return func(rule, text, rules=self.rules, **config)
        except ParseError as exc:
            logger.debug('%s: %s failed at line %d, column %d',
                self.name, rule.name, exc.line, exc.column)
            raise

    def _start_rule(self, rule):
        if rule is None:
            if self.start is None:
                raise ValueError(f'{self.name} has no rules.')
            return self.start
        if isinstance(rule, str):
            return self[rule]
        if rule.grammar is not self:
            raise ValueError(f'Rule {rule.name!r} is not part of {self.name}')
        return rule
