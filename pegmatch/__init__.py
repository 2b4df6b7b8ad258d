"""
A parsing expression grammar (PEG) engine.

Build a grammar from expression objects, then match it against text::

    from pegmatch import Grammar, Rule, Rep, ASCII_DIGIT

    g = Grammar([Rule('number', Rep(ASCII_DIGIT, min=1))])
    tree = g.parse('123')
"""

from .engine import DEFAULT_REPEAT_LIMIT, ParseState, parse, parse_partial, run
from .expressions import *
from .failures import (
    EmptyStack, Failure, NestedRuleFailure, PredicateFailed,
    RepeatLimitExceeded, SliceOutOfBound, UnmatchedBuiltin,
    UnmatchedCharRange, UnmatchedLiteral,
)
from .grammar import Grammar
from .nodes import (
    ChoiceNode, Node, OptNode, PredicateNode, PushNode, RepNode, RuleNode,
    SeqNode, Terminal, visit,
)
from .position import Position, Span, line_col
from .stack import Stack
from .tracker import ParseError, Tracker
