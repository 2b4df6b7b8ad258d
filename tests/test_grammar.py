import logging

import pytest
from pegmatch import *


def test_first_rule_is_the_default_start():
    g = Grammar([
        Rule('WHITESPACE', ' '),
        Rule('sum', [Ref('num'), '+', Ref('num')]),
        Atomic('num', RepOnce(ASCII_DIGIT)),
    ])
    assert g.start is g['sum']
    node = g.parse('12 + 3')
    assert node.rule == 'sum'
    assert [x.text for x in node.find('num')] == ['12', '3']


def test_explicit_start_rule():
    g = Grammar([
        Atomic('num', RepOnce(ASCII_DIGIT)),
        Rule('nums', Rep(Ref('num'))),
    ], start='nums')
    assert g.start is g['nums']


def test_parse_a_named_rule():
    g = Grammar([Rule('a', 'a'), Rule('b', 'b')])
    assert g.parse('b', 'b').rule == 'b'
    assert g.parse('b', g['b']).rule == 'b'
    assert g['a'].parse('a').rule == 'a'


def test_rule_helper():
    g = Grammar(name='letters')
    lower = g.rule('lower', ASCII_ALPHA_LOWER, kind=ATOMIC)
    assert lower.grammar is g
    assert lower.is_atomic
    assert 'lower' in g
    assert list(g) == [lower]
    assert g.parse('q').text == 'q'


def test_rules_are_unique():
    g = Grammar([Rule('a', 'a')])
    with pytest.raises(ValueError):
        g.add(Rule('a', 'b'))
    with pytest.raises(ValueError):
        Grammar().add(g['a'])
    with pytest.raises(TypeError):
        g.add(Literal('a'))


def test_unknown_rules():
    g = Grammar([Rule('a', 'a')])
    with pytest.raises(KeyError):
        g['b']
    with pytest.raises(KeyError):
        g.parse('a', 'b')
    with pytest.raises(ValueError):
        Grammar().parse('a')
    with pytest.raises(ValueError):
        g.parse('b', Rule('b', 'b'))


def test_recursive_rules():
    g = Grammar([
        Rule('nested', ['(', Opt(Ref('nested')), ')']),
    ])
    assert g.parse('((()))').text == '((()))'
    with pytest.raises(ParseError) as info:
        g.parse('(()')
    assert info.value.offset == 3
    assert info.value.expected == ['")"']


def test_deeply_nested_rules_with_alternatives():
    g = Grammar([
        Rule('nest', Opt(Choice(['(', Ref('nest'), ')'], ['[', Ref('nest'), ']']))),
    ])
    depth = 1200
    assert g.parse('(' * depth + ')' * depth).text == '(' * depth + ')' * depth

    with pytest.raises(ParseError) as info:
        g.parse('(' * depth + ']')
    error = info.value
    assert error.offset == depth
    assert error.expected == ['"("', '"["', '")"']
    assert error.rules == ['nest']
    assert len(error.failures[0].rule_chain()) == depth + 1
    assert error.failures[0].innermost() == UnmatchedLiteral('(')


def test_parse_partial():
    g = Grammar([
        Rule('WHITESPACE', ' '),
        Rule('words', RepOnce(Ref('word'))),
        Atomic('word', RepOnce(ASCII_ALPHA)),
    ])
    pos, node = g.parse_partial('ab cd 12')
    assert node.text == 'ab cd '
    assert pos.offset == 6
    assert [x.text for x in node.find('word')] == ['ab', 'cd']


def test_repeat_limit():
    g = Grammar([Rule('xs', Rep('x'))], repeat_limit=2)
    with pytest.raises(ParseError) as info:
        g.parse('xxx')
    assert info.value.failures == [NestedRuleFailure('xs', RepeatLimitExceeded(2))]

    assert g.parse('xxx', repeat_limit=3).text == 'xxx'


def test_failures_are_logged(caplog):
    g = Grammar([Rule('a', 'a')], name='tiny')
    with caplog.at_level(logging.DEBUG, logger='pegmatch.grammar'):
        with pytest.raises(ParseError):
            g.parse('b')
    assert 'tiny: a failed at line 1, column 1' in [r.getMessage() for r in caplog.records]


def test_end_of_input_is_required():
    g = Grammar([Rule('a', 'a')])
    with pytest.raises(ParseError) as info:
        g.parse('ab')
    assert info.value.offset == 1
    assert info.value.expected == ['EOI']
    assert info.value.rules == []


def test_independent_parses_do_not_share_state():
    g = Grammar([
        CompoundAtomic('quoted', [Push(Choice('"', "'")), Rep([Negative(PEEK), ANY]), POP]),
    ])
    assert g.parse('"it\'s"').text == '"it\'s"'
    assert g.parse("'say \"hi\"'").text == "'say \"hi\"'"
    with pytest.raises(ParseError):
        g.parse('"oops\'')
    assert g.parse("''").text == "''"
