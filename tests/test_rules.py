import logging

import pytest
from pegmatch import *


def _grammar(*rules):
    return Grammar(list(rules) + [Rule('WHITESPACE', CharRange(' ', ' '))])


def test_atomic_rules_do_not_skip_whitespace():
    g = _grammar(
        Rule('loose', ['a', 'b']),
        Atomic('tight', ['a', 'b']),
    )
    assert g.parse('a b', 'loose').text == 'a b'

    with pytest.raises(ParseError) as info:
        g.parse('a b', 'tight')
    assert info.value.offset == 1
    assert info.value.expected == ['"b"']
    assert info.value.rules == ['tight']


def test_atomicity_reaches_nested_rules():
    g = _grammar(
        Atomic('outer', [Ref('inner'), 'c']),
        Rule('inner', ['a', 'b']),
    )
    assert g.parse('abc').text == 'abc'
    with pytest.raises(ParseError):
        g.parse('a bc')


def test_non_atomic_rules_skip_inside_atomic_ones():
    g = _grammar(
        Atomic('outer', ['<', Ref('inner'), '>']),
        NonAtomic('inner', ['a', 'b']),
    )
    assert g.parse('<a b>').text == '<a b>'

    # Only inside of the non-atomic rule.
    with pytest.raises(ParseError) as info:
        g.parse('< ab>')
    assert info.value.offset == 1


def test_atomic_rule_keeps_only_its_span():
    g = Grammar([
        Atomic('word', RepOnce(ASCII_ALPHA)),
        CompoundAtomic('pair', [Ref('word'), '=', Ref('word')]),
    ])
    node = g.parse('key')
    assert node == RuleNode('word', node.span, None)
    assert node.text == 'key'

    node = g.parse('key=value', 'pair')
    assert [x.text for x in node.find('word')] == ['key', 'value']


def test_silent_rules_have_no_node_of_their_own():
    g = Grammar([
        Rule('list', [Ref('item'), Rep([',', Ref('item')])]),
        Silent('item', Ref('digit')),
        Atomic('digit', ASCII_DIGIT),
    ])
    node = g.parse('1,2,3')
    assert [x.rule for x in visit(node) if isinstance(x, RuleNode)] == [
        'list', 'digit', 'digit', 'digit',
    ]


def test_silent_rules_are_not_reported():
    g = Grammar([
        Rule('list', Rep(Ref('item'), min=1)),
        Silent('item', Ref('digit')),
        Rule('digit', ASCII_DIGIT),
    ])
    with pytest.raises(ParseError) as info:
        g.parse('x')
    failure = info.value.failures[0]
    assert failure.rule_chain() == ['list', 'digit']


def test_rule_chain():
    g = Grammar([
        Rule('call', [Ref('name'), '(', Ref('args'), ')']),
        Rule('args', Opt([Ref('name'), Rep([',', Ref('name')])])),
        Atomic('name', RepOnce(ASCII_ALPHA_LOWER)),
    ])
    with pytest.raises(ParseError) as info:
        g.parse('f(x,)')
    error = info.value
    assert error.offset == 4
    assert error.rules == ['name']
    assert [f.rule_chain() for f in error.failures] == [['call', 'args', 'name']]


def test_atomic_root_does_not_skip_trailing_whitespace():
    g = _grammar(Atomic('word', RepOnce(ASCII_ALPHA)), Rule('words', RepOnce(Ref('word'))))
    with pytest.raises(ParseError) as info:
        g.parse('abc ')
    assert info.value.offset == 3
    pos, node = g.parse_partial('abc ', 'words')
    assert (pos.offset, node.text) == (4, 'abc ')
    assert g.parse('abc ', 'words').find('word')[0].text == 'abc'


def test_comments_and_whitespace():
    g = Grammar([
        Rule('list', ['[', Rep(ASCII_DIGIT), ']']),
        Silent('WHITESPACE', Choice(' ', NEWLINE)),
        Silent('COMMENT', ['#', Rep([Negative(NEWLINE), ANY])]),
    ])
    node = g.parse('[ 1 # one\n 2 # two\n ]\n')
    assert [x.text for x in node.node.items[1].items] == ['1', '2']


def test_whitespace_failures_are_not_reported():
    g = _grammar(Rule('pair', ['a', 'b']))
    with pytest.raises(ParseError) as info:
        g.parse('a  c')
    assert info.value.offset == 3
    assert info.value.expected == ['"b"']


def test_rule_kind_must_be_known():
    with pytest.raises(ValueError):
        Rule('x', 'x', kind='sticky')


def test_unbound_rules_parse_by_themselves():
    rule = Rule('greeting', Insens('hi'))
    node = rule.parse('HI')
    assert node.rule == 'greeting'
    pos, node = rule.parse_partial('Hi there')
    assert pos.offset == 2


def test_undefined_rule_reference():
    with pytest.raises(KeyError):
        parse(Ref('missing'), 'x')


def test_lazy_expressions():
    digit = Lazy(lambda: ASCII_DIGIT)
    assert str(digit) == 'Lazy'
    assert parse(digit, '7').text == '7'
    assert str(digit) == "'0'..'9'"


def test_rules_log_at_debug_level(caplog):
    g = Grammar([Rule('word', RepOnce(ASCII_ALPHA))])
    with caplog.at_level(logging.DEBUG, logger='pegmatch'):
        g.parse('ok')
    messages = [r.getMessage() for r in caplog.records]
    assert 'word ... (at index 0)' in messages
    assert 'word matched 0..2' in messages


def test_rule_string():
    assert str(Rule('expr', 'x')) == 'expr'
    assert str(Ref('expr')) == 'expr'
    assert str(Seq('a', Choice('b', 'c'))) == '"a" ~ ("b" | "c")'
    assert str(Rep(Opt('a'))) == '"a"?*'
    assert str(Positive(Ref('x'))) == '&x'
    assert str(Negative(Seq('a', 'b'))) == '!("a" ~ "b")'
