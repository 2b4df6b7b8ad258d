import pytest
from pegmatch import *


def test_literal():
    node = parse('hello', 'hello')
    assert node == Terminal('literal', node.span, 'hello')
    assert node.text == 'hello'

    with pytest.raises(ParseError) as info:
        parse('hello', 'help')
    assert info.value.offset == 3
    assert info.value.expected == ['"hello"']


def test_literal_requires_a_string():
    with pytest.raises(TypeError):
        Literal(5)


def test_insens_keeps_the_actual_text():
    node = parse(Insens('select'), 'SeLeCT')
    assert node.value == 'SeLeCT'

    with pytest.raises(ParseError) as info:
        parse(Insens('select'), 'SELEKT')
    assert info.value.offset == 4
    assert info.value.expected == ['^"select"']


def test_char_range():
    assert parse(CharRange('a', 'z'), 'q').value == 'q'

    with pytest.raises(ParseError) as info:
        parse(CharRange('a', 'z'), 'Q')
    assert info.value.expected == ["'a'..'z'"]


def test_char_range_bounds():
    with pytest.raises(ValueError):
        CharRange('z', 'a')
    with pytest.raises(ValueError):
        CharRange('ab', 'z')


def test_any():
    assert parse(ANY, 'é').value == 'é'

    with pytest.raises(ParseError) as info:
        parse(ANY, '')
    assert info.value.expected == ['ANY']


def test_start_and_end_of_input():
    node = parse([SOI, 'a', EOI], 'a')
    assert [x.kind for x in node.items] == ['soi', 'literal', 'eoi']

    with pytest.raises(ParseError) as info:
        parse(['a', SOI], 'a')
    assert info.value.expected == ['SOI']

    pos, _ = parse_partial(['a', EOI], 'a')
    assert pos.at_end()

    with pytest.raises(ParseError) as info:
        parse_partial(['a', EOI], 'ab')
    assert info.value.offset == 1
    assert info.value.expected == ['EOI']


def test_newline_matches_crlf_first():
    node = parse(Rep(NEWLINE), '\r\n\n\r')
    assert [x.value for x in node.items] == ['CRLF', 'LF', 'CR']
    assert [x.text for x in node.items] == ['\r\n', '\n', '\r']

    with pytest.raises(ParseError) as info:
        parse(NEWLINE, 'x')
    assert info.value.expected == ['NEWLINE']


def test_skip_stops_before_the_delimiter():
    node = parse([Skip('*/', '--'), '--'], 'some text--')
    assert node.items[0].text == 'some text'
    assert node.items[0].kind == 'skip'

    # The delimiter may be next already.
    pos, node = parse_partial(Skip(';'), ';')
    assert pos.offset == 0
    assert node.text == ''


def test_skip_fails_at_the_end_of_input():
    with pytest.raises(ParseError) as info:
        parse(Skip('*/'), 'no end in sight')
    assert info.value.offset == len('no end in sight')
    assert info.value.expected == ['"*/"']


def test_skip_char():
    pos, node = parse_partial(SkipChar(3), 'abcdef')
    assert pos.offset == 3
    assert node.text == 'abc'

    with pytest.raises(ParseError) as info:
        parse(SkipChar(3), 'ab')
    assert info.value.expected == ['SkipChar(3)']


def test_always_fail_and_empty():
    with pytest.raises(ParseError) as info:
        parse(ALWAYS_FAIL, '')
    assert info.value.failures == []

    assert parse(EMPTY, '').text == ''
    pos, _ = parse_partial(EMPTY, 'abc')
    assert pos.offset == 0


def test_ascii_builtins():
    digits = parse(RepOnce(ASCII_DIGIT), '0123456789')
    assert len(digits.items) == 10

    assert parse(RepOnce(ASCII_HEX_DIGIT), 'c0FFee').text == 'c0FFee'
    assert parse(RepOnce(ASCII_ALPHANUMERIC), 'abcXYZ019').text == 'abcXYZ019'
    assert parse(RepOnce(ASCII_BIN_DIGIT), '0110').text == '0110'
    assert parse(RepOnce(ASCII_OCT_DIGIT), '0717').text == '0717'
    assert parse(ASCII, '\x7f').text == '\x7f'

    with pytest.raises(ParseError):
        parse(ASCII_NONZERO_DIGIT, '0')
    with pytest.raises(ParseError):
        parse(ASCII_OCT_DIGIT, '8')
    with pytest.raises(ParseError):
        parse(ASCII_ALPHA_LOWER, 'A')
    with pytest.raises(ParseError):
        parse(ASCII_ALPHA_UPPER, 'a')
    with pytest.raises(ParseError):
        parse(ASCII, 'é')
