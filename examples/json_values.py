from pegmatch import *


grammar = Grammar([
    Rule('document', [SOI, Ref('value')]),

    Rule('value', Choice(
        Ref('object'),
        Ref('array'),
        Ref('string'),
        Ref('number'),
        Ref('true'),
        Ref('false'),
        Ref('null'),
    )),

    Rule('object', ['{', Opt(Ref('members')), '}']),
    Silent('members', [Ref('pair'), Rep([',', Ref('pair')])]),
    Rule('pair', [Ref('string'), ':', Ref('value')]),

    Rule('array', ['[', Opt(Ref('elements')), ']']),
    Silent('elements', [Ref('value'), Rep([',', Ref('value')])]),

    Atomic('string', ['"', Rep(Ref('char')), '"']),
    Silent('char', Choice(
        ['\\', Choice('"', '\\', '/', 'b', 'f', 'n', 'r', 't')],
        ['\\u', ASCII_HEX_DIGIT, ASCII_HEX_DIGIT, ASCII_HEX_DIGIT, ASCII_HEX_DIGIT],
        [Negative(Choice('"', '\\', CharRange('\x00', '\x1f'))), ANY],
    )),

    Atomic('number', [
        Opt('-'),
        Choice('0', [ASCII_NONZERO_DIGIT, Rep(ASCII_DIGIT)]),
        Opt(['.', RepOnce(ASCII_DIGIT)]),
        Opt([Insens('e'), Opt(Choice('+', '-')), RepOnce(ASCII_DIGIT)]),
    ]),

    Rule('true', 'true'),
    Rule('false', 'false'),
    Rule('null', 'null'),

    Silent('WHITESPACE', Choice(' ', '\t', '\r', '\n')),
])


def loads(text):
    return to_python(grammar.parse(text))


def to_python(node):
    if isinstance(node, ChoiceNode):
        return to_python(node.node)

    if not isinstance(node, RuleNode):
        raise TypeError(f'Unexpected node: {node!r}')

    if node.rule == 'document':
        return to_python(next(_rules_within(node, 'value')))

    if node.rule == 'object':
        return {
            _unescape(key.text): to_python(value)
            for key, value in (_rules_within(x, 'string', 'value')
                for x in _rules_within(node, 'pair'))
        }

    if node.rule == 'array':
        return [to_python(x) for x in _rules_within(node, 'value')]

    if node.rule == 'string':
        return _unescape(node.text)

    if node.rule == 'number':
        text = node.text
        return float(text) if any(c in text for c in '.eE') else int(text)

    constants = {'true': True, 'false': False, 'null': None}
    if node.rule in constants:
        return constants[node.rule]

    return to_python(node.node)


def _rules_within(node, *names):
    """Yields the nearest rule nodes below `node` that have one of `names`."""
    stack = list(reversed(node.children()))
    while stack:
        top = stack.pop()
        if isinstance(top, RuleNode) and top.rule in names:
            yield top
        else:
            stack.extend(reversed(top.children()))


_simple_escapes = {
    '"': '"', '\\': '\\', '/': '/',
    'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r', 't': '\t',
}


def _unescape(quoted):
    body = quoted[1:-1]
    result = []
    i = 0
    while i < len(body):
        c = body[i]
        if c != '\\':
            result.append(c)
            i += 1
        elif body[i + 1] == 'u':
            result.append(chr(int(body[i + 2:i + 6], 16)))
            i += 6
        else:
            result.append(_simple_escapes[body[i + 1]])
            i += 2
    return ''.join(result)
