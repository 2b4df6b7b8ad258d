from pegmatch import *


# A heredoc starts with "<<TAG" and ends with a line that holds only TAG.
# The tag is pushed onto the stack, so that the body can recognize it.
grammar = Grammar([
    Rule('document', Rep(Ref('heredoc'))),

    CompoundAtomic('heredoc', [
        '<<', Push(Ref('tag')), NEWLINE,
        Ref('body'),
        POP,
    ]),

    Atomic('tag', RepOnce(Choice(ASCII_ALPHA_UPPER, '_'))),

    Atomic('body', Rep([
        Negative([PEEK, Choice(NEWLINE, EOI)]),
        Ref('line'),
    ])),

    Silent('line', [Rep([Negative(NEWLINE), ANY]), NEWLINE]),

    Silent('WHITESPACE', Choice(' ', '\t', NEWLINE)),
])


def heredocs(text):
    """Returns a list of (tag, body) pairs."""
    tree = grammar.parse(text)
    return [
        (doc.find('tag')[0].text, doc.find('body')[0].text)
        for doc in tree.find('heredoc')
    ]
