"""
The concrete syntax tree produced by a successful match.

Every node carries the `span` of input that it covers. Nodes never copy the
input; `node.text` slices it on demand.
"""

from collections import namedtuple


class Node:
    __slots__ = ()

    @property
    def text(self):
        return self.span.text

    def children(self):
        return ()


class Terminal(Node, namedtuple('Terminal', 'kind, span, value')):
    """
    The result of a terminal matcher.

    `kind` names the matcher ('literal', 'insens', 'char', 'any', 'soi',
    'eoi', 'newline', 'skip', 'empty', 'peek', 'pop', ...). `value` holds the
    matched character for 'char' and 'any', the line ending kind for
    'newline', and the matched text otherwise.
    """
    __slots__ = ()


class SeqNode(Node, namedtuple('SeqNode', 'span, items')):
    __slots__ = ()

    def children(self):
        return self.items


class ChoiceNode(Node, namedtuple('ChoiceNode', 'span, index, node')):
    __slots__ = ()

    @property
    def is_first(self):
        return self.index == 0

    @property
    def is_second(self):
        return self.index == 1

    def children(self):
        return (self.node,)


class OptNode(Node, namedtuple('OptNode', 'span, node')):
    __slots__ = ()

    @property
    def is_present(self):
        return self.node is not None

    def children(self):
        return () if self.node is None else (self.node,)


class RepNode(Node, namedtuple('RepNode', 'span, items')):
    __slots__ = ()

    def children(self):
        return self.items


class PredicateNode(Node, namedtuple('PredicateNode', 'span, positive, node')):
    """A zero-width lookahead. A positive lookahead keeps the peeked node."""
    __slots__ = ()

    def children(self):
        return () if self.node is None else (self.node,)


class PushNode(Node, namedtuple('PushNode', 'span, node')):
    __slots__ = ()

    def children(self):
        return (self.node,)


class RuleNode(Node, namedtuple('RuleNode', 'rule, span, node')):
    """The match of a named rule. Atomic rules keep only their span."""
    __slots__ = ()

    def children(self):
        return () if self.node is None else (self.node,)

    def find(self, rule):
        return [x for x in visit(self) if isinstance(x, RuleNode) and x.rule == rule]


def visit(node):
    """Yields `node` and then each of its descendants, depth-first."""
    stack = [node]
    while stack:
        top = stack.pop()
        yield top
        stack.extend(reversed(top.children()))
