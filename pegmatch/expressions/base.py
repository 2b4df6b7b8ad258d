from collections import namedtuple
import types


# A request, yielded by a matcher, to evaluate a sub-expression.
Step = namedtuple('Step', 'expr, pos, atomic')

# The result of a successful match. A failed match yields None instead.
Success = namedtuple('Success', 'pos, node')


class Expr:
    """
    Base class for parsing expressions.

    This class adds support for a couple of parsing operators::

        Operator  Verbose Form    Description
        ========  ==============  ===============
        a | b     Choice(a, b)    ordered choice
        ~a        Opt(a)          optional value
        ========  ==============  ===============

    Subclasses implement ``_parse(state, pos, atomic)`` as a generator. It
    yields a `Step` for each sub-expression that it wants to evaluate, and
    receives that sub-expression's result in return. The last value that it
    yields is its own result: a `Success` or None.
    """

    def __or__(self, other):
        from .structural import Choice
        return Choice(self, other)

    def __ror__(self, other):
        from .structural import Choice
        return Choice(other, self)

    def __invert__(self):
        from .structural import Opt
        return Opt(self)

    def __str__(self):
        return self.__class__.__name__

    def __repr__(self):
        return str(self)

    def _operand_string(self):
        return str(self)

    def _parse(self, state, pos, atomic):
        raise NotImplementedError('_parse')

    def parse(self, text, **config):
        from ..engine import parse
        return parse(self, text, **config)

    def parse_partial(self, text, **config):
        from ..engine import parse_partial
        return parse_partial(self, text, **config)


def conv(obj):
    """Converts a Python object to a parsing expression."""
    if isinstance(obj, Expr):
        return obj

    if isinstance(obj, str):
        from .terminals import Literal
        return Literal(obj)

    if isinstance(obj, (list, tuple)):
        from .structural import Seq
        return Seq(*obj)

    if isinstance(obj, types.LambdaType):
        if not hasattr(obj, '_parsing_expression'):
            from .rules import Lazy
            obj._parsing_expression = Lazy(obj)
        return obj._parsing_expression

    raise TypeError(f'Cannot convert {obj!r} to a parsing expression.')

