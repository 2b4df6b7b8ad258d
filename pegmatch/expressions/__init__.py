from .base import Expr, Step, Success, conv
from .rules import (
    ATOMIC, COMPOUND_ATOMIC, IGNORED, NON_ATOMIC, NORMAL, SILENT,
    Atomic, CompoundAtomic, Ignored, Lazy, NonAtomic, Ref, Rule, Silent,
)
from .stack_ops import (
    DROP, PEEK, PEEK_ALL, POP, POP_ALL,
    Drop, Peek, PeekAll, PeekSlice, Pop, PopAll, Push,
)
from .structural import (
    Choice, Negative, Opt, Positive, Rep, RepOnce, Restorable, Seq,
)
from .terminals import (
    ALWAYS_FAIL, ANY, ASCII, ASCII_ALPHA, ASCII_ALPHA_LOWER, ASCII_ALPHA_UPPER,
    ASCII_ALPHANUMERIC, ASCII_BIN_DIGIT, ASCII_DIGIT, ASCII_HEX_DIGIT,
    ASCII_NONZERO_DIGIT, ASCII_OCT_DIGIT, EMPTY, EOI, NEWLINE, SOI,
    AlwaysFail, AnyChar, CharRange, Empty, EndOfInput, Insens, Literal,
    Newline, Skip, SkipChar, StartOfInput,
)
