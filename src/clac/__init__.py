'''
RPN calculator core.

A stack of numbers addressed from the top, a linear undo/redo history of that
stack, and a library of operations applied to it. Every operation is a
transaction: it either applies completely and can be undone, or fails and
leaves the stack as it was.

The core does no I/O; clac.cli is a thin command line front end over it.
'''

from .util import (ClacError, TooFewArguments, InvalidArgument, OutOfRange,
                   NoMoreChanges, EvaluationError)
from .numeric import NumericEngine
from .stack import Stack
from .history import History
from .engine import Engine, Outcome
from .ops import Clac, VARIADIC


__all__ = ('Clac', 'Engine', 'Outcome', 'Stack', 'History', 'NumericEngine',
           'VARIADIC', 'ClacError', 'TooFewArguments', 'InvalidArgument',
           'OutOfRange', 'NoMoreChanges', 'EvaluationError')
