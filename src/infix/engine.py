'''
One-call evaluation of infix expressions.
'''

from collections import namedtuple

from .converter import to_postfix
from .formatter import format_result
from .lexer import Lexer
from .machine import Machine
from .util import EvalError


class Result(namedtuple('Result', 'value error')):
    '''
    Outcome of evaluate(): either a formatted value or an EvalError.
    '''
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None

    def __str__(self):
        return self.value if self.ok else str(self.error)


def calculate(expression):
    '''
    Evaluate expression to a float.

    Raises EvalError from whichever stage first notices a problem.
    '''
    tokens = Lexer().tokenize(expression)
    return Machine().run(to_postfix(tokens))


def evaluate(expression):
    '''
    Evaluate expression and format its result.

    Never raises for bad input; the error is returned in the Result instead.
    Holds no state between calls, so is safe to call from any thread.
    '''
    try:
        return Result(format_result(calculate(expression)), None)
    except EvalError as e:
        return Result(None, e)
