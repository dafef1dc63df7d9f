from collections import deque
from types import MappingProxyType
import logging
import operator
import math

from .tokens import NUMBER, OPERATOR
from .util import ErrorKind, EvalError, wrap_user_errors


logger = logging.getLogger(__name__)


def _isodd(n):
    return n.is_integer() and n % 2 == 1


def _divide(left, right):
    if right == 0:
        raise EvalError(ErrorKind.DIVISION_BY_ZERO,
                        'Division of {!r} by zero'.format(left))
    return left / right


def _floordivide(left, right):
    '''
    Floor of the true quotient, towards negative infinity.
    '''
    quotient = _divide(left, right)
    if not math.isfinite(quotient):
        return quotient
    return float(math.floor(quotient))


def _remainder(left, right):
    '''
    Remainder with the sign of the dividend, as in C's fmod.

    NaN instead of an error for a zero divisor or an infinite dividend.
    '''
    if right == 0 or math.isinf(left):
        return math.nan
    return math.fmod(left, right)


def _power(left, right):
    '''
    IEEE flavoured power: overflow and poles go to infinity, complex
    results to NaN. Never raises.
    '''
    try:
        return math.pow(left, right)
    except OverflowError:
        return math.copysign(math.inf, left) if _isodd(right) else math.inf
    except ValueError:
        # Zero to a negative power
        if left == 0:
            return math.copysign(math.inf, left) if _isodd(right) else math.inf
        # Negative base to a fractional power
        return math.nan


class Machine:
    '''
    Arithmetic stack machine for postfix (RPN) programs.

    Holds a value stack that is reset on each run, so one machine must not
    be shared between threads. The operator tables are read-only and
    shared.
    '''

    # Binding strength of infix operators. Higher binds tighter.
    PRECEDENCE = MappingProxyType({
        '+': 1,
        '-': 1,
        '*': 2,
        '/': 2,
        '%': 2,
        '//': 2,
        '^': 3,
    })

    # Arithmetic on the two topmost values, left operand first.
    BUILTINS = MappingProxyType({
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '/': _divide,
        '%': _remainder,
        '//': _floordivide,
        '^': _power,
    })

    assert PRECEDENCE.keys() == BUILTINS.keys()

    def __init__(self):
        self.stack = deque()

    def run(self, postfix):
        '''
        Run a postfix program to completion and return its single value.

        :param postfix: Tokens in postfix order, as from to_postfix().
        '''
        self.stack.clear()
        for token in postfix:
            self.feed(token)
        if len(self.stack) != 1:
            raise EvalError(ErrorKind.MALFORMED_EXPRESSION,
                            '{} value(s) left on stack, expected 1'
                            .format(len(self.stack)))
        result = self.stack.pop()
        logger.debug('%s -> %r', ' '.join(map(str, postfix)), result)
        return result

    def feed(self, token):
        '''
        Stack a number or apply an operator.
        '''
        if token.kind == NUMBER:
            self._pshstack(self._iconvert(token.text))
        elif token.kind == OPERATOR and token.text in type(self).BUILTINS:
            self._apply(token.text)
        else:
            raise EvalError(ErrorKind.UNPARSABLE_TOKEN,
                            "Couldn't evaluate {!r}".format(token.text))

    def _apply(self, symbol):
        # Right operand was pushed last
        right, left = self._popstack(2, symbol)
        self._pshstack(type(self).BUILTINS[symbol](left, right))

    @wrap_user_errors(ErrorKind.UNPARSABLE_TOKEN, "Couldn't convert {1!r}")
    def _iconvert(self, number):
        '''
        Convert number text to a float, ignoring thousands separators.
        '''
        return float(number.replace('_', ''))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n, symbol):
        '''
        Pop specified number of values from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise EvalError(ErrorKind.INSUFFICIENT_OPERANDS,
                            'Less than {} operand(s) for {!r}'
                            .format(n, symbol))
        return [self.stack.pop() for _ in range(n)]
