from enum import Enum
from functools import wraps


class ErrorKind(Enum):
    UNBALANCED_PARENTHESES = 'UnbalancedParentheses'
    INSUFFICIENT_OPERANDS = 'InsufficientOperands'
    MALFORMED_EXPRESSION = 'MalformedExpression'
    DIVISION_BY_ZERO = 'DivisionByZero'
    UNPARSABLE_TOKEN = 'UnparsableToken'

    def __str__(self):
        return self.value


class EvalError(Exception):
    '''
    Expression could not be evaluated.

    Always carries the kind of failure, so callers can tell a typo from a
    division by zero without parsing the message.
    '''

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self):
        return '{}: {}'.format(self.kind, self.message)


def wrap_user_errors(kind, fmt):
    '''
    Decorator that converts stray arithmetic and conversion exceptions into
    EvalErrors of the given kind.

    Passes through EvalErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except EvalError:
                raise
            except (ValueError, ArithmeticError) as e:
                raise EvalError(kind, fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
