'''
Infix to postfix conversion (shunting-yard).
'''

from collections import deque
import logging

from .tokens import NUMBER, OPERATOR, LPAREN, RPAREN
from .machine import Machine
from .util import ErrorKind, EvalError


logger = logging.getLogger(__name__)


def _unbalanced(what):
    return EvalError(ErrorKind.UNBALANCED_PARENTHESES, what)


def _outranks(top, token):
    '''
    Return True if top of operator stack must be emitted before token.

    Equal precedence pops too: all operators, ^ included, associate left.
    '''
    return (top.kind == OPERATOR and
            Machine.PRECEDENCE[top.text] >= Machine.PRECEDENCE[token.text])


def to_postfix(tokens):
    '''
    Reorder infix tokens into postfix (RPN) order.

    Brackets are consumed; the output only holds numbers and operators. The
    output is well bracketed, but may still lack operands.

    :param tokens: Tokens as from Lexer.tokenize().
    '''
    output = []
    stack = deque()
    for token in tokens:
        if token.kind == NUMBER:
            output.append(token)
        elif token.kind == LPAREN:
            stack.append(token)
        elif token.kind == RPAREN:
            while stack and stack[-1].kind != LPAREN:
                output.append(stack.pop())
            if not stack:
                raise _unbalanced("')' without matching '('")
            stack.pop()
        elif token.kind == OPERATOR and token.text in Machine.PRECEDENCE:
            while stack and _outranks(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)
        else:
            raise EvalError(ErrorKind.UNPARSABLE_TOKEN,
                            "Neither a number nor an operator: {!r}"
                            .format(token.text))
    while stack:
        token = stack.pop()
        if token.kind == LPAREN:
            raise _unbalanced("'(' never closed")
        output.append(token)
    logger.debug('postfix: %s', ' '.join(map(str, output)))
    return output
