'''
Infix calculator.

Type arithmetic the way you'd write it on paper, get a number back. Supports
+ - * / // % and ^ (or **), with the usual precedence and brackets. Not
intended to be a programming language: no variables, no functions.

Under the hood, it's still a stack machine: expressions are lexed, reordered
into postfix (RPN) with the shunting-yard algorithm, and run.

Every successful calculation is appended to a plain text history, one
"expression = result" per line, that can be exported whole or in part.
'''

# TODO: Right associative ^, once old history files no longer matter.

from .cli import CLI
from .engine import Result, calculate, evaluate
from .history import History, CalculationEntry
from .lexer import Lexer
from .machine import Machine
from .util import ErrorKind, EvalError


__all__ = ('evaluate', 'calculate', 'Result', 'ErrorKind', 'EvalError',
           'Machine', 'Lexer', 'History', 'CalculationEntry', 'CLI')
