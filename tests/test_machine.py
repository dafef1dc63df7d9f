'''
Postfix machine tests
'''

import math

from infix.machine import Machine
from infix.tokens import Token, UNKNOWN, number, operator
from infix.util import ErrorKind, EvalError

from pytest import raises


def run(*program):
    return Machine().run([operator(item) if item in Machine.BUILTINS
                          else number(item)
                          for item in program])


def kind(*program):
    with raises(EvalError) as e:
        run(*program)
    return e.value.kind


def test_operand_order():
    assert run('2', '3', '-') == -1
    assert run('9', '2', '^') == 81
    assert run('1', '4', '/') == 0.25


def test_floor_division():
    assert run('7', '2', '//') == 3
    assert run('-7', '2', '//') == -4
    assert run('7', '-2', '//') == -4


def test_division_by_zero():
    assert kind('5', '0', '/') is ErrorKind.DIVISION_BY_ZERO
    assert kind('5', '0', '//') is ErrorKind.DIVISION_BY_ZERO
    assert kind('5', '0.0', '/') is ErrorKind.DIVISION_BY_ZERO


def test_remainder_takes_sign_of_dividend():
    assert run('10', '3', '%') == 1
    assert run('-7', '2', '%') == -1
    assert run('7', '-2', '%') == 1
    assert math.isnan(run('5', '0', '%'))


def test_power_never_raises():
    assert run('0', '-1', '^') == math.inf
    assert run('10', '400', '^') == math.inf
    assert run('-10', '401', '^') == -math.inf
    assert math.isnan(run('-8', '0.5', '^'))


def test_insufficient_operands():
    assert kind('1', '+') is ErrorKind.INSUFFICIENT_OPERANDS
    assert kind('*') is ErrorKind.INSUFFICIENT_OPERANDS


def test_malformed():
    assert kind() is ErrorKind.MALFORMED_EXPRESSION
    assert kind('1', '2') is ErrorKind.MALFORMED_EXPRESSION


def test_unparsable():
    with raises(EvalError) as e:
        Machine().run([Token(UNKNOWN, 'x')])
    assert e.value.kind is ErrorKind.UNPARSABLE_TOKEN


def test_thousands_separators():
    assert run('1_000', '1', '+') == 1001


def test_reusable():
    machine = Machine()
    assert machine.run([number('1'), number('2'), operator('+')]) == 3
    assert machine.run([number('5')]) == 5


def test_unconvertible_number():
    with raises(EvalError, match="Couldn't convert '1.2.3'") as e:
        Machine().run([number('1.2.3')])
    assert e.value.kind is ErrorKind.UNPARSABLE_TOKEN
    assert isinstance(e.value.__cause__, ValueError)
