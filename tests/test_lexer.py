'''
Infix lexer tests
'''

from infix.lexer import Lexer
from infix.tokens import Token, NUMBER, OPERATOR, LPAREN, RPAREN, UNKNOWN


def texts(tokens):
    return [token.text for token in tokens]


def test_split_on_operators():
    l = Lexer()
    assert l.split('2 + 3*4') == ['2', '+', '3', '*', '4']
    assert l.split('(1+2)%3') == ['(', '1', '+', '2', ')', '%', '3']


def test_floor_division_is_one_piece():
    l = Lexer()
    assert l.split('7//2') == ['7', '//', '2']
    assert l.split('7 / / 2') == ['7', '/', '/', '2']


def test_aliases():
    l = Lexer()
    assert l.split('2**3') == ['2', '^', '3']
    assert l.split('1,5 + 2') == ['1.5', '+', '2']


def test_empty():
    l = Lexer()
    assert l.split('') == []
    assert l.tokenize('   ') == []


def test_kinds():
    l = Lexer()
    assert [t.kind for t in l.tokenize('(1 // 2.5)')] == \
        [LPAREN, NUMBER, OPERATOR, NUMBER, RPAREN]


def test_numbers():
    l = Lexer()
    for number in '12', '1_000', '1_000.25', '.5', '5.', '1e5', '0.200_200':
        assert l.tokenize(number) == [Token(NUMBER, number)], number


def test_unknown_passes_through():
    l = Lexer()
    assert l.tokenize('1 2') == [Token(UNKNOWN, '1 2')]
    assert l.tokenize('sin(1)') == [Token(UNKNOWN, 'sin'),
                                    Token(LPAREN, '('),
                                    Token(NUMBER, '1'),
                                    Token(RPAREN, ')')]
    # Underscores must group by three
    assert l.tokenize('1_2') == [Token(UNKNOWN, '1_2')]


def test_leading_minus_folds_into_number():
    l = Lexer()
    assert texts(l.tokenize('-5+3')) == ['-5', '+', '3']
    assert texts(l.tokenize('-7//2')) == ['-7', '//', '2']
    assert l.tokenize('-5')[0].kind == NUMBER


def test_minus_after_bracket_or_operator():
    l = Lexer()
    assert texts(l.tokenize('2*(-5)')) == ['2', '*', '(', '-5', ')']
    assert texts(l.tokenize('5--3')) == ['5', '-', '-3']
    assert texts(l.tokenize('2^-1')) == ['2', '^', '-1']


def test_binary_minus_stays():
    l = Lexer()
    assert texts(l.tokenize('5-3')) == ['5', '-', '3']
    assert texts(l.tokenize('(1)-3')) == ['(', '1', ')', '-', '3']


def test_minus_before_bracket():
    l = Lexer()
    assert texts(l.tokenize('-(1+2)')) == \
        ['(', '-1', '*', '(', '1', '+', '2', ')', ')']
    for op in '/', '//', '^', '%':
        assert texts(l.tokenize('8' + op + '-(2)')) == \
            ['8', op, '(', '-1', '*', '(', '2', ')', ')']


def test_minus_before_nested_brackets():
    l = Lexer()
    assert texts(l.tokenize('-(-(1))')) == \
        ['(', '-1', '*', '(', '(', '-1', '*', '(', '1', ')', ')', ')', ')']
    assert texts(l.tokenize('-((1)+2)*3')) == \
        ['(', '-1', '*', '(', '(', '1', ')', '+', '2', ')', ')', '*', '3']


def test_minus_before_unclosed_bracket():
    l = Lexer()
    assert texts(l.tokenize('-(1+2')) == ['(', '-1', '*', '(', '1', '+', '2']


def test_leading_plus_dropped():
    l = Lexer()
    assert texts(l.tokenize('+5')) == ['5']
    assert texts(l.tokenize('2*(+5)')) == ['2', '*', '(', '5', ')']


def test_double_sign_left_alone():
    l = Lexer()
    tokens = l.tokenize('--5')
    assert tokens == [Token(OPERATOR, '-'), Token(NUMBER, '-5')]
