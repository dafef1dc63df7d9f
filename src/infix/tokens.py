from collections import namedtuple


NUMBER = 'number'
OPERATOR = 'operator'
LPAREN = 'lparen'
RPAREN = 'rparen'
# Neither number, operator nor bracket. Only the converter gets to reject it.
UNKNOWN = 'unknown'


class Token(namedtuple('Token', 'kind text')):
    '''
    Lexical unit of an infix expression.

    Numbers keep their source text; conversion to float is the machine's
    job.
    '''
    __slots__ = ()

    def __str__(self):
        return self.text


def number(text):
    return Token(NUMBER, text)


def operator(symbol):
    return Token(OPERATOR, symbol)
