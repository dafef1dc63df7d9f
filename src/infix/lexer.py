from functools import reduce
import operator

import regex

from . import tokens
from .tokens import Token, NUMBER, OPERATOR, LPAREN, RPAREN, UNKNOWN
from .machine import Machine


class Lexer:
    '''
    Lexer for infix arithmetic.

    Total over its input: never fails, anything it can't make sense of is
    passed on as an unknown token for the converter to reject. For
    consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Support not just digits, but thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      |
                      (?:
                          \d{3}
                          (?:
                              _\d{3}
                          )*
                          (?:
                              _\d{1,2}
                          )?
                      )
                  )
                  '''
    # Only unsigned exponents survive the split on operators: 1e5, not 1e-5.
    EXPONENT = r'''
                (?:
                    [eE]
                    \d+
                )
                '''
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2, 0.2, 0.200_200
                      {INTEGRAL}?
                      \.
                      {FRACTIONAL}
                  )
              )
              {EXPONENT}?
              '''.format(INTEGRAL=INTEGRAL,
                         FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)

    # Longest first, so // is never read as two /.
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      sorted(Machine.PRECEDENCE,
                                             key=len,
                                             reverse=True))) + r')'
    BRACKET = r'[()]'
    # Every operator and bracket is a piece of its own, and so is whatever
    # lies between them.
    SPLIT = r'(' + OPERATOR + r'|' + BRACKET + r')'

    # Alternate spellings, replaced before splitting.
    ALIASES = (
        ('**', '^'),
        (',', '.'),
    )

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def normalize(self, raw):
        '''
        Replace alternate operator and decimal separator spellings.
        '''
        for alias, canonical in type(self).ALIASES:
            raw = raw.replace(alias, canonical)
        return raw

    def split(self, raw):
        '''
        Split normalized line around operators and brackets.

        Pieces are stripped, and empty ones dropped.
        '''
        pieces = regex.split(type(self).SPLIT, self.normalize(raw),
                             flags=type(self).FLAGS)
        return [piece.strip()
                for piece
                in pieces
                if piece.strip()]

    def classify(self, piece):
        '''
        Wrap piece into a token of the right kind.
        '''
        if regex.fullmatch(type(self).NUMBER, piece, flags=type(self).FLAGS):
            return Token(NUMBER, piece)
        elif piece in Machine.PRECEDENCE:
            return Token(OPERATOR, piece)
        elif piece == '(':
            return Token(LPAREN, piece)
        elif piece == ')':
            return Token(RPAREN, piece)
        else:
            return Token(UNKNOWN, piece)

    def tokenize(self, raw):
        '''
        Take a line and return all its tokens, signs folded in.
        '''
        return self.fold_signs([self.classify(piece)
                                for piece
                                in self.split(raw)])

    def issigned(self, previous):
        '''
        Return True if an operator after previous can only be a sign.
        '''
        return previous is None or previous.kind in {LPAREN, OPERATOR}

    def fold_signs(self, lexemes):
        '''
        Attach leading + and - to what they sign.

        -5 becomes a single number and a leading + is dropped. -(...) becomes
        (-1 * (...)), bracketed whole so the negation binds to its group only.
        A sign before anything else is left alone, to be reported as a
        missing operand.
        '''
        lexemes = list(lexemes)
        folded = []
        depth = 0
        # Depths at which a bracket opened around a negated group closes
        closing = []

        def emit(token):
            nonlocal depth
            folded.append(token)
            if token.kind == LPAREN:
                depth += 1
            elif token.kind == RPAREN:
                depth -= 1
                if closing and closing[-1] == depth:
                    closing.pop()
                    emit(Token(RPAREN, ')'))

        for i, token in enumerate(lexemes):
            previous = folded[-1] if folded else None
            following = lexemes[i + 1] if i + 1 < len(lexemes) else None
            if (token.kind == OPERATOR and
                token.text in {'+', '-'} and
                self.issigned(previous) and
                following is not None and
                following.kind in {NUMBER, LPAREN}):
                if token.text == '-':
                    if following.kind == NUMBER:
                        lexemes[i + 1] = tokens.number('-' + following.text)
                    else:
                        # Never closed if the group isn't: still unbalanced
                        emit(Token(LPAREN, '('))
                        closing.append(depth)
                        emit(tokens.number('-1'))
                        emit(tokens.operator('*'))
                continue
            emit(token)
        return folded
