from fractions import Fraction
from functools import reduce
import operator
import math

import regex

from .util import EvaluationError, InvalidArgument, wrap_numeric_errors


# Exponents above this are evaluated in floating point, even in exact mode.
MAX_EXACT_EXPONENT = 4096


def _isrational(*values):
    return all(isinstance(value, (int, Fraction)) for value in values)


def _truediv(left, right):
    if _isrational(left, right):
        return Fraction(left) / Fraction(right)
    return left / right


def _intdiv(left, right):
    '''
    Quotient truncated toward zero.
    '''
    return math.trunc(_truediv(left, right))


def _mod(left, right):
    '''
    Remainder with the sign of the dividend.
    '''
    if right == 0:
        raise ZeroDivisionError('modulo by zero')
    if _isrational(left, right):
        return left - right * _intdiv(left, right)
    return math.fmod(left, right)


def _pow(left, right):
    if _isrational(left, right) and \
       Fraction(right).denominator == 1 and \
       abs(right) <= MAX_EXACT_EXPONENT:
        return Fraction(left) ** int(right)
    return math.pow(left, right)


def _sqrt(only):
    '''
    Square root, exact for perfect square rationals.
    '''
    if _isrational(only) and only >= 0:
        only = Fraction(only)
        numerator = math.isqrt(only.numerator)
        denominator = math.isqrt(only.denominator)
        if numerator ** 2 == only.numerator and \
           denominator ** 2 == only.denominator:
            return Fraction(numerator, denominator)
    return math.sqrt(only)


class NumericEngine:
    '''
    Scalar evaluator behind the calculator.

    Evaluates named unary and binary operators, parses numbers and holds the
    precomputed constants. Never lets a Python exception escape: everything is
    converted to a ClacError.
    '''

    FMTS = {
        # Exact rationals; whole results come back as int.
        'F': Fraction,
        'f': float,
    }
    DEFAULT_FMT = 'F'

    UNARY = {
        'neg': operator.__neg__,
        'abs': abs,
        'inv': lambda only: _truediv(1, only),
        'sqrt': _sqrt,
        'exp': math.exp,
        'ln': math.log,
        'sin': math.sin,
        'cos': math.cos,
        'tan': math.tan,
        'asin': math.asin,
        'acos': math.acos,
        'atan': math.atan,
        'sinh': math.sinh,
        'cosh': math.cosh,
        'tanh': math.tanh,
        'asinh': math.asinh,
        'acosh': math.acosh,
        'atanh': math.atanh,
        'floor': math.floor,
        'ceil': math.ceil,
        'trunc': math.trunc,
        '~': operator.__invert__,
    }

    BINARY = {
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '/': _truediv,
        'div': _intdiv,
        'mod': _mod,
        '**': _pow,
        'atan2': math.atan2,
        'hypot': math.hypot,
        'min': min,
        'max': max,
        '&': operator.__and__,
        '|': operator.__or__,
        '^': operator.__xor__,
    }

    CONSTANTS = {
        'pi': math.pi,
        'e': math.e,
        'phi': (1 + math.sqrt(5)) / 2,
    }

    # 0x1f, 0o17, 0b101
    RADIX = r'''
             (?:
                 0
                 (?:
                     [xX][0-9a-fA-F_]+
                     |
                     [oO][0-7_]+
                     |
                     [bB][01_]+
                 )
             )
             '''
    # 1, 1_000, 1., 1.5, .5, 1e3, 2.5E-3
    DECIMAL = r'''
               (?:
                   (?:
                       \d[\d_]*
                       (?:
                           \.
                           [\d_]*
                       )?
                       |
                       \.
                       \d[\d_]*
                   )
                   (?:
                       [eE]
                       [+-]?
                       \d{1,4}
                   )?
               )
               '''
    # Order matters: a radix prefix would otherwise lex as the decimal 0.
    NUMBER = r'''
              (?:
                  (?<sign>[+-])?
                  (?:
                      (?<radix>{RADIX})
                      |
                      (?<decimal>{DECIMAL})
                  )
              )
              '''.format(RADIX=RADIX, DECIMAL=DECIMAL)
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION0,
                    regex.VERBOSE},
                   0)

    def __init__(self, fmt=None):
        '''
        Create evaluator for the given number format (see FMTS).
        '''
        try:
            self.ifmt = type(self).FMTS[fmt or type(self).DEFAULT_FMT]
        except KeyError:
            raise InvalidArgument('no such format {!r}'.format(fmt)) from None
        self.constants = {name: self._normalize(value)
                          for name, value
                          in type(self).CONSTANTS.items()}

    @property
    def exact(self):
        return self.ifmt is Fraction

    def _normalize(self, value):
        '''
        Coerce an evaluation result into a storable value.
        '''
        if isinstance(value, bool):
            value = int(value)
        if isinstance(value, complex):
            raise InvalidArgument('complex result')
        if not self.exact and isinstance(value, (int, Fraction)):
            value = float(value)
        if isinstance(value, float):
            if math.isnan(value):
                raise InvalidArgument('result is not a number')
            return value
        if isinstance(value, Fraction) and value.denominator == 1:
            return value.numerator
        if isinstance(value, (int, Fraction)):
            return value
        raise InvalidArgument('not a number: {!r}'.format(value))

    @wrap_numeric_errors('cannot evaluate {1}')
    def unary(self, op, only):
        '''
        Evaluate unary operator op on only.
        '''
        try:
            f = type(self).UNARY[op]
        except KeyError:
            raise EvaluationError('no such operator {!r}'.format(op)) from None
        return self._normalize(f(only))

    @wrap_numeric_errors('cannot evaluate {2}')
    def binary(self, left, op, right):
        '''
        Evaluate left op right.
        '''
        try:
            f = type(self).BINARY[op]
        except KeyError:
            raise EvaluationError('no such operator {!r}'.format(op)) from None
        return self._normalize(f(left, right))

    @wrap_numeric_errors('invalid number {1!r}')
    def parse(self, text):
        '''
        Parse text into a value of the current format.
        '''
        match = regex.fullmatch(type(self).NUMBER, text.strip(),
                                flags=type(self).FLAGS)
        if match is None:
            raise InvalidArgument('invalid number {!r}'.format(text))
        if match.group('radix'):
            value = self.ifmt(int(match.group('radix').replace('_', ''), 0))
        else:
            value = self.ifmt(match.group('decimal').replace('_', ''))
        if match.group('sign') == '-':
            value = -value
        return self._normalize(value)

    @wrap_numeric_errors('not a number: {1!r}')
    def coerce(self, value):
        '''
        Convert a number or numeric text into a value of the current format.
        '''
        if isinstance(value, str):
            return self.parse(value)
        return self._normalize(value)

    def constant(self, name):
        try:
            return self.constants[name]
        except KeyError:
            raise EvaluationError('no such constant {!r}'.format(name)) from None

    def truncate(self, value):
        '''
        Truncate value toward zero, to an int.
        '''
        try:
            if value >= 0:
                return math.floor(value)
            return math.ceil(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidArgument('not an integer: {!r}'.format(value)) from e

    def truth(self, value):
        '''
        Zero is false, everything else true.
        '''
        return value != 0
