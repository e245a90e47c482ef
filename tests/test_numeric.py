'''
Numeric evaluator tests
'''

from fractions import Fraction
import math

from pytest import raises, approx, mark

from clac.numeric import NumericEngine
from clac.util import EvaluationError, InvalidArgument, OutOfRange


@mark.parametrize('text, expected', [
    ('42', 42),
    ('-3', -3),
    ('+3', 3),
    ('1_000', 1000),
    ('0x1f', 31),
    ('-0x10', -16),
    ('0b101', 5),
    ('0o17', 15),
    ('1.5', Fraction(3, 2)),
    ('.5', Fraction(1, 2)),
    ('2.', 2),
    ('1e3', 1000),
    ('2.5E-1', Fraction(1, 4)),
])
def test_parse_exact(text, expected):
    value = NumericEngine().parse(text)
    assert value == expected
    assert type(value) is type(expected)


def test_parse_float():
    numeric = NumericEngine('f')
    assert numeric.parse('1.5') == 1.5
    assert isinstance(numeric.parse('0x10'), float)


@mark.parametrize('text', ['abc', '', 'nan', '1.2.3', '0x', '1e', '--1'])
def test_parse_rejects(text):
    with raises(InvalidArgument):
        NumericEngine().parse(text)


def test_unknown_format():
    with raises(InvalidArgument):
        NumericEngine('x')


def test_unary_and_binary():
    numeric = NumericEngine()
    assert numeric.unary('neg', 2) == -2
    assert numeric.binary(7, '-', 2) == 5
    assert numeric.binary(1, '/', 3) == Fraction(1, 3)
    assert numeric.binary(6, '/', 3) == 2
    assert type(numeric.binary(6, '/', 3)) is int
    assert numeric.binary(2, '**', Fraction(1, 2)) == approx(math.sqrt(2))


def test_errors_are_typed():
    numeric = NumericEngine()
    with raises(InvalidArgument):
        numeric.binary(1, '/', 0)
    with raises(InvalidArgument):
        numeric.unary('sqrt', -1)
    with raises(InvalidArgument):
        numeric.unary('~', Fraction(1, 2))
    with raises(OutOfRange):
        numeric.unary('exp', 10000)
    with raises(EvaluationError, match='no such operator'):
        numeric.unary('frobnicate', 1)
    with raises(EvaluationError, match='no such operator'):
        numeric.binary(1, 'frobnicate', 1)


def test_stray_exceptions_become_evaluation_errors(monkeypatch):
    def broken(only):
        raise RuntimeError('boom')

    monkeypatch.setitem(NumericEngine.UNARY, 'broken', broken)
    with raises(EvaluationError, match='cannot evaluate broken') as info:
        NumericEngine().unary('broken', 1)
    assert isinstance(info.value.__cause__, RuntimeError)


def test_coerce():
    assert type(NumericEngine().coerce(Fraction(4, 2))) is int
    assert NumericEngine().coerce('7') == 7
    assert NumericEngine('f').coerce(3) == 3.0
    assert isinstance(NumericEngine('f').coerce(3), float)
    with raises(InvalidArgument):
        NumericEngine().coerce(complex(1, 1))
    with raises(InvalidArgument):
        NumericEngine().coerce(float('nan'))
    with raises(InvalidArgument):
        NumericEngine().coerce(None)


@mark.parametrize('value, expected', [
    (2.7, 2),
    (-2.7, -2),
    (Fraction(-7, 2), -3),
    (5, 5),
])
def test_truncate(value, expected):
    assert NumericEngine().truncate(value) == expected


@mark.parametrize('value', [float('inf'), float('-inf'), float('nan'), 'x'])
def test_truncate_rejects(value):
    with raises(InvalidArgument):
        NumericEngine().truncate(value)


def test_truth():
    numeric = NumericEngine()
    assert not numeric.truth(0)
    assert not numeric.truth(0.0)
    assert numeric.truth(1)
    assert numeric.truth(Fraction(1, 2))
    assert numeric.truth(-0.5)


def test_constants():
    numeric = NumericEngine()
    assert numeric.constant('pi') == math.pi
    assert numeric.constant('phi') == approx(1.6180339887)
    with raises(EvaluationError):
        numeric.constant('tau')
