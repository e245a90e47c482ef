'''
Operation library.

x is the topmost value on the stack, y the one below it. Binary operations
compute y op x, as typed: 10 2 / is 5.
'''

from enum import Enum
from functools import reduce

from .util import InvalidArgument, OutOfRange
from .engine import Engine, command


class Arity(Enum):
    # Take the operand count from the top of the stack.
    VARIADIC = 'variadic'


VARIADIC = Arity.VARIADIC

# Largest n for which n! is computed exactly.
MAX_FACTORIAL = 10000


class Clac(Engine):
    '''
    RPN calculator: the engine plus every named operation.

    Each public operation is a command, so it either applies completely and
    becomes an undoable history entry, or fails and leaves the stack alone.
    '''

    # Combinators. These work on the working stack and are only meaningful
    # from inside a command.

    def _operands(self, arity):
        '''
        Return how many values arity consumes, and the operands, topmost
        first. Nothing is removed yet.
        '''
        if arity is VARIADIC:
            count = self.numeric.truncate(self.working.peek(0, 1)[0])
            if count < 1:
                raise OutOfRange()
            return count + 1, self.working.peek(1, count)
        return arity, self.working.peek(0, arity)

    def apply(self, arity, f):
        '''
        Replace arity operands with the single result of f(operands).

        :param arity: Operand count, or VARIADIC to pop it from the stack.
        :param f: Called with the operands, topmost first.
        '''
        consumed, values = self._operands(arity)
        result = f(values)
        self.working.drop(0, consumed)
        self.working.push(result)

    def apply_int(self, arity, f):
        '''
        apply, with every operand truncated toward zero first.
        '''
        def truncated(values):
            return f([self.numeric.truncate(value) for value in values])
        self.apply(arity, truncated)

    def apply_multi(self, arity, f):
        '''
        Replace arity operands with the results of f(operands).

        Results are pushed in order, so the last ends up on top.
        '''
        consumed, values = self._operands(arity)
        results = f(values)
        self.working.drop(0, consumed)
        self.working.insert(list(reversed(results)), 0)

    def fold(self, values, op, initial=None):
        '''
        Left fold of values with binary operator op.
        '''
        values = list(values)
        if initial is None:
            initial = values.pop(0)
        return reduce(lambda acc, value: self.numeric.binary(acc, op, value),
                      values,
                      initial)

    def _pop_int(self, minimum):
        value = self.working.pop()
        n = self.numeric.truncate(value)
        if n < minimum:
            raise InvalidArgument('{} is less than {}'.format(value, minimum))
        return n

    def pop_index(self):
        return self._pop_int(0)

    def pop_count(self):
        return self._pop_int(1)

    def _unary(self, op):
        self.apply(1, lambda v: self.numeric.unary(op, v[0]))

    def _binary(self, op):
        self.apply(2, lambda v: self.numeric.binary(v[1], op, v[0]))

    def _whole(self, value):
        '''
        Return value as a non-negative int, else InvalidArgument.
        '''
        n = self.numeric.truncate(value)
        if n != value or n < 0:
            raise InvalidArgument('not a whole number: {}'.format(value))
        return n

    def _factorial(self, value):
        n = self._whole(value)
        if n > MAX_FACTORIAL:
            raise OutOfRange()
        return self.fold(range(2, n + 1), '*', initial=self.numeric.coerce(1))

    def _falling(self, n, k):
        '''
        Product of the k whole numbers from n down, n!/(n-k)! without
        computing either factorial.
        '''
        if k > n:
            raise InvalidArgument('{} is more than {}'.format(k, n))
        if n > MAX_FACTORIAL:
            raise OutOfRange()
        return self.fold(range(n - k + 1, n + 1), '*',
                         initial=self.numeric.coerce(1))

    def _ln_ratio(self, numerator, base):
        return self.numeric.binary(self.numeric.unary('ln', numerator), '/',
                                   self.numeric.unary('ln', base))

    def _dot(self, values, n):
        # The two vectors sit one above the other, in the same order.
        products = [self.numeric.binary(values[n + i], '*', values[i])
                    for i in range(n)]
        return self.fold(products, '+')

    # Stack

    @command
    def drop(self):
        self.working.drop(0, 1)

    @command
    def dropn(self):
        '''
        Drop the x values below x.
        '''
        self.working.drop(0, self.pop_count())

    @command
    def dropr(self):
        '''
        Drop x values starting at index y.
        '''
        count = self.pop_count()
        self.working.drop(self.pop_index(), count)

    @command
    def dup(self):
        self.working.dup(0, 1)

    @command
    def dupn(self):
        '''
        Duplicate the x values below x.
        '''
        self.working.dup(0, self.pop_count())

    @command
    def dupr(self):
        '''
        Duplicate x values starting at index y.
        '''
        count = self.pop_count()
        self.working.dup(self.pop_index(), count)

    @command
    def pick(self):
        '''
        Copy the value at index x to the top.
        '''
        self.working.dup(self.pop_index(), 1)

    @command
    def swap(self):
        self.working.rotate(1, 1, down=True)

    @command
    def rot(self):
        '''
        Bring the value at index x to the top.
        '''
        self.working.rotate(self.pop_index(), 1, down=True)

    @command
    def unrot(self):
        '''
        Send the top value down to index x.
        '''
        self.working.rotate(self.pop_index(), 1, down=False)

    @command
    def rotr(self):
        '''
        Bring the x values at index y to the top.
        '''
        count = self.pop_count()
        self.working.rotate(self.pop_index(), count, down=True)

    @command
    def unrotr(self):
        '''
        Send the top x values down to index y.
        '''
        count = self.pop_count()
        self.working.rotate(self.pop_index(), count, down=False)

    # Arithmetic

    @command
    def neg(self):
        self._unary('neg')

    @command
    def abs(self):
        self._unary('abs')

    @command
    def inv(self):
        self._unary('inv')

    @command
    def add(self):
        self._binary('+')

    @command
    def sub(self):
        self._binary('-')

    @command
    def mul(self):
        self._binary('*')

    @command
    def div(self):
        self._binary('/')

    @command
    def intdiv(self):
        '''
        Integer quotient of y and x, truncated toward zero.
        '''
        self.apply_int(2, lambda v: self.numeric.binary(v[1], 'div', v[0]))

    @command
    def mod(self):
        '''
        Remainder of y divided by x, with the sign of y.
        '''
        self._binary('mod')

    @command
    def pow(self):
        self._binary('**')

    @command
    def exp(self):
        self._unary('exp')

    @command
    def pow2(self):
        self.apply(1, lambda v: self.numeric.binary(2, '**', v[0]))

    @command
    def pow10(self):
        self.apply(1, lambda v: self.numeric.binary(10, '**', v[0]))

    @command
    def sqrt(self):
        self._unary('sqrt')

    @command
    def root(self):
        '''
        The x-th root of y.
        '''
        self.apply(2, lambda v: self.numeric.binary(
            v[1], '**', self.numeric.unary('inv', v[0])))

    # Logarithms, all by way of the natural log

    @command
    def ln(self):
        self._unary('ln')

    @command
    def lg(self):
        self.apply(1, lambda v: self._ln_ratio(v[0], 2))

    @command
    def log(self):
        self.apply(1, lambda v: self._ln_ratio(v[0], 10))

    @command
    def logn(self):
        '''
        Logarithm of y in base x.
        '''
        self.apply(2, lambda v: self._ln_ratio(v[1], v[0]))

    # Trigonometry, in radians

    @command
    def sin(self):
        self._unary('sin')

    @command
    def cos(self):
        self._unary('cos')

    @command
    def tan(self):
        self._unary('tan')

    @command
    def asin(self):
        self._unary('asin')

    @command
    def acos(self):
        self._unary('acos')

    @command
    def atan(self):
        self._unary('atan')

    @command
    def atan2(self):
        '''
        Arctangent of y / x, in the right quadrant.
        '''
        self._binary('atan2')

    @command
    def sinh(self):
        self._unary('sinh')

    @command
    def cosh(self):
        self._unary('cosh')

    @command
    def tanh(self):
        self._unary('tanh')

    @command
    def asinh(self):
        self._unary('asinh')

    @command
    def acosh(self):
        self._unary('acosh')

    @command
    def atanh(self):
        self._unary('atanh')

    @command
    def deg_to_rad(self):
        pi = self.numeric.constant('pi')
        self.apply(1, lambda v: self.numeric.binary(
            self.numeric.binary(v[0], '*', pi), '/', 180))

    @command
    def rad_to_deg(self):
        pi = self.numeric.constant('pi')
        self.apply(1, lambda v: self.numeric.binary(
            self.numeric.binary(v[0], '*', 180), '/', pi))

    # Rounding

    @command
    def floor(self):
        self._unary('floor')

    @command
    def ceil(self):
        self._unary('ceil')

    @command
    def trunc(self):
        self._unary('trunc')

    # Bitwise, on integer parts

    @command
    def and_(self):
        self.apply_int(2, lambda v: self.numeric.binary(v[1], '&', v[0]))

    @command
    def or_(self):
        self.apply_int(2, lambda v: self.numeric.binary(v[1], '|', v[0]))

    @command
    def xor(self):
        self.apply_int(2, lambda v: self.numeric.binary(v[1], '^', v[0]))

    @command
    def not_(self):
        self.apply_int(1, lambda v: self.numeric.unary('~', v[0]))

    @command
    def andn(self):
        '''
        Bitwise and of the x values below x.
        '''
        self.apply_int(VARIADIC, lambda v: self.fold(v, '&'))

    @command
    def orn(self):
        self.apply_int(VARIADIC, lambda v: self.fold(v, '|'))

    @command
    def xorn(self):
        self.apply_int(VARIADIC, lambda v: self.fold(v, '^'))

    # Statistics

    @command
    def sum(self):
        '''
        Sum of the x values below x.
        '''
        self.apply(VARIADIC, lambda v: self.fold(v, '+'))

    @command
    def avg(self):
        '''
        Mean of the x values below x.
        '''
        self.apply(VARIADIC, lambda v: self.numeric.binary(
            self.fold(v, '+'), '/', len(v)))

    @command
    def min(self):
        self._binary('min')

    @command
    def max(self):
        self._binary('max')

    @command
    def minn(self):
        self.apply(VARIADIC, lambda v: self.fold(v, 'min'))

    @command
    def maxn(self):
        self.apply(VARIADIC, lambda v: self.fold(v, 'max'))

    # Combinatorics, exact: factorials are plain repeated multiplication

    @command
    def factorial(self):
        self.apply(1, lambda v: self._factorial(v[0]))

    @command
    def comb(self):
        '''
        Number of ways to choose x items out of y, ignoring order.
        '''
        def comb(values):
            k, n = self._whole(values[0]), self._whole(values[1])
            return self.numeric.binary(self._falling(n, k), '/',
                                       self._factorial(k))
        self.apply(2, comb)

    @command
    def perm(self):
        '''
        Number of ordered arrangements of x items out of y.
        '''
        def perm(values):
            k, n = self._whole(values[0]), self._whole(values[1])
            return self._falling(n, k)
        self.apply(2, perm)

    # Vectors. An n-vector is n consecutive values, first component deepest.

    @command
    def mag(self):
        '''
        Magnitude of the vector made of the x values below x.
        '''
        self.apply(VARIADIC, lambda v: self.numeric.unary(
            'sqrt', self.fold([self.numeric.binary(c, '*', c) for c in v],
                              '+')))

    @command
    def hypot(self):
        self._binary('hypot')

    @command
    def dot(self):
        '''
        Dot product of two x-vectors below x.
        '''
        n = self.pop_count()
        self.apply(2 * n, lambda v: self._dot(v, n))

    @command
    def dot3(self):
        self.apply(6, lambda v: self._dot(v, 3))

    @command
    def cross(self):
        '''
        Cross product of two 3-vectors.
        '''
        def cross(values):
            b3, b2, b1, a3, a2, a1 = values
            binary = self.numeric.binary

            def det(p, q, r, s):
                return binary(binary(p, '*', q), '-', binary(r, '*', s))
            return [det(a2, b3, a3, b2),
                    det(a3, b1, a1, b3),
                    det(a1, b2, a2, b1)]
        self.apply_multi(6, cross)

    @command
    def rect_to_polar(self):
        '''
        (x, y) to (radius, angle).
        '''
        def rect_to_polar(values):
            y, x = values
            return [self.numeric.binary(x, 'hypot', y),
                    self.numeric.binary(y, 'atan2', x)]
        self.apply_multi(2, rect_to_polar)

    @command
    def polar_to_rect(self):
        '''
        (radius, angle) to (x, y).
        '''
        def polar_to_rect(values):
            theta, r = values
            return [self.numeric.binary(r, '*', self.numeric.unary('cos', theta)),
                    self.numeric.binary(r, '*', self.numeric.unary('sin', theta))]
        self.apply_multi(2, polar_to_rect)

    # Constants

    @command
    def pi(self):
        self.working.push(self.numeric.constant('pi'))

    @command
    def e(self):
        self.working.push(self.numeric.constant('e'))

    @command
    def phi(self):
        self.working.push(self.numeric.constant('phi'))
