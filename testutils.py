r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
SymdiffTestCase, which obeys the global configuration settings in
TestSettings. The latter can be configured by the script invoking the test
run.

Finally, evaluate() computes the value of an expression tree with mpmath,
which the tests use to compare derivatives with numerical ones.
"""

import sys
import functools
import unittest
import time

import sympy as sp
from mpmath import mp

from symdiff.exprs.parser import parse
from symdiff.exprs.tree import Variable, Constant, UnaryOp, FunctionCall
from symdiff.simplify.canonical import to_sympy


__all__ = [
    "SymdiffTestCase",
    "TestSettings",
    "evaluate",
]


class SymdiffTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true. Subclasses overriding setUp() or
          tearDown() need not call the base class versions.
        * Can compare expression strings for mathematical equivalence with
          assertEquivalent().
        * Can compare sequences of numbers with assertListAlmostEqual().
    """
    @classmethod
    def setUpClass(cls):
        if cls is SymdiffTestCase:
            return
        for name in ('setUp', 'tearDown'):
            method = getattr(cls, name)
            if method is not getattr(SymdiffTestCase, name):
                setattr(cls, name, cls._chained(name, method))

    @staticmethod
    def _chained(name, method):
        base = getattr(SymdiffTestCase, name)
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            base(self)
            return method(self, *args, **kwargs)
        return wrapper

    def run(self, result=None):
        self._verbose = bool(getattr(result, 'showAll', False))
        return unittest.TestCase.run(self, result)

    def setUp(self):
        self._started = time.time()

    def tearDown(self):
        started, self._started = getattr(self, '_started', None), None
        if started is None or not TestSettings.timing:
            return
        if getattr(self, '_verbose', False):
            print("(%.4f seconds) ... " % (time.time() - started),
                  file=sys.stderr, end='')

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertEquivalent(self, a, b):
        r"""Assert that two expression strings are mathematically equal.

        Both expressions are converted to SymPy and their difference is
        simplified, which has to result in zero.
        """
        diff = sp.simplify(to_sympy(parse(a)) - to_sympy(parse(b)))
        if diff != 0:
            raise self.failureException(
                "Expressions differ: %s != %s (difference: %s)" % (a, b, diff)
            )

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i in range(len(a)):
            if a[i] == b[i]:
                continue
            if delta is not None:
                if abs(a[i]-b[i]) > delta:
                    fails.append(i)
            else:
                if round(abs(a[i]-b[i]), places) != 0:
                    fails.append(i)
        if fails:
            msg = "%d elements differ.\n" % len(fails)
            maxN = 9
            if len(fails) <= maxN:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}    (difference: {d})".format(i=i, a=a[i], b=b[i], d=(b[i]-a[i]))
                              for i in fails[:maxN]])
            raise self.failureException(msg)


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False


_MP_FUNCTIONS = {
    'sin': mp.sin, 'cos': mp.cos, 'tan': mp.tan,
    'sec': mp.sec, 'cosec': mp.csc, 'cot': mp.cot,
    'arcsin': mp.asin, 'arccos': mp.acos, 'arctan': mp.atan,
    'arcsec': mp.asec, 'arccosec': mp.acsc, 'arccot': mp.acot,
    'sinh': mp.sinh, 'cosh': mp.cosh, 'tanh': mp.tanh,
    'sech': mp.sech, 'cosech': mp.csch, 'coth': mp.coth,
    'arcsinh': mp.asinh, 'arccosh': mp.acosh, 'arctanh': mp.atanh,
    'arcsech': mp.asech, 'arccosech': mp.acsch, 'arccoth': mp.acoth,
    'ln': mp.log, 'exp': mp.exp, 'sqrt': mp.sqrt,
}


def evaluate(tree, **values):
    r"""Evaluate an expression tree numerically using mpmath.

    The keyword arguments provide the values of the variables. The names `e`
    and `pi` refer to the constants unless given explicitly.
    """
    if isinstance(tree, Variable):
        if tree.name in values:
            return mp.mpf(values[tree.name])
        return {'e': mp.e, 'pi': mp.pi}[tree.name]
    if isinstance(tree, Constant):
        return mp.mpf(tree.value)
    if isinstance(tree, UnaryOp):
        return -evaluate(tree.child, **values)
    if isinstance(tree, FunctionCall):
        return _MP_FUNCTIONS[tree.name](evaluate(tree.arg, **values))
    a = evaluate(tree.left, **values)
    b = evaluate(tree.right, **values)
    return {
        '+': lambda: a + b,
        '-': lambda: a - b,
        '*': lambda: a * b,
        '/': lambda: a / b,
        '^': lambda: mp.power(a, b),
    }[tree.op]()
