#!/usr/bin/env python3
r"""@package symdiff.exprs.test_parser

Parser test suite.
"""

import unittest

from testutils import SymdiffTestCase
from ..errors import ParseError
from .parser import parse
from .tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from .tree import Placeholder, NumberPlaceholder


x, y, z = Variable('x'), Variable('y'), Variable('z')


class TestParser(SymdiffTestCase):
    def test_leaves(self):
        self.assertEqual(parse("x"), x)
        self.assertEqual(parse("alpha_2"), Variable('alpha_2'))
        self.assertIsType(parse("3").value, int)
        self.assertEqual(parse("3"), Constant(3))
        self.assertIsType(parse("2.5").value, float)
        self.assertEqual(parse("2.5"), Constant(2.5))
        self.assertEqual(parse(".5"), Constant(0.5))
        self.assertEqual(parse("1e3"), Constant(1000.0))

    def test_precedence(self):
        self.assertEqual(parse("x+y*z"),
                         BinaryOp('+', x, BinaryOp('*', y, z)))
        self.assertEqual(parse("(x+y)*z"),
                         BinaryOp('*', BinaryOp('+', x, y), z))
        self.assertEqual(parse("x-y-z"),
                         BinaryOp('-', BinaryOp('-', x, y), z))
        self.assertEqual(parse("x/y*z"),
                         BinaryOp('*', BinaryOp('/', x, y), z))
        self.assertEqual(parse("x^y^z"),
                         BinaryOp('^', x, BinaryOp('^', y, z)))

    def test_unary(self):
        self.assertEqual(parse("-x^2"),
                         UnaryOp('-', BinaryOp('^', x, Constant(2))))
        self.assertEqual(parse("-2*x"),
                         BinaryOp('*', UnaryOp('-', Constant(2)), x))
        self.assertEqual(parse("2^-x"),
                         BinaryOp('^', Constant(2), UnaryOp('-', x)))
        self.assertEqual(parse("--x"), UnaryOp('-', UnaryOp('-', x)))
        self.assertEqual(parse("+x"), x)

    def test_functions(self):
        self.assertEqual(parse("sin(x)"), FunctionCall('sin', [x]))
        self.assertEqual(parse("sin(x)^2"),
                         BinaryOp('^', FunctionCall('sin', [x]), Constant(2)))
        self.assertEqual(parse("f''(x+1)"),
                         FunctionCall("f''", [BinaryOp('+', x, Constant(1))]))
        self.assertEqual(parse("f(x, y)"), FunctionCall('f', [x, y]))
        self.assertEqual(parse("ln(ln(x))"),
                         FunctionCall('ln', [FunctionCall('ln', [x])]))

    def test_patterns(self):
        self.assertEqual(parse("?x*$n", patterns=True),
                         BinaryOp('*', Placeholder('x'), NumberPlaceholder('n')))
        self.assertEqual(parse("?x^(-$n)", patterns=True),
                         BinaryOp('^', Placeholder('x'),
                                  UnaryOp('-', NumberPlaceholder('n'))))
        with self.assertRaises(ParseError):
            parse("?x+1")
        with self.assertRaises(ParseError):
            parse("sin($n)")

    def test_errors(self):
        for text in ["", "  ", "x+", "(x", "x)", "1 2", "x # y", "f(", "*x",
                     "f(x,)", "2e"]:
            with self.assertRaises(ParseError, msg=text):
                parse(text)
        with self.assertRaises(ParseError):
            parse(None)
        # Parsing still works after errors.
        self.assertEqual(parse("x"), x)

    def test_parse_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse("x*/y")


if __name__ == '__main__':
    unittest.main()
