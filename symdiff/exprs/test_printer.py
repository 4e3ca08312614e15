#!/usr/bin/env python3

import unittest

from testutils import SymdiffTestCase
from ..errors import UnsupportedOperation
from .parser import parse
from .printer import render
from .tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from .tree import Placeholder, NumberPlaceholder


x, y = Variable('x'), Variable('y')


class TestPrinter(SymdiffTestCase):
    def test_minimal_parentheses(self):
        for text in ["x+y*z", "(x+y)*z", "x-y-z", "x-(y-z)", "x-(y+z)",
                     "x/(y*z)", "x*(y/z)", "x/y*z", "x^y^z", "(x^y)^z",
                     "-x^2", "(-x)^2", "x^(-2)", "-(x+y)", "-(x*y)",
                     "sin(x)^2", "f'(x)", "2.5*x", "a+(-b)", "-(-x)",
                     "-1*x", "f(x, y)", "2^(1/2)", "e^(x*ln(2))"]:
            self.assertEqual(render(parse(text)), text)

    def test_normalizes_spacing(self):
        self.assertEqual(render(parse(" ( x + y ) ")), "x+y")
        self.assertEqual(render(parse("((x))*(y)")), "x*y")
        self.assertEqual(render(parse("+x")), "x")

    def test_round_trip(self):
        for text in ["x^2*(0*ln(x)+2*1/x)", "-1*(1*cos(x))*sin(x)",
                     "((1*y-x*0)/(y*y))", "2^-x*3", "1-(-(2))"]:
            tree = parse(text)
            self.assertEqual(parse(render(tree)), tree)

    def test_negative_constants(self):
        self.assertEqual(render(Constant(-2)), "-2")
        self.assertEqual(render(BinaryOp('^', x, Constant(-2))), "x^(-2)")
        self.assertEqual(render(BinaryOp('-', x, Constant(-2))), "x-(-2)")
        self.assertEqual(render(BinaryOp('*', Constant(-2), x)), "-2*x")
        self.assertEqual(render(UnaryOp('-', Constant(-2))), "-(-2)")

    def test_placeholders(self):
        self.assertEqual(render(BinaryOp('*', Placeholder('x'),
                                         NumberPlaceholder('n'))), "?x*$n")

    def test_unknown_operator(self):
        with self.assertRaises(UnsupportedOperation):
            render(BinaryOp('%', x, y))
        self.assertEqual(str(FunctionCall('sin', [x])), "sin(x)")


if __name__ == '__main__':
    unittest.main()
