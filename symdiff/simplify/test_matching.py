#!/usr/bin/env python3

import unittest

from testutils import SymdiffTestCase
from ..exprs.parser import parse
from ..exprs.tree import Variable, Constant
from .matching import Flags, match, terms, build_sequence


a, b, c, d = [Variable(n) for n in "abcd"]


def P(text):
    return parse(text, patterns=True)


class TestFlags(SymdiffTestCase):
    def test_parse(self):
        flags = Flags.parse('acg')
        self.assertTrue(flags.associative)
        self.assertTrue(flags.commutative)
        self.assertTrue(flags.allow_other_terms)
        self.assertEqual(str(flags), 'acg')
        self.assertEqual(Flags.parse('c'), Flags(commutative=True))
        self.assertEqual(str(Flags.parse('')), '')
        with self.assertRaises(ValueError):
            Flags.parse('ax')


class TestSequences(SymdiffTestCase):
    def test_terms(self):
        self.assertEqual(terms(parse("(a*b)*(c*d)"), '*'), (a, b, c, d))
        self.assertEqual(terms(parse("(a*b)*(c*d)"), '*', flatten=False),
                         (parse("a*b"), parse("c*d")))
        self.assertEqual(terms(parse("a+b"), '*'), (parse("a+b"),))
        self.assertEqual(terms(parse("a-b-c"), '+'), (parse("a-b-c"),))

    def test_build_sequence(self):
        self.assertEqual(build_sequence('+', [a, b, c]), parse("a+b+c"))
        self.assertEqual(build_sequence('*', [a]), a)


class TestMatch(SymdiffTestCase):
    def test_literal(self):
        result = match(P("?x+1"), parse("a+1"))
        self.assertEqual(result.bindings, {'x': a})
        self.assertIsNone(match(P("?x+1"), parse("1+a")))
        self.assertIsNone(match(P("?x+1"), parse("a-1")))
        self.assertEqual(match(P("sin(?x)"), parse("sin(a*b)")).bindings,
                         {'x': parse("a*b")})
        self.assertIsNone(match(P("sin(?x)"), parse("cos(a)")))

    def test_repeated_placeholder(self):
        self.assertIsNotNone(match(P("?x/?x"), parse("(a+b)/(a+b)")))
        self.assertIsNone(match(P("?x/?x"), parse("a/b")))

    def test_number_placeholder(self):
        self.assertEqual(match(P("$n*?x"), parse("2*y")).bindings,
                         {'n': Constant(2), 'x': Variable('y')})
        self.assertIsNone(match(P("$n*?x"), parse("y*2")))
        self.assertIsNone(match(P("$n*?x"), parse("a*y")))
        self.assertIsNotNone(match(P("$n*?x"), parse("y*2"), Flags.parse('c')))

    def test_initial_bindings(self):
        bindings = {'x': a}
        self.assertIsNotNone(match(P("?x*?y"), parse("a*b"), bindings=bindings))
        self.assertIsNone(match(P("?x*?y"), parse("b*a"), bindings=bindings))
        self.assertEqual(bindings, {'x': a})

    def test_commutative(self):
        flags = Flags.parse('c')
        result = match(P("?x+(-?y)"), parse("(-b)+a"), flags)
        self.assertEqual(result.bindings, {'x': a, 'y': b})
        # Without the associative flag, nested sums are single operands.
        self.assertIsNone(match(P("0+?x"), parse("a+0+b"), flags))

    def test_associative(self):
        flags = Flags.parse('a')
        result = match(P("?x*?y"), parse("a*b*c"), flags)
        self.assertEqual(result.bindings, {'x': a, 'y': parse("b*c")})
        result = match(P("?x*c"), parse("a*(b*c)"), flags)
        self.assertEqual(result.bindings, {'x': parse("a*b")})
        self.assertIsNone(match(P("?x*a"), parse("a*b*c"), flags))

    def test_associative_commutative(self):
        flags = Flags.parse('ac')
        result = match(P("?x*a"), parse("a*b*c"), flags)
        self.assertEqual(result.bindings, {'x': parse("b*c")})
        self.assertIsNone(match(P("?x*d"), parse("a*b*c"), flags))

    def test_associative_commutative_long_sequence(self):
        # Too many factors to try every grouping.
        flags = Flags.parse('ac')
        factors = "a*b*c*d*f*g*h*i*j*k*l*m"
        with self.assertLogs('symdiff.simplify.matching', level='DEBUG'):
            result = match(P("?x*(1/?y)"), parse(factors + "*(1/x)"), flags)
        self.assertEqual(result.bindings, {'x': parse(factors), 'y': parse("x")})
        result = match(P("?x*(1/?y)"), parse("(1/x)*" + factors), flags)
        self.assertEqual(result.bindings, {'x': parse(factors), 'y': parse("x")})

    def test_other_terms(self):
        flags = Flags.parse('acg')
        tree = parse("a*1*b")
        result = match(P("1*?x"), tree, flags)
        self.assertEqual(result.bindings, {'x': a})
        self.assertEqual(result.op, '*')
        self.assertEqual(result.before, ())
        self.assertEqual(result.after, (b,))
        self.assertEqual(result.rest, (b,))
        self.assertEqual(result.rebuild(a), parse("a*b"))

    def test_other_terms_position(self):
        flags = Flags.parse('acg')
        result = match(P("?x^2*?x"), parse("c*a^2*d*a"), flags)
        self.assertEqual(result.bindings, {'x': a})
        self.assertEqual(result.before, (c,))
        self.assertEqual(result.after, (d,))
        self.assertEqual(result.rebuild(parse("a^3")), parse("c*a^3*d"))

    def test_other_terms_exact(self):
        result = match(P("0*?x"), parse("a*0"), Flags.parse('cg'))
        self.assertEqual(result.bindings, {'x': a})
        self.assertEqual(result.rest, ())
        self.assertEqual(result.rebuild(c), c)

    def test_other_terms_non_commutative(self):
        flags = Flags.parse('ag')
        result = match(P("b*c"), parse("a*b*c*d"), flags)
        self.assertEqual(result.before, (a,))
        self.assertEqual(result.after, (d,))
        self.assertIsNone(match(P("c*b"), parse("a*b*c*d"), flags))


if __name__ == '__main__':
    unittest.main()
