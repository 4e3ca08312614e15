r"""@package symdiff.simplify.canonical

Conversion between expression trees and SymPy expressions.

SymPy brings expressions into a canonical form on construction: like terms
in sums and products are collected, numbers are combined and trivial
function values (like `ln(e)` or `sin(0)`) are evaluated. The collect()
function uses this to tidy up an expression tree by converting it to SymPy
and back. The back-conversion produces trees reading naturally in the
expression language, e.g. quotients instead of negative powers and
subtractions instead of adding negative terms. Sums of quotients are combined
over a common denominator.
"""

import logging

import sympy as sp
from sympy.core.function import AppliedUndef

from ..errors import UnsupportedOperation
from ..exprs.tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall


__all__ = [
    "to_sympy",
    "from_sympy",
    "collect",
]


logger = logging.getLogger(__name__)


## Functions of the expression language and their SymPy counterparts.
FUNCTIONS = {
    'sin': sp.sin, 'cos': sp.cos, 'tan': sp.tan,
    'sec': sp.sec, 'cosec': sp.csc, 'cot': sp.cot,
    'arcsin': sp.asin, 'arccos': sp.acos, 'arctan': sp.atan,
    'arcsec': sp.asec, 'arccosec': sp.acsc, 'arccot': sp.acot,
    'sinh': sp.sinh, 'cosh': sp.cosh, 'tanh': sp.tanh,
    'sech': sp.sech, 'cosech': sp.csch, 'coth': sp.coth,
    'arcsinh': sp.asinh, 'arccosh': sp.acosh, 'arctanh': sp.atanh,
    'arcsech': sp.asech, 'arccosech': sp.acsch, 'arccoth': sp.acoth,
    'ln': sp.log, 'exp': sp.exp, 'sqrt': sp.sqrt,
}

## Named constants of the expression language.
CONSTANTS = {
    'e': sp.E,
    'pi': sp.pi,
}

# Reverse lookup for function classes (`sqrt` is a Pow in SymPy and `exp`
# is converted to a power of `e`).
_FUNCTION_NAMES = dict((func, name) for name, func in FUNCTIONS.items()
                       if name not in ('sqrt', 'exp'))


def to_sympy(tree):
    r"""Convert an expression tree into a SymPy expression.

    Variables become SymPy symbols of the same name, except for `e` and `pi`,
    which become the respective SymPy constants. Functions not known to the
    expression language become undefined SymPy functions.
    """
    if isinstance(tree, Variable):
        const = CONSTANTS.get(tree.name)
        if const is not None:
            return const
        return sp.Symbol(tree.name)
    if isinstance(tree, Constant):
        if isinstance(tree.value, float):
            return sp.Float(tree.value)
        return sp.Integer(tree.value)
    if isinstance(tree, UnaryOp) and tree.op == '-':
        return -to_sympy(tree.child)
    if isinstance(tree, BinaryOp):
        a, b = to_sympy(tree.left), to_sympy(tree.right)
        if tree.op == '+':
            return a + b
        if tree.op == '-':
            return a - b
        if tree.op == '*':
            return a * b
        if tree.op == '/':
            return a / b
        if tree.op == '^':
            return a ** b
    if isinstance(tree, FunctionCall):
        args = [to_sympy(arg) for arg in tree.args]
        func = FUNCTIONS.get(tree.name)
        if func is not None and len(args) == 1:
            return func(*args)
        return sp.Function(tree.name)(*args)
    raise UnsupportedOperation("Cannot convert %r to SymPy" % (tree,),
                               operator=getattr(tree, 'op', type(tree).__name__),
                               arity=len(tree.children))


def _number(value):
    if value < 0:
        return UnaryOp('-', Constant(-value))
    return Constant(value)


def _is_negative_term(expr):
    coeff = expr.as_coeff_Mul()[0]
    return bool(coeff.is_negative)


def from_sympy(expr):
    r"""Convert a SymPy expression into an expression tree.

    @b Raises

    UnsupportedOperation for SymPy objects without a counterpart in the
    expression language, like infinities, `nan`, the imaginary unit or
    functions of several arguments.
    """
    if expr.is_Integer:
        return _number(int(expr))
    if expr.is_Rational:
        p, q = int(expr.p), int(expr.q)
        if p < 0:
            return UnaryOp('-', BinaryOp('/', Constant(-p), Constant(q)))
        return BinaryOp('/', Constant(p), Constant(q))
    if expr.is_Float:
        return _number(float(expr))
    for name, const in CONSTANTS.items():
        if expr == const:
            return Variable(name)
    if expr.is_Symbol:
        return Variable(expr.name)
    if isinstance(expr, sp.exp):
        return BinaryOp('^', Variable('e'), from_sympy(expr.args[0]))
    if expr.is_Add:
        return _from_add(expr)
    if expr.is_Mul:
        return _from_mul(expr)
    if expr.is_Pow:
        return _from_pow(expr)
    if isinstance(expr, sp.Function):
        if isinstance(expr, AppliedUndef):
            name = expr.func.__name__
        else:
            name = _FUNCTION_NAMES.get(expr.func)
        if name is not None and len(expr.args) == 1:
            return FunctionCall(name, (from_sympy(expr.args[0]),))
        raise UnsupportedOperation(
            "Cannot represent function %s with %d argument(s)"
            % (expr.func, len(expr.args)),
            operator=str(expr.func), arity=len(expr.args),
        )
    raise UnsupportedOperation("Cannot represent SymPy object %s" % (expr,),
                               operator=type(expr).__name__,
                               arity=len(expr.args))


def _from_add(expr):
    result = None
    for term in expr.as_ordered_terms():
        if result is None:
            result = from_sympy(term)
        elif _is_negative_term(term):
            result = BinaryOp('-', result, from_sympy(-term))
        else:
            result = BinaryOp('+', result, from_sympy(term))
    return result


def _from_mul(expr):
    if _is_negative_term(expr):
        return UnaryOp('-', from_sympy(-expr))
    numer, denom = sp.fraction(expr)
    if denom == 1:
        return _product(numer)
    return BinaryOp('/', _product(numer), _product(denom))


def _product(expr):
    factors = expr.as_ordered_factors() if expr.is_Mul else [expr]
    result = from_sympy(factors[0])
    for factor in factors[1:]:
        result = BinaryOp('*', result, from_sympy(factor))
    return result


def _from_pow(expr):
    base, exponent = expr.args
    if exponent == sp.Rational(1, 2):
        return FunctionCall('sqrt', (from_sympy(base),))
    if _is_negative_term(exponent):
        return BinaryOp('/', Constant(1), from_sympy(sp.Pow(base, -exponent)))
    return BinaryOp('^', from_sympy(base), from_sympy(exponent))


def _combine_fractions(expr):
    # Unbounded values make no sense as polynomial coefficients.
    if expr.has(sp.zoo, sp.oo, -sp.oo, sp.nan):
        return expr
    try:
        return sp.cancel(sp.together(expr))
    except sp.PolynomialError as e:
        logger.debug("Not combining fractions of %s: %s", expr, e)
        return expr


def collect(tree):
    r"""Return the canonical form of `tree` as computed by SymPy.

    Besides collecting like terms, sums of quotients are brought over a
    common denominator and common factors of numerator and denominator are
    cancelled. Without this, repeated differentiation of quotients produces
    expressions growing exponentially with the order.
    """
    return from_sympy(_combine_fractions(to_sympy(tree)))
