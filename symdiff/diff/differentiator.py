r"""@package symdiff.diff.differentiator

Symbolic differentiation of expression trees.

The Differentiator maps an expression tree and the name of the variable to
differentiate by onto a new tree representing the derivative. It works by
structural recursion, applying for each node the matching rule of calculus:

    * sum, difference, product and quotient rules,
    * the generalized power rule for \f$ f(x)^{g(x)} \f$,
    * the chain rule together with a table of derivatives of the elementary
      functions.

The result is correct but not simplified in any way. For example, the
derivative of `x^3` is returned as

    x^3*(0*ln(x)+3*1/x)

Use driver.differentiate_n() to get simplified results.

The power rule is applied in its most general form
\f$ (f^g)' = f^g (g' \ln f + g f' / f) \f$ for all powers, regardless of
whether base or exponent are constant. The reciprocal trigonometric and
hyperbolic functions and their inverses are rewritten in terms of the other
functions (e.g. \f$ \sec(f) = 1/\cos(f) \f$) and the result differentiated.

Functions without a known derivative are not an error. The derivative of
`g(f)` is written `g'(f)` in that case.
"""

import logging

from ..errors import UnsupportedOperation, ExpressionDepthError
from ..errors import InvalidArgument
from ..exprs.tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from ..exprs.tree import depth
from ..exprs.parser import parse
from ..exprs.printer import render


__all__ = [
    "Differentiator",
    "differentiate",
    "FUNCTION_RULES",
    "REWRITE_RULES",
]


logger = logging.getLogger(__name__)


ONE = Constant(1)
TWO = Constant(2)
E = Variable('e')


def _add(a, b): return BinaryOp('+', a, b)
def _sub(a, b): return BinaryOp('-', a, b)
def _mul(a, b): return BinaryOp('*', a, b)
def _div(a, b): return BinaryOp('/', a, b)
def _pow(a, b): return BinaryOp('^', a, b)
def _neg_one(): return UnaryOp('-', ONE)
def _call(name, arg): return FunctionCall(name, (arg,))
def _recip(a): return _div(ONE, a)


## Derivatives of the elementary functions.
##
## Each entry maps a function name to a callable `rule(f, df)` taking the
## argument tree `f` and its derivative `df` and returning the derivative of
## the function applied to `f`, chain rule included.
FUNCTION_RULES = {
    'sin': lambda f, df: _mul(df, _call('cos', f)),
    'cos': lambda f, df: _mul(_mul(_neg_one(), df), _call('sin', f)),
    'tan': lambda f, df: _mul(df, _recip(_pow(_call('cos', f), TWO))),
    'arcsin': lambda f, df: _mul(df, _recip(_call('sqrt', _sub(ONE, _pow(f, TWO))))),
    'arccos': lambda f, df: _mul(_mul(_neg_one(), df),
                                 _recip(_call('sqrt', _sub(ONE, _pow(f, TWO))))),
    'arctan': lambda f, df: _mul(df, _recip(_add(ONE, _pow(f, TWO)))),
    'sinh': lambda f, df: _mul(df, _call('cosh', f)),
    'cosh': lambda f, df: _mul(df, _call('sinh', f)),
    'tanh': lambda f, df: _mul(df, _recip(_pow(_call('cosh', f), TWO))),
    'arcsinh': lambda f, df: _mul(df, _recip(_call('sqrt', _add(ONE, _pow(f, TWO))))),
    'arccosh': lambda f, df: _mul(df, _recip(_call('sqrt', _sub(_pow(f, TWO), ONE)))),
    'arctanh': lambda f, df: _mul(df, _recip(_sub(ONE, _pow(f, TWO)))),
    'ln': lambda f, df: _mul(df, _recip(f)),
    'sqrt': lambda f, df: _mul(df, _recip(_mul(TWO, _call('sqrt', f)))),
}


## Functions differentiated by first rewriting them in terms of others.
##
## Each entry maps a function name to a callable `rewrite(f)` returning an
## equivalent expression of the argument tree `f`.
REWRITE_RULES = {
    'exp': lambda f: _pow(E, f),
    'sec': lambda f: _recip(_call('cos', f)),
    'cosec': lambda f: _recip(_call('sin', f)),
    'cot': lambda f: _recip(_call('tan', f)),
    'sech': lambda f: _recip(_call('cosh', f)),
    'cosech': lambda f: _recip(_call('sinh', f)),
    'coth': lambda f: _recip(_call('tanh', f)),
    'arcsec': lambda f: _call('arccos', _recip(f)),
    'arccosec': lambda f: _call('arcsin', _recip(f)),
    'arccot': lambda f: _call('arctan', _recip(f)),
    'arcsech': lambda f: _call('arccosh', _recip(f)),
    'arccosech': lambda f: _call('arcsinh', _recip(f)),
    'arccoth': lambda f: _call('arctanh', _recip(f)),
}


class Differentiator(object):
    r"""Compute (unsimplified) derivatives of expression trees.

    Instances hold no state besides their configuration and can be shared
    freely, also between threads.
    """

    ## Default for the maximum tree depth accepted by derive().
    max_depth = 250

    def __init__(self, max_depth=None):
        r"""Create a differentiator.

        @param max_depth
            Maximum depth of trees to differentiate. Deeper trees are rejected
            with an ExpressionDepthError instead of risking to exhaust the
            Python stack. Default is the class attribute `max_depth`.
        """
        if max_depth is not None:
            self.max_depth = max_depth

    def derive(self, tree, variable):
        r"""Return the derivative of `tree` w.r.t. the variable `variable`.

        @param tree
            Root of the expression tree to differentiate.
        @param variable
            Name of the variable to differentiate by.

        @b Raises

        UnsupportedOperation if the tree contains a node no rule applies to,
        ExpressionDepthError if the tree is nested deeper than `max_depth`.
        """
        if not isinstance(variable, str) or not variable:
            raise InvalidArgument("Variable must be a non-empty name, got %r"
                                  % (variable,))
        tree_depth = depth(tree)
        if tree_depth > self.max_depth:
            raise ExpressionDepthError(
                "Expression nested too deeply (depth %d > %d)"
                % (tree_depth, self.max_depth)
            )
        return self._derive(tree, variable)

    def differentiate(self, expression, variable):
        r"""Parse, differentiate and render an expression string."""
        result = render(self.derive(parse(expression), variable))
        logger.debug("d/d%s %s = %s", variable, expression, result)
        return result

    def _derive(self, node, x):
        if isinstance(node, Variable):
            return ONE if node.name == x else Constant(0)
        if isinstance(node, Constant):
            return Constant(0)
        if isinstance(node, UnaryOp):
            if node.op == '-':
                return _mul(_neg_one(), self._derive(node.child, x))
        elif isinstance(node, BinaryOp):
            return self._derive_binary(node, x)
        elif isinstance(node, FunctionCall):
            if len(node.args) == 1:
                return self._derive_function(node, x)
        raise UnsupportedOperation(
            "No differentiation rule for %s '%s' with %d operand(s)"
            % (type(node).__name__, _operator_name(node), len(node.children)),
            operator=_operator_name(node), arity=len(node.children),
        )

    def _derive_binary(self, node, x):
        op, f, g = node.op, node.left, node.right
        if op not in ('+', '-', '*', '/', '^'):
            raise UnsupportedOperation(
                "No differentiation rule for binary operator '%s'" % op,
                operator=op, arity=2,
            )
        df = self._derive(f, x)
        dg = self._derive(g, x)
        if op == '+':
            return _add(df, dg)
        if op == '-':
            return _sub(df, dg)
        if op == '*':
            return _add(_mul(df, g), _mul(f, dg))
        if op == '/':
            return _div(_sub(_mul(df, g), _mul(f, dg)), _mul(g, g))
        # (f^g)' = f^g * (g' ln(f) + g f' / f)
        return _mul(_pow(f, g),
                    _add(_mul(dg, _call('ln', f)), _div(_mul(g, df), f)))

    def _derive_function(self, node, x):
        name, f = node.name, node.arg
        rule = FUNCTION_RULES.get(name)
        if rule is not None:
            return rule(f, self._derive(f, x))
        rewrite = REWRITE_RULES.get(name)
        if rewrite is not None:
            return self._derive(rewrite(f), x)
        # Unknown function g(f): mark the derivative as g'(f).
        return FunctionCall(name + "'", (f,))


def _operator_name(node):
    for attr in ('op', 'name'):
        value = getattr(node, attr, None)
        if value is not None:
            return value
    return type(node).__name__


_default = Differentiator()


def differentiate(expression, variable):
    r"""Differentiate an expression string w.r.t. `variable`.

    The result is an unsimplified expression string. Parse errors of the input
    are propagated as ParseError.

    @b Examples

    ```
        differentiate("x^2", "x")   # -> 'x^2*(0*ln(x)+2*1/x)'
        differentiate("f(x)", "x")  # -> "f'(x)"
    ```
    """
    return _default.differentiate(expression, variable)
