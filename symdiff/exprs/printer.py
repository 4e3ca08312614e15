r"""@package symdiff.exprs.printer

Render syntax trees back into expression strings.

The output uses the same syntax accepted by parser.parse() and inserts only
the parentheses needed to preserve the tree structure, i.e.
`parse(render(tree)) == tree` for all trees produced by the parser.
"""

import numbers

from ..errors import UnsupportedOperation
from .tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from .tree import Placeholder, NumberPlaceholder


__all__ = [
    "render",
]


# Binding strength of the operators (higher binds tighter).
_PREC_SUM = 1
_PREC_PRODUCT = 2
_PREC_NEG = 3
_PREC_POWER = 4
_PREC_ATOM = 5

_BINARY_PREC = {
    '+': _PREC_SUM,
    '-': _PREC_SUM,
    '*': _PREC_PRODUCT,
    '/': _PREC_PRODUCT,
    '^': _PREC_POWER,
}


def render(tree):
    r"""Return the expression string of a syntax tree."""
    return _render(tree)[0]


def _format_number(value):
    if isinstance(value, numbers.Integral):
        return "%d" % value
    return repr(float(value))


def _wrap(text):
    return "(%s)" % text


def _render(node):
    r"""Return the string and the precedence of `node`."""
    if isinstance(node, Variable):
        return node.name, _PREC_ATOM
    if isinstance(node, Constant):
        if node.value < 0:
            return "-" + _format_number(-node.value), _PREC_NEG
        return _format_number(node.value), _PREC_ATOM
    if isinstance(node, Placeholder):
        return "?" + node.name, _PREC_ATOM
    if isinstance(node, NumberPlaceholder):
        return "$" + node.name, _PREC_ATOM
    if isinstance(node, FunctionCall):
        args = ", ".join(render(arg) for arg in node.args)
        return "%s(%s)" % (node.name, args), _PREC_ATOM
    if isinstance(node, UnaryOp):
        text, prec = _render(node.child)
        # Also wrap nested negations to avoid printing "--x".
        if prec <= _PREC_NEG:
            text = _wrap(text)
        return node.op + text, _PREC_NEG
    if isinstance(node, BinaryOp):
        prec = _BINARY_PREC.get(node.op)
        if prec is None:
            raise UnsupportedOperation("Cannot render operator '%s'" % node.op,
                                       operator=node.op, arity=2)
        left, lprec = _render(node.left)
        right, rprec = _render(node.right)
        if node.op == '^':
            # Right associative; any negation in the base or exponent is
            # parenthesized.
            if lprec <= prec:
                left = _wrap(left)
            if rprec < prec or rprec == _PREC_NEG:
                right = _wrap(right)
        else:
            if lprec < prec:
                left = _wrap(left)
            if rprec <= prec or rprec == _PREC_NEG:
                right = _wrap(right)
        return "%s%s%s" % (left, node.op, right), prec
    raise UnsupportedOperation("Cannot render node %r" % (node,),
                               operator=type(node).__name__,
                               arity=len(node.children))
