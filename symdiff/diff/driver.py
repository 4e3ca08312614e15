r"""@package symdiff.diff.driver

Repeated differentiation with simplification between the passes.

Taking derivatives with the Differentiator makes expressions grow quickly,
especially through the general power rule. Taking the n'th derivative by
differentiating n times without simplifying in between is therefore not
feasible except for very small n. The Driver differentiates once, simplifies
the result using the `all` and `diffrules` rulesets and repeats this as many
times as requested.

~~~.py
differentiate_n("x^3", "x", 1)         # -> '3*x^2'
differentiate_n("x^3", "x", 2)         # -> '6*x'
differentiate_n("sin(2*x)", "x", 1)    # -> '2*cos(2*x)'
~~~
"""

import logging
import numbers

from ..errors import InvalidArgument, ExpressionDepthError
from ..exprs.parser import parse
from ..exprs.printer import render
from ..exprs.tree import walk, depth
from ..simplify.rewriter import Simplifier
from .differentiator import Differentiator
from .postrules import DIFFRULES


__all__ = [
    "Driver",
    "differentiate_n",
    "check_order",
    "RULESETS",
]


logger = logging.getLogger(__name__)


## Names of the rulesets used to simplify after each differentiation.
RULESETS = ('all', DIFFRULES.name)


def check_order(order):
    r"""Validate a differentiation order and return it as `int`.

    Integral floats (e.g. `2.0`) are accepted, as numbers coming from an
    expression are not necessarily of type `int`.

    @b Raises

    InvalidArgument for booleans, non-integral or negative values.
    """
    if isinstance(order, bool) or not isinstance(order, numbers.Real):
        raise InvalidArgument("Order must be a non-negative integer, got %r"
                              % (order,))
    if isinstance(order, numbers.Integral):
        result = int(order)
    elif float(order).is_integer():
        result = int(order)
    else:
        raise InvalidArgument("Order must be an integer, got %r" % (order,))
    if result < 0:
        raise InvalidArgument("Order must be non-negative, got %d" % result)
    return result


def _size(tree):
    return sum(1 for _ in walk(tree))


class Driver(object):
    r"""Compute higher derivatives with simplification after each pass.

    A Driver combines a Differentiator and a Simplifier. The Simplifier needs
    to know the `diffrules` ruleset; if no Simplifier is given, one with this
    ruleset registered is created.
    """
    def __init__(self, differentiator=None, simplifier=None, rulesets=RULESETS):
        r"""Create a driver.

        @param differentiator
            Differentiator instance. Default creates a new one.
        @param simplifier
            Simplifier instance. Default creates one knowing the built-in
            rulesets and `diffrules`.
        @param rulesets
            Names of the rulesets to simplify with after each pass. Default
            is `('all', 'diffrules')`.
        """
        ## Differentiator used for each pass.
        self.differentiator = differentiator or Differentiator()
        ## Simplifier used after each pass.
        self.simplifier = simplifier or Simplifier(rulesets=[DIFFRULES])
        ## Names of the rulesets used for simplification.
        self.rulesets = tuple(rulesets)

    def derive_n(self, tree, variable, order):
        r"""Return the simplified `order`'th derivative tree of `tree`.

        Each raw derivative is nested deeper than its input (the power rule
        alone adds up to four levels per level of the input), and it has to
        pass the depth limit of the simplifier, not just the one of the
        differentiator. The effective limit for the input is therefore
        roughly a quarter of `simplifier.max_depth` for deeply nested powers.

        @b Raises

        ExpressionDepthError if the input is nested deeper than the
        differentiator accepts or a raw derivative is nested deeper than the
        simplifier accepts.
        """
        order = check_order(order)
        for i in range(order):
            derivative = self.differentiator.derive(tree, variable)
            derivative_depth = depth(derivative)
            if derivative_depth > self.simplifier.max_depth:
                raise ExpressionDepthError(
                    "Derivative %d w.r.t. %s is nested too deeply to simplify "
                    "(depth %d > %d)"
                    % (i+1, variable, derivative_depth, self.simplifier.max_depth)
                )
            tree = self.simplifier.simplify(derivative, self.rulesets)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Derivative %d w.r.t. %s has %d nodes",
                             i+1, variable, _size(tree))
        return tree

    def differentiate_n(self, expression, variable, order):
        r"""Return the simplified `order`'th derivative of an expression string.

        For `order == 0`, the expression is returned unchanged (it is not even
        parsed).
        """
        order = check_order(order)
        if order == 0:
            return expression
        return render(self.derive_n(parse(expression), variable, order))


_default = Driver()


def differentiate_n(expression, variable, order):
    r"""Differentiate an expression string `order` times w.r.t. `variable`.

    After each differentiation, the result is simplified using the `all` and
    `diffrules` rulesets.

    @param expression
        The expression string.
    @param variable
        Name of the variable to differentiate by.
    @param order
        Non-negative integer. For `0`, `expression` is returned unchanged.

    @b Raises

    InvalidArgument for an invalid `order`, ParseError for malformed
    expressions and UnsupportedOperation for expressions that cannot be
    differentiated.
    """
    return _default.differentiate_n(expression, variable, order)
