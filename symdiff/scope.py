r"""@package symdiff.scope

Function namespace of the host expression system.

A Scope holds functions callable by name from user code and the rulesets of
a Simplifier. The `builtin_scope` created on import provides the function

    d(expression, variable, order)

which returns the simplified `order`'th derivative of `expression` w.r.t.
`variable` as a string, and has the `diffrules` ruleset registered next to
the built-in `basic` and `all` rulesets.
"""

import logging

from .errors import UnsupportedOperation
from .diff.driver import Driver, check_order, RULESETS
from .diff.differentiator import Differentiator
from .diff.postrules import DIFFRULES
from .simplify.rewriter import Simplifier


__all__ = [
    "Scope",
    "DifferentiationFunction",
    "builtin_scope",
]


logger = logging.getLogger(__name__)


class DifferentiationFunction(object):
    r"""Callable `d(expression, variable, order)` exposed in a Scope.

    The result of the Driver is simplified once more with the same rulesets.
    Consequently, `d(E, v, 0)` returns the simplified form of `E`.
    """
    def __init__(self, driver):
        ## The Driver computing the derivatives.
        self.driver = driver

    def __call__(self, expression, variable, order):
        if not isinstance(expression, str) or not isinstance(variable, str):
            raise TypeError("Expression and variable must be strings.")
        order = check_order(order)
        result = self.driver.differentiate_n(expression, variable, order)
        return self.driver.simplifier.simplify_text(result, self.driver.rulesets)


class Scope(object):
    r"""Namespace of named functions plus a ruleset registry."""
    def __init__(self, simplifier=None):
        ## Simplifier holding the rulesets of this scope.
        self.simplifier = simplifier or Simplifier()
        self._functions = dict()

    def add_function(self, name, func):
        r"""Make a callable available under `name`, replacing existing ones."""
        if not callable(func):
            raise TypeError("Function '%s' is not callable." % name)
        self._functions[name] = func

    def get_function(self, name):
        try:
            return self._functions[name]
        except KeyError:
            raise UnsupportedOperation("Unknown function '%s'" % name,
                                       operator=name)

    @property
    def function_names(self):
        return sorted(self._functions)

    def call(self, name, *args):
        r"""Call the function registered under `name` with `args`."""
        return self.get_function(name)(*args)

    def add_ruleset(self, ruleset, name=None):
        self.simplifier.add_ruleset(ruleset, name=name)

    def get_ruleset(self, name):
        return self.simplifier.get_ruleset(name)


def _create_builtin_scope():
    scope = Scope()
    scope.add_ruleset(DIFFRULES)
    driver = Driver(Differentiator(), scope.simplifier, RULESETS)
    scope.add_function('d', DifferentiationFunction(driver))
    logger.debug("Registered functions: %s; rulesets: %s",
                 ", ".join(scope.function_names),
                 ", ".join(scope.simplifier.ruleset_names))
    return scope


## Scope with the differentiation function `d` and the `diffrules` ruleset.
builtin_scope = _create_builtin_scope()
