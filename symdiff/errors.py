r"""@package symdiff.errors

Exceptions and warnings raised by the symdiff package.

All errors derive from SymdiffError. Where an error also describes a bad
value passed in by the caller, it additionally derives from the matching
builtin exception (e.g. `ValueError`), so callers not aware of this module
can still catch it.
"""


__all__ = [
    "SymdiffError",
    "ParseError",
    "UnsupportedOperation",
    "ExpressionDepthError",
    "InvalidArgument",
    "UnknownRuleset",
    "SimplificationWarning",
]


class SymdiffError(Exception):
    """Base class for all errors raised in this package."""
    pass


class ParseError(SymdiffError, ValueError):
    """Raised for malformed expression text."""
    pass


class UnsupportedOperation(SymdiffError):
    r"""Raised for an expression node that no rule knows how to handle.

    The offending operator (or function/node name) and its arity are stored
    in the `operator` and `arity` attributes.
    """
    def __init__(self, msg, operator=None, arity=None):
        super(UnsupportedOperation, self).__init__(msg)
        ## Operator, function or node name that could not be handled.
        self.operator = operator
        ## Number of operands of the offending node.
        self.arity = arity


class ExpressionDepthError(UnsupportedOperation):
    """Raised when an expression tree is nested too deeply to process."""
    pass


class InvalidArgument(SymdiffError, ValueError):
    """Raised for an invalid differentiation order or variable name."""
    pass


class UnknownRuleset(SymdiffError, KeyError):
    """Raised when a simplification ruleset name is not registered."""
    def __str__(self):
        # KeyError would show the repr of the message.
        return str(self.args[0]) if self.args else ""


class SimplificationWarning(UserWarning):
    """Warning issued when simplification stops before reaching a fixed point."""
    pass
