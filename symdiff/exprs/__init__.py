r"""@package symdiff.exprs

Expression trees of the expression language.

Expressions are written in a small infix language, e.g. `x^2*sin(2*x)/ln(x)`.
The parser module turns such strings into trees of tree.Node objects and the
printer module turns trees back into strings. Everything else in the package
works on the trees only.
"""

from .tree import Node, Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from .tree import Placeholder, NumberPlaceholder
from .parser import parse
from .printer import render
