r"""@package symdiff

Symbolic differentiation of expressions.

Expressions are given as strings in a small infix language (see
exprs.parser) and differentiated symbolically w.r.t. one variable. Two entry
points are provided:

    * diff.differentiate() computes one unsimplified derivative by applying
      the rules of calculus to the syntax tree.
    * diff.differentiate_n() computes the n'th derivative, simplifying the
      expression after each differentiation to keep it small.

For use from within expressions, the function `d(expression, variable, n)`
is registered in scope.builtin_scope.

@b Examples

~~~.py
from symdiff import differentiate, differentiate_n
differentiate("x*x", "x")             # -> '1*x+x*1'
differentiate_n("x*x", "x", 1)        # -> '2*x'
differentiate_n("e^x", "x", 3)        # -> 'e^x'
~~~
"""

from .errors import ParseError, UnsupportedOperation, InvalidArgument
from .diff import differentiate, differentiate_n
