r"""@package symdiff.exprs.tree

Syntax tree nodes of the expression language.

An expression such as `2*sin(x)^2 - y` is represented by a tree of the node
classes defined here:

~~~.py
BinaryOp('-',
         BinaryOp('*', Constant(2),
                       BinaryOp('^', FunctionCall('sin', [Variable('x')]),
                                     Constant(2))),
         Variable('y'))
~~~

Nodes are immutable value objects. Two nodes compare equal if they have the
same structure, which allows using them as dictionary keys and comparing the
result of a transformation with its input to detect changes.

Besides the nodes making up ordinary expressions, there are two node types
only valid inside rewrite rule patterns and templates: Placeholder (matches
any subexpression) and NumberPlaceholder (matches a numeric literal).
"""

import numbers


__all__ = [
    "Node",
    "Variable",
    "Constant",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "Placeholder",
    "NumberPlaceholder",
    "BINARY_OPERATORS",
    "is_number",
    "depth",
    "walk",
]


## Operators allowed in BinaryOp nodes.
BINARY_OPERATORS = ('+', '-', '*', '/', '^')


class Node(object):
    r"""Base class of all syntax tree nodes.

    Child classes define `__slots__` and implement _key(), which is used for
    equality, hashing and the representation.
    """
    __slots__ = ()

    def _key(self):
        raise NotImplementedError

    @property
    def children(self):
        r"""Tuple of direct child nodes (empty for leaves)."""
        return ()

    @property
    def arity(self):
        r"""Number of direct child nodes."""
        return len(self.children)

    def __setattr__(self, name, value):
        raise AttributeError("%s nodes are immutable" % type(self).__name__)

    def _init(self, **attrs):
        for name, value in attrs.items():
            object.__setattr__(self, name, value)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__,
                           ", ".join(repr(k) for k in self._key()))

    def __str__(self):
        from .printer import render
        return render(self)

    def __reduce__(self):
        return (type(self), self._key())


class Variable(Node):
    r"""Named variable (or named constant like `e` or `pi`)."""
    __slots__ = ("name",)

    def __init__(self, name):
        self._init(name=name)

    def _key(self):
        return (self.name,)


class Constant(Node):
    r"""Numeric literal, either an integer or a float."""
    __slots__ = ("value",)

    def __init__(self, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError("Constant value must be a real number, got %r"
                            % (value,))
        self._init(value=value)

    def _key(self):
        return (self.value,)


class UnaryOp(Node):
    r"""Unary operator applied to one child; the only operator is negation."""
    __slots__ = ("op", "child")

    def __init__(self, op, child):
        self._init(op=op, child=child)

    def _key(self):
        return (self.op, self.child)

    @property
    def children(self):
        return (self.child,)


class BinaryOp(Node):
    r"""Binary operator with order-significant left and right operands."""
    __slots__ = ("op", "left", "right")

    def __init__(self, op, left, right):
        self._init(op=op, left=left, right=right)

    def _key(self):
        return (self.op, self.left, self.right)

    @property
    def children(self):
        return (self.left, self.right)


class FunctionCall(Node):
    r"""Named function applied to a tuple of arguments.

    Ordinary expressions call functions of exactly one argument. Other
    arities are representable (and produced by the parser for input like
    `f(x, y)`) so that consumers can report them properly.
    """
    __slots__ = ("name", "args")

    def __init__(self, name, args):
        if isinstance(args, Node):
            args = (args,)
        self._init(name=name, args=tuple(args))

    def _key(self):
        return (self.name, self.args)

    @property
    def children(self):
        return self.args

    @property
    def arg(self):
        r"""The single argument of the call.

        Raises a `ValueError` if the call has a different number of arguments.
        """
        if len(self.args) != 1:
            raise ValueError("Function '%s' called with %d arguments."
                             % (self.name, len(self.args)))
        return self.args[0]


class Placeholder(Node):
    r"""Pattern placeholder matching any subexpression (written `?name`)."""
    __slots__ = ("name",)

    def __init__(self, name):
        self._init(name=name)

    def _key(self):
        return (self.name,)


class NumberPlaceholder(Node):
    r"""Pattern placeholder matching a numeric literal (written `$name`)."""
    __slots__ = ("name",)

    def __init__(self, name):
        self._init(name=name)

    def _key(self):
        return (self.name,)


def is_number(node, value=None):
    r"""Return whether `node` is a Constant (optionally of the given value)."""
    if not isinstance(node, Constant):
        return False
    return value is None or node.value == value


def walk(node):
    r"""Iterate over all nodes of a tree in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def depth(node):
    r"""Return the nesting depth of a tree (a single leaf has depth 1).

    This is computed iteratively and therefore safe to call on trees too deep
    for the recursive algorithms working on them.
    """
    result = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        result = max(result, level)
        stack.extend((child, level+1) for child in current.children)
    return result
