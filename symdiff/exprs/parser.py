r"""@package symdiff.exprs.parser

Parser turning expression strings into trees.

The grammar is built with PLY (lex/yacc). Operator precedence, from lowest
to highest:

    + -        (binary, left associative)
    * /        (left associative)
    -          (unary negation)
    ^          (right associative)

so `-x^2` means `-(x^2)` and `2^3^2` means `2^(3^2)`. Names may end in any
number of apostrophes, which is how derivatives of unknown functions are
written (e.g. `f''(x)`).

Rewrite rule patterns additionally use the placeholders `?name` (any
subexpression) and `$name` (a numeric literal). These are only accepted when
calling parse() with `patterns=True`.
"""

import threading

from ply import lex, yacc

from ..errors import ParseError
from .tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from .tree import Placeholder, NumberPlaceholder, walk


__all__ = [
    "parse",
]


#=============================================================================
# tokens

literals = ['+', '-', '*', '/', '^', '(', ')', ',']
t_ignore = " \t\r\n"

tokens = (
    "NUMBER",
    "NAME",
    "PLACEHOLDER",
    "NUMBER_PLACEHOLDER",
)


def t_NUMBER(t):
    r"(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?"
    if ("." not in t.value and
            "e" not in t.value and
            "E" not in t.value):
        t.value = int(t.value)
    else:
        t.value = float(t.value)
    return t


def t_NAME(t):
    r"[A-Za-z_][A-Za-z0-9_]*'*"
    return t


def t_PLACEHOLDER(t):
    r"\?[A-Za-z_][A-Za-z0-9_]*"
    t.value = t.value[1:]
    return t


def t_NUMBER_PLACEHOLDER(t):
    r"\$[A-Za-z_][A-Za-z0-9_]*"
    t.value = t.value[1:]
    return t


def t_error(t):
    raise ParseError("Unexpected character '%s' at position %d"
                     % (t.value[0], t.lexpos))


#=============================================================================
# grammar

precedence = (
    ('left', '+', '-'),
    ('left', '*', '/'),
    ('right', 'UMINUS', 'UPLUS'),
    ('right', '^'),
)


def p_expression_binop(p):
    """
    expression : expression '+' expression
               | expression '-' expression
               | expression '*' expression
               | expression '/' expression
               | expression '^' expression
    """
    p[0] = BinaryOp(p[2], p[1], p[3])


def p_expression_uminus(p):
    """
    expression : '-' expression %prec UMINUS
    """
    p[0] = UnaryOp('-', p[2])


def p_expression_uplus(p):
    """
    expression : '+' expression %prec UPLUS
    """
    p[0] = p[2]


def p_expression_group(p):
    """
    expression : '(' expression ')'
    """
    p[0] = p[2]


def p_expression_number(p):
    """
    expression : NUMBER
    """
    p[0] = Constant(p[1])


def p_expression_name(p):
    """
    expression : NAME
    """
    p[0] = Variable(p[1])


def p_expression_call(p):
    """
    expression : NAME '(' arguments ')'
    """
    p[0] = FunctionCall(p[1], p[3])


def p_arguments(p):
    """
    arguments : expression
              | arguments ',' expression
    """
    if len(p) == 2:
        p[0] = [p[1]]
    else:
        p[0] = p[1] + [p[3]]


def p_expression_placeholder(p):
    """
    expression : PLACEHOLDER
    """
    p[0] = Placeholder(p[1])


def p_expression_number_placeholder(p):
    """
    expression : NUMBER_PLACEHOLDER
    """
    p[0] = NumberPlaceholder(p[1])


def p_error(p):
    if p:
        raise ParseError("Syntax error at '%s' (position %d)"
                         % (p.value, p.lexpos))
    raise ParseError("Unexpected end of expression")


_lexer = lex.lex(optimize=False)
_parser = yacc.yacc(debug=False, write_tables=False,
                    errorlog=yacc.NullLogger())

# The PLY lexer and parser objects keep state while parsing.
_lock = threading.Lock()


def parse(text, patterns=False):
    r"""Parse an expression string into a syntax tree.

    @param text
        The expression string, e.g. ``"x^2*sin(x)"``.
    @param patterns
        Whether the placeholders `?name` and `$name` of rewrite rule patterns
        are allowed. Default is `False`.

    @return The root node of the tree.

    @b Raises

    ParseError for malformed input, including empty input and placeholders
    used in ordinary expressions.
    """
    if not isinstance(text, str):
        raise ParseError("Expression must be a string, got %r" % (text,))
    if not text.strip():
        raise ParseError("Empty expression")
    with _lock:
        tree = _parser.parse(text, lexer=_lexer)
    if not patterns:
        for node in walk(tree):
            if isinstance(node, (Placeholder, NumberPlaceholder)):
                raise ParseError("Placeholder '%s' not allowed in expression "
                                 "'%s'" % (node.name, text))
    return tree
