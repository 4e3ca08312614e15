r"""@package symdiff.simplify.matching

Pattern matching of expression trees.

Patterns are expression trees which may contain the placeholders
`?name` (tree.Placeholder, matching any subexpression) and `$name`
(tree.NumberPlaceholder, matching a numeric literal). A placeholder name used
more than once has to match equal subexpressions each time.

How the operands of `+` and `*` are matched is controlled by a set of Flags:

    * `associative`: nested sums (resp. products) are flattened into one
      sequence of terms before matching, e.g. `a*b*c` is seen as the three
      factors `a`, `b` and `c` regardless of how it is grouped. A pattern with
      fewer terms than the expression can then match groups of terms, e.g.
      `?x*?y` matches `a*b*c` with `x=a` and `y=b*c`.
    * `commutative`: the order of terms is irrelevant.
    * `allow_other_terms`: the pattern (if it is a sum or product) only needs
      to match some of the terms. The remaining terms are reported in the
      returned Match object and put back next to the replacement.

Without any flags, patterns match literally.
"""

from collections import namedtuple
import logging
import itertools

from ..exprs.tree import Variable, Constant, UnaryOp, BinaryOp, FunctionCall
from ..exprs.tree import Placeholder, NumberPlaceholder


__all__ = [
    "Flags",
    "Match",
    "match",
    "terms",
    "build_sequence",
]


logger = logging.getLogger(__name__)


## Operators treated specially by associative and commutative matching.
AC_OPERATORS = ('+', '*')

# Upper limit on the number of ways to distribute the terms of a sequence
# onto the terms of a pattern. Beyond it, commutative matching only considers
# groups of adjacent terms (in any order of the groups).
_MAX_GROUPINGS = 4096


class Flags(namedtuple('Flags', 'associative commutative allow_other_terms')):
    r"""Matching mode of a rewrite rule.

    Construct from the short notation with Flags.parse(), e.g.
    `Flags.parse('acg')`.
    """
    __slots__ = ()

    def __new__(cls, associative=False, commutative=False,
                allow_other_terms=False):
        return super(Flags, cls).__new__(cls, associative, commutative,
                                         allow_other_terms)

    @classmethod
    def parse(cls, text):
        r"""Create flags from a string of the letters `a`, `c` and `g`."""
        unknown = set(text) - set('acg')
        if unknown:
            raise ValueError("Unknown matching flags: %s"
                             % ", ".join(sorted(unknown)))
        return cls('a' in text, 'c' in text, 'g' in text)

    def __str__(self):
        return "".join(c for c, on in zip('acg', self) if on)


## Flags for a literal match.
LITERAL = Flags()


class Match(object):
    r"""Result of a successful match.

    Contains the placeholder `bindings` and, if other terms were allowed, the
    operator and terms of the matched sequence that were not part of the
    match.
    """
    def __init__(self, bindings, op=None, before=(), after=()):
        ## Dictionary mapping placeholder names to the matched nodes.
        self.bindings = bindings
        ## Operator of the sequence the unmatched terms belong to.
        self.op = op
        ## Unmatched terms in front of the first matched term.
        self.before = tuple(before)
        ## Unmatched terms after the first matched term.
        self.after = tuple(after)

    @property
    def rest(self):
        r"""All unmatched terms."""
        return self.before + self.after

    def rebuild(self, replacement):
        r"""Put the unmatched terms back around the `replacement` node."""
        if not self.rest:
            return replacement
        return build_sequence(self.op, self.before + (replacement,) + self.after)


def terms(node, op, flatten=True):
    r"""Return the operands of a sequence of `op` operations.

    With `flatten=True`, the complete left- or right-nested chain is
    flattened, e.g. `(a*b)*(c*d)` gives `(a, b, c, d)` for `op='*'`.
    """
    if not isinstance(node, BinaryOp) or node.op != op:
        return (node,)
    if not flatten:
        return (node.left, node.right)
    result = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, BinaryOp) and current.op == op:
            stack.append(current.right)
            stack.append(current.left)
        else:
            result.append(current)
    return tuple(result)


def build_sequence(op, operands):
    r"""Combine operands with `op` into a left-nested chain."""
    operands = list(operands)
    result = operands[0]
    for operand in operands[1:]:
        result = BinaryOp(op, result, operand)
    return result


def match(pattern, tree, flags=LITERAL, bindings=None):
    r"""Match a pattern against a tree.

    @param pattern
        Pattern tree, possibly containing placeholders.
    @param tree
        The expression tree to match.
    @param flags
        Flags object controlling the matching mode.
    @param bindings
        Optional dictionary of already known bindings. It is not modified.

    @return A Match object or `None` if the pattern does not match.
    """
    bindings = dict(bindings or {})
    if (flags.allow_other_terms and isinstance(pattern, BinaryOp)
            and pattern.op in AC_OPERATORS and isinstance(tree, BinaryOp)
            and tree.op == pattern.op):
        for result in _match_sequence(pattern, tree, flags, bindings,
                                      allow_rest=True):
            return result
        return None
    for result in _match(pattern, tree, flags, bindings):
        return Match(result)
    return None


def _bind(name, node, bindings):
    bound = bindings.get(name)
    if bound is None:
        result = dict(bindings)
        result[name] = node
        return result
    if bound == node:
        return bindings
    return None


def _match(pattern, node, flags, bindings):
    r"""Generate all binding dictionaries for which `pattern` matches `node`."""
    if isinstance(pattern, Placeholder):
        result = _bind(pattern.name, node, bindings)
        if result is not None:
            yield result
    elif isinstance(pattern, NumberPlaceholder):
        if isinstance(node, Constant):
            result = _bind(pattern.name, node, bindings)
            if result is not None:
                yield result
    elif isinstance(pattern, Variable):
        if isinstance(node, Variable) and node.name == pattern.name:
            yield bindings
    elif isinstance(pattern, Constant):
        if isinstance(node, Constant) and node.value == pattern.value:
            yield bindings
    elif isinstance(pattern, UnaryOp):
        if isinstance(node, UnaryOp) and node.op == pattern.op:
            for result in _match(pattern.child, node.child, flags, bindings):
                yield result
    elif isinstance(pattern, FunctionCall):
        if (isinstance(node, FunctionCall) and node.name == pattern.name
                and len(node.args) == len(pattern.args)):
            for result in _match_all(pattern.args, node.args, flags, bindings):
                yield result
    elif isinstance(pattern, BinaryOp):
        if not isinstance(node, BinaryOp) or node.op != pattern.op:
            return
        if pattern.op in AC_OPERATORS and (flags.associative or flags.commutative):
            for result in _match_sequence(pattern, node, flags, bindings,
                                          allow_rest=False):
                yield result.bindings
        else:
            for result in _match_all((pattern.left, pattern.right),
                                     (node.left, node.right), flags, bindings):
                yield result
    else:
        raise TypeError("Invalid pattern node: %r" % (pattern,))


def _match_all(patterns, nodes, flags, bindings):
    r"""Match a list of patterns one by one against a list of nodes."""
    if not patterns:
        yield bindings
        return
    for result in _match(patterns[0], nodes[0], flags, bindings):
        for final in _match_all(patterns[1:], nodes[1:], flags, result):
            yield final


def _match_sequence(pattern, node, flags, bindings, allow_rest):
    r"""Match the terms of a sum or product, generating Match objects."""
    op = pattern.op
    pterms = terms(pattern, op, flatten=flags.associative)
    nterms = terms(node, op, flatten=flags.associative)
    for groups in _groupings(len(nterms), len(pterms), flags, allow_rest):
        operands = [build_sequence(op, [nterms[i] for i in group])
                    for group in groups]
        for result in _match_all(pterms, operands, flags, bindings):
            used = set(i for group in groups for i in group)
            first = min(used)
            before = [t for i, t in enumerate(nterms) if i < first and i not in used]
            after = [t for i, t in enumerate(nterms) if i > first and i not in used]
            yield Match(result, op=op, before=before, after=after)


def _groupings(n, k, flags, allow_rest):
    r"""Generate ways of assigning `n` sequence terms to `k` pattern terms.

    Each generated item is a list of `k` tuples of term indices, the i'th
    tuple containing the terms to be matched by the i'th pattern term.
    """
    if k > n:
        return
    if allow_rest:
        if flags.commutative:
            for perm in itertools.permutations(range(n), k):
                yield [(i,) for i in perm]
        else:
            for start in range(n - k + 1):
                yield [(start + j,) for j in range(k)]
        return
    if n == k or not flags.associative:
        if flags.commutative:
            for perm in itertools.permutations(range(n)):
                yield [(i,) for i in perm]
        else:
            yield [(i,) for i in range(n)]
        return
    # Associative: distribute all n terms onto k non-empty groups.
    if not flags.commutative:
        for groups in _contiguous_groupings(n, k):
            yield groups
        return
    if k ** n <= _MAX_GROUPINGS:
        for labels in itertools.product(range(k), repeat=n):
            groups = [tuple(i for i in range(n) if labels[i] == j) for j in range(k)]
            if all(groups):
                yield groups
        return
    logger.debug("Too many ways to group %d terms into %d; "
                 "matching contiguous groups only", n, k)
    candidates = (list(order) for groups in _contiguous_groupings(n, k)
                  for order in itertools.permutations(groups))
    for groups in itertools.islice(candidates, _MAX_GROUPINGS):
        yield groups


def _contiguous_groupings(n, k):
    r"""Generate the ways of cutting `n` terms into `k` runs of terms."""
    for cuts in itertools.combinations(range(1, n), k - 1):
        bounds = (0,) + cuts + (n,)
        yield [tuple(range(bounds[j], bounds[j+1])) for j in range(k)]
