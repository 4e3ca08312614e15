r"""@package symdiff.simplify.rules

Rewrite rules and rulesets.

A rule consists of one or more alternative patterns, the matching flags (see
matching.Flags) and a replacement template. Rules are usually created from
declarative entries of the form

~~~.py
(patterns, flags, replacement)
~~~

where `patterns` is either a single pattern string or a list of
alternatives, each either a pattern string or a tuple
`(pattern_string, defaults)`. The `defaults` dictionary provides bindings
for placeholders not occurring in that alternative, e.g.

~~~.py
(["?x^$n * ?x^$m",
  ("?x * ?x^$m", {'n': 1}),
  ("?x^$n * ?x", {'m': 1})], 'acg', "?x^eval($n+$m)")
~~~

combines powers of the same base, also if one of the exponents is implicitly
`1`.

Replacement templates may call `eval(...)` to evaluate arithmetic on numeric
placeholders. Everything else in a template is copied, with placeholders
substituted by their bound subexpressions.

Rules and rulesets are immutable after construction.
"""

import numbers

from ..exprs.tree import Constant, UnaryOp, BinaryOp, FunctionCall
from ..exprs.tree import Placeholder, NumberPlaceholder, walk
from ..exprs.parser import parse
from .matching import Flags, match


__all__ = [
    "Rule",
    "Ruleset",
    "instantiate",
]


def _number_node(value):
    r"""Create a Constant (or negated Constant) node for a number."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if value < 0:
        return UnaryOp('-', Constant(-value))
    return Constant(value)


def _evaluate(node, bindings):
    r"""Numerically evaluate a template subtree of an `eval(...)` call."""
    if isinstance(node, Constant):
        return node.value
    if isinstance(node, (Placeholder, NumberPlaceholder)):
        bound = bindings[node.name]
        value = _constant_value(bound)
        if value is None:
            raise ValueError("Placeholder '%s' is bound to non-numeric %r"
                             % (node.name, bound))
        return value
    if isinstance(node, UnaryOp) and node.op == '-':
        return -_evaluate(node.child, bindings)
    if isinstance(node, BinaryOp):
        a = _evaluate(node.left, bindings)
        b = _evaluate(node.right, bindings)
        if node.op == '+':
            return a + b
        if node.op == '-':
            return a - b
        if node.op == '*':
            return a * b
        if node.op == '/':
            if (isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral)
                    and b != 0 and a % b == 0):
                return a // b
            return a / b
        if node.op == '^':
            return a ** b
    raise ValueError("Cannot evaluate %r numerically" % (node,))


def _constant_value(node):
    if isinstance(node, Constant):
        return node.value
    if isinstance(node, UnaryOp) and node.op == '-':
        value = _constant_value(node.child)
        return None if value is None else -value
    return None


def instantiate(template, bindings):
    r"""Substitute bindings into a replacement template.

    @param template
        Template tree, possibly containing placeholders and `eval()` calls.
    @param bindings
        Dictionary mapping placeholder names to nodes.
    """
    if isinstance(template, (Placeholder, NumberPlaceholder)):
        return bindings[template.name]
    if isinstance(template, FunctionCall):
        if template.name == 'eval' and len(template.args) == 1:
            return _number_node(_evaluate(template.args[0], bindings))
        return FunctionCall(template.name,
                            [instantiate(arg, bindings) for arg in template.args])
    if isinstance(template, UnaryOp):
        return UnaryOp(template.op, instantiate(template.child, bindings))
    if isinstance(template, BinaryOp):
        return BinaryOp(template.op, instantiate(template.left, bindings),
                        instantiate(template.right, bindings))
    return template


def _placeholder_names(tree):
    return set(node.name for node in walk(tree)
               if isinstance(node, (Placeholder, NumberPlaceholder)))


class Rule(object):
    r"""A single rewrite rule with one or more alternative patterns."""
    __slots__ = ("_patterns", "_flags", "_replacement", "_name")

    def __init__(self, patterns, flags, replacement, name=None):
        r"""Create a rule from already parsed trees.

        @param patterns
            List of tuples `(pattern_tree, defaults)` with `defaults` a
            dictionary of placeholder names to nodes.
        @param flags
            matching.Flags object or flags string like ``'acg'``.
        @param replacement
            Template tree.
        @param name
            Optional name used in log messages.
        """
        if isinstance(flags, str):
            flags = Flags.parse(flags)
        patterns = tuple((p, tuple(sorted(defaults.items())))
                         for p, defaults in patterns)
        if not patterns:
            raise ValueError("A rule needs at least one pattern.")
        needed = _placeholder_names(replacement)
        for pattern, defaults in patterns:
            available = _placeholder_names(pattern) | set(k for k, _ in defaults)
            if not needed <= available:
                raise ValueError(
                    "Replacement uses unbound placeholder(s) %s"
                    % ", ".join(sorted(needed - available))
                )
        object.__setattr__(self, "_patterns", patterns)
        object.__setattr__(self, "_flags", flags)
        object.__setattr__(self, "_replacement", replacement)
        object.__setattr__(self, "_name", name)

    def __setattr__(self, name, value):
        raise AttributeError("Rule objects are immutable")

    @classmethod
    def from_entry(cls, entry):
        r"""Create a rule from a declarative `(patterns, flags, replacement)` entry.

        An optional fourth element is used as the rule's name.
        """
        patterns, flags, replacement = entry[:3]
        name = entry[3] if len(entry) > 3 else None
        if isinstance(patterns, str):
            patterns = [patterns]
        parsed = []
        for alternative in patterns:
            if isinstance(alternative, str):
                alternative = (alternative, {})
            text, defaults = alternative
            defaults = dict((k, v if not isinstance(v, (numbers.Real, str))
                             else _default_node(v))
                            for k, v in defaults.items())
            parsed.append((parse(text, patterns=True), defaults))
        if name is None:
            name = patterns[0] if isinstance(patterns[0], str) else patterns[0][0]
        return cls(parsed, flags, parse(replacement, patterns=True), name=name)

    @property
    def name(self):
        r"""Name of the rule (by default its first pattern)."""
        return self._name

    @property
    def flags(self):
        return self._flags

    @property
    def patterns(self):
        r"""Tuple of the pattern trees of all alternatives."""
        return tuple(p for p, _ in self._patterns)

    @property
    def replacement(self):
        return self._replacement

    def match(self, tree):
        r"""Return the Match of the first matching alternative or `None`."""
        for pattern, defaults in self._patterns:
            result = match(pattern, tree, self._flags, dict(defaults))
            if result is not None:
                return result
        return None

    def apply(self, tree):
        r"""Apply the rule to the root of `tree`.

        @return The rewritten tree or `None` if the rule does not match.
        """
        result = self.match(tree)
        if result is None:
            return None
        return result.rebuild(instantiate(self._replacement, result.bindings))

    def __repr__(self):
        return "Rule(%r, '%s')" % (self._name, self._flags)


def _default_node(value):
    if isinstance(value, str):
        return parse(value)
    return _number_node(value)


class Ruleset(object):
    r"""Named, immutable, ordered collection of rules.

    Besides its rules, a ruleset may request that terms be collected into a
    canonical form (see canonical.collect()) as part of simplification.
    """
    __slots__ = ("_name", "_rules", "_collect_terms")

    def __init__(self, name, rules, collect_terms=False):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_rules", tuple(rules))
        object.__setattr__(self, "_collect_terms", bool(collect_terms))

    def __setattr__(self, name, value):
        raise AttributeError("Ruleset objects are immutable")

    @classmethod
    def from_entries(cls, name, entries, collect_terms=False):
        r"""Compile a ruleset from declarative rule entries.

        See Rule.from_entry() for the format of the entries.
        """
        return cls(name, [Rule.from_entry(e) for e in entries],
                   collect_terms=collect_terms)

    def extended(self, name, *others, **kw):
        r"""Return a new ruleset containing the rules of this and `others`.

        @param name
            Name of the new ruleset.
        @param *others
            Further Ruleset objects or iterables of Rule objects.
        @param collect_terms
            Keyword argument. Whether the new ruleset collects terms. Defaults
            to `True` if this or any of the other rulesets does.
        """
        rules = list(self._rules)
        collect = self._collect_terms
        for other in others:
            if isinstance(other, Ruleset):
                collect = collect or other.collect_terms
                rules.extend(other.rules)
            else:
                rules.extend(other)
        collect = kw.pop('collect_terms', collect)
        if kw:
            raise TypeError("Invalid parameters: %s" % ", ".join(kw.keys()))
        return Ruleset(name, rules, collect_terms=collect)

    @property
    def name(self):
        return self._name

    @property
    def rules(self):
        r"""Tuple of the Rule objects in order of priority."""
        return self._rules

    @property
    def collect_terms(self):
        return self._collect_terms

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __repr__(self):
        return "Ruleset(%r, %d rules%s)" % (
            self._name, len(self._rules),
            ", collect_terms" if self._collect_terms else ""
        )
