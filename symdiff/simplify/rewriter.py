r"""@package symdiff.simplify.rewriter

Rule based simplification of expression trees.

The Simplifier holds a registry of named rules.Ruleset objects. Simplifying
a tree with a selection of these rulesets works as follows:

    1. All rules of the selected rulesets are applied to the tree until no
       rule matches anymore. Each pass traverses the tree bottom-up, and at
       each node the first matching rule (in ruleset order) is applied.
    2. If any of the selected rulesets requests it, terms are collected by
       canonical.collect() and step 1 is repeated on the result.

The number of passes in step 1 is limited by `max_passes`. If the limit is
reached, a SimplificationWarning is issued and the tree as simplified so far
is returned (it is still equivalent to the input).
"""

import logging
import warnings

from ..errors import UnknownRuleset, SimplificationWarning
from ..errors import UnsupportedOperation, ExpressionDepthError
from ..exprs.tree import UnaryOp, BinaryOp, FunctionCall, depth
from ..exprs.parser import parse
from ..exprs.printer import render
from .builtin import BUILTIN_RULESETS
from .canonical import collect
from .rules import Ruleset


__all__ = [
    "Simplifier",
]


logger = logging.getLogger(__name__)


class Simplifier(object):
    r"""Apply named rulesets to expression trees.

    Rulesets are registered once (typically at startup) via add_ruleset() and
    are immutable, so a Simplifier can be used from several threads once its
    registry is complete.
    """

    ## Default maximum number of rewrite passes over the tree.
    max_passes = 100

    ## Default maximum number of consecutive rule applications at one node
    ## within a single pass.
    max_rule_applications = 50

    ## Default maximum depth of trees to simplify.
    max_depth = 250

    def __init__(self, rulesets=None, max_passes=None,
                 max_rule_applications=None, max_depth=None):
        r"""Create a simplifier.

        @param rulesets
            Iterable of Ruleset objects to register in addition to the
            built-in `basic` and `all` rulesets.
        @param max_passes
            Maximum number of passes over the tree before giving up on
            reaching a fixed point. Default is the class attribute.
        @param max_rule_applications
            Maximum number of rules applied to one node in one pass.
        @param max_depth
            Trees deeper than this are rejected with an ExpressionDepthError.
        """
        if max_passes is not None:
            self.max_passes = max_passes
        if max_rule_applications is not None:
            self.max_rule_applications = max_rule_applications
        if max_depth is not None:
            self.max_depth = max_depth
        self._rulesets = dict(BUILTIN_RULESETS)
        for ruleset in rulesets or ():
            self.add_ruleset(ruleset)

    def add_ruleset(self, ruleset, name=None):
        r"""Register a ruleset under its own (or the given) name."""
        if not isinstance(ruleset, Ruleset):
            raise TypeError("Expected a Ruleset, got %r" % (ruleset,))
        self._rulesets[name or ruleset.name] = ruleset

    def get_ruleset(self, name):
        r"""Return the ruleset registered under `name`."""
        try:
            return self._rulesets[name]
        except KeyError:
            raise UnknownRuleset("Unknown ruleset '%s'" % name)

    @property
    def ruleset_names(self):
        r"""Sorted list of registered ruleset names."""
        return sorted(self._rulesets)

    def simplify(self, tree, rulesets=('all',)):
        r"""Simplify a tree using the rulesets with the given names.

        @param tree
            The expression tree to simplify.
        @param rulesets
            Names of the rulesets to use. A single string is interpreted as
            one name.
        """
        if isinstance(rulesets, str):
            rulesets = (rulesets,)
        selected = [self.get_ruleset(name) for name in rulesets]
        rules = tuple(rule for ruleset in selected for rule in ruleset)
        self._check_depth(tree)
        tree = self._rewrite(tree, rules)
        if any(ruleset.collect_terms for ruleset in selected):
            try:
                collected = collect(tree)
            except UnsupportedOperation as e:
                logger.debug("Not collecting terms of %s: %s", render(tree), e)
            else:
                tree = self._rewrite(collected, rules)
        return tree

    def simplify_text(self, text, rulesets=('all',)):
        r"""Parse, simplify and render an expression string."""
        return render(self.simplify(parse(text), rulesets))

    def _check_depth(self, tree):
        tree_depth = depth(tree)
        if tree_depth > self.max_depth:
            raise ExpressionDepthError(
                "Expression nested too deeply (depth %d > %d)"
                % (tree_depth, self.max_depth)
            )

    def _rewrite(self, tree, rules):
        if not rules:
            return tree
        for i in range(self.max_passes):
            result = self._pass(tree, rules)
            if result == tree:
                logger.debug("Simplification converged after %d pass(es)", i+1)
                return result
            tree = result
        warnings.warn("Simplification did not converge within %d passes."
                      % self.max_passes, SimplificationWarning)
        return tree

    def _pass(self, node, rules):
        r"""Simplify the children of `node`, then apply rules to the node."""
        if isinstance(node, UnaryOp):
            node = UnaryOp(node.op, self._pass(node.child, rules))
        elif isinstance(node, BinaryOp):
            node = BinaryOp(node.op, self._pass(node.left, rules),
                            self._pass(node.right, rules))
        elif isinstance(node, FunctionCall):
            node = FunctionCall(node.name,
                                [self._pass(arg, rules) for arg in node.args])
        for _ in range(self.max_rule_applications):
            for rule in rules:
                result = rule.apply(node)
                if result is not None and result != node:
                    if logger.isEnabledFor(logging.DEBUG):
                        logger.debug("Rule %s: %s -> %s", rule.name,
                                     render(node), render(result))
                    node = result
                    break
            else:
                break
        return node
