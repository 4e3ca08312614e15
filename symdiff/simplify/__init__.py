r"""@package symdiff.simplify

Rule based simplification of expression trees.

Rewrite rules are written declaratively as pattern/replacement pairs in the
expression language (see rules.Rule), grouped into named, immutable
rulesets (rules.Ruleset) and applied by a rewriter.Simplifier. Collection of
like terms is delegated to SymPy (see canonical).
"""

from .matching import Flags, Match, match
from .rules import Rule, Ruleset
from .rewriter import Simplifier
from .builtin import BUILTIN_RULESETS
