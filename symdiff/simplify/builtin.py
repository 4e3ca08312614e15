r"""@package symdiff.simplify.builtin

General purpose simplification rulesets.

Two rulesets are defined here:

    * `basic`: cheap local rewrites removing neutral elements, zeros, double
      negations and combining numeric literals.
    * `all`: the `basic` rules plus collection of terms into a canonical form
      through SymPy (see canonical.collect()).

Matching `0*?x` and the number collecting rules associatively can make the
rewriting loop on the sums and products produced by differentiation. These
rules are therefore constructed without the associative flag.
"""

from .rules import Ruleset


__all__ = [
    "BASIC_RULES",
    "BASIC",
    "ALL",
    "BUILTIN_RULESETS",
]


## Declarative entries of the `basic` ruleset.
BASIC_RULES = [
    ("1*?x", 'acg', "?x", "unitFactor"),
    ("?x^1", '', "?x", "unitPower"),
    ("?x/1", '', "?x", "unitDenominator"),
    ("0*?x", 'cg', "0", "zeroFactor"),
    ("0+?x", 'acg', "?x", "zeroTerm"),
    ("?x-0", '', "?x", "zeroSubtrahend"),
    ("0-?x", '', "-?x", "zeroMinuend"),
    ("?x^0", '', "1", "zeroPower"),
    ("0/?x", '', "0", "zeroNumerator"),
    ("-(-?x)", '', "?x", "doubleNegation"),
    ("-1*?x", 'acg', "-?x", "negativeOneFactor"),
    ("?x+(-?y)", 'c', "?x-?y", "plusNegative"),
    ("?x-(-?y)", '', "?x+?y", "minusNegative"),
    ("$n+$m", 'c', "eval($n+$m)", "collectNumbers"),
    ("$n-$m", '', "eval($n-$m)", "collectNumbers"),
    ("$n*$m", 'c', "eval($n*$m)", "collectNumbers"),
]


BASIC = Ruleset.from_entries('basic', BASIC_RULES)
ALL = BASIC.extended('all', collect_terms=True)


## Rulesets available in every Simplifier by default.
BUILTIN_RULESETS = {
    BASIC.name: BASIC,
    ALL.name: ALL,
}
