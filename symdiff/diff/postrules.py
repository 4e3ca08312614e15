r"""@package symdiff.diff.postrules

Simplification rules for the results of differentiation.

The Differentiator produces characteristic debris like `ln(e)`, quotients of
quotients and products of powers of the same base. The rules here clean
these up and are used together with the general purpose `all` ruleset
between differentiation passes. They are registered under the name
`diffrules`.
"""

from ..simplify.rules import Ruleset


__all__ = [
    "POST_DIFFERENTIATION_RULES",
    "DIFFRULES",
]


## Declarative entries `(patterns, flags, replacement)`, see
## simplify.rules.Rule.from_entry().
POST_DIFFERENTIATION_RULES = [
    # ln(e) = 1 and ln(x^y) = y ln(x)
    ("ln(e)", '', "1"),
    ("ln(?x^?y)", '', "?y*ln(?x)"),
    # Quotients.
    ("?x/?x", 'acg', "1"),
    ("?x/(?y/?z)", 'acg', "(?x*?z)/?y"),
    ("(?x/?y)/?z", 'acg', "?x/(?y*?z)"),
    ("(?x/?y)*(?z/?w)", 'acg', "(?x*?z)/(?y*?w)"),
    # Powers with numeric exponents, one of which may be an implicit 1.
    (["?x^$n/?x^$m",
      ("?x/?x^$m", {'n': 1}),
      ("?x^$n/?x", {'m': 1})], 'acg', "?x^eval($n-$m)"),
    (["?x^$n*?x^$m",
      ("?x*?x^$m", {'n': 1}),
      ("?x^$n*?x", {'m': 1})], 'acg', "?x^eval($n+$m)"),
    # a x^(-n) = a/x^n
    (["?rest*?x^(-$n)",
      ("?x^(-$n)", {'rest': 1})], 'acg', "?rest/?x^$n"),
    # Fractions of variables.
    ("?x*1/?y", 'acg', "?x/?y"),
    # a*(1/b) = a/b, also for a factor x^(-n) already rewritten to 1/x^n
    ("?x*(1/?y)", 'ac', "?x/?y"),
    (["(?x*?y)/?x", "(?y*?x)/?x"], 'ag', "?y"),
    (["?x/(?x*?y)", "?x/(?y*?x)"], 'ag', "1/?y"),
]


DIFFRULES = Ruleset.from_entries('diffrules', POST_DIFFERENTIATION_RULES)
