r"""@package symdiff.diff

Symbolic differentiation.

The differentiator module computes single, unsimplified derivatives. The
driver module builds higher derivatives on top of it by simplifying after
each differentiation, using the rules of the postrules module in addition to
the general purpose simplification rules.
"""

from .differentiator import Differentiator, differentiate
from .driver import Driver, differentiate_n
from .postrules import DIFFRULES
