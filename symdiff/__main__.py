#!/usr/bin/env python3
r"""Command line interface.

Usage:

    python -m symdiff EXPRESSION VARIABLE [ORDER] [--raw] [-v]

Prints the simplified ORDER'th (default: first) derivative of EXPRESSION
w.r.t. VARIABLE. With `--raw`, the unsimplified first derivative is printed
instead. Use `-v` for more verbose logging output.
"""

import sys
import logging

from .errors import SymdiffError
from .diff.differentiator import differentiate
from .diff.driver import differentiate_n


class Main(object):
    def __init__(self, *args):
        self.args = list(args)

    def pop_flag(self, *flags):
        found = False
        for flag in flags:
            while flag in self.args:
                self.args.remove(flag)
                found = True
        return found

    def usage(self):
        print(__doc__.strip(), file=sys.stderr)
        return 2

    def main(self):
        logging.basicConfig(format="%(levelname)s:%(name)s: %(message)s")
        if self.pop_flag('-v', '--verbose'):
            logging.getLogger().setLevel(logging.INFO)
        if self.pop_flag('-vv'):
            logging.getLogger().setLevel(logging.DEBUG)
        if self.pop_flag('-h', '--help'):
            return self.usage()
        raw = self.pop_flag('--raw')
        if len(self.args) not in (2, 3):
            return self.usage()
        expression, variable = self.args[:2]
        order = self.args[2] if len(self.args) == 3 else "1"
        logging.info("Differentiating %s w.r.t. %s", expression, variable)
        try:
            if raw:
                result = differentiate(expression, variable)
            else:
                try:
                    order = int(order)
                except ValueError:
                    logging.error("Order must be an integer, got '%s'", order)
                    return 2
                result = differentiate_n(expression, variable, order)
        except SymdiffError as e:
            logging.error("%s", e)
            return 2
        print(result)
        return 0


def run():
    sys.exit(Main(*sys.argv[1:]).main())


if __name__ == "__main__":
    run()
