#!/usr/bin/env python3

import unittest
import contextlib
import io
import logging

from testutils import SymdiffTestCase
from .__main__ import Main


class TestMain(SymdiffTestCase):
    def setUp(self):
        self.level = logging.getLogger().level

    def tearDown(self):
        logging.getLogger().setLevel(self.level)

    def run_main(self, *args):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = Main(*args).main()
        return code, out.getvalue().strip()

    def test_first_derivative(self):
        self.assertEqual(self.run_main("x^3", "x"), (0, "3*x^2"))

    def test_order(self):
        self.assertEqual(self.run_main("x^3", "x", "2"), (0, "6*x"))
        self.assertEqual(self.run_main("x^3", "x", "0"), (0, "x^3"))

    def test_raw(self):
        self.assertEqual(self.run_main("--raw", "x*x", "x"), (0, "1*x+x*1"))

    def test_verbose(self):
        self.assertEqual(self.run_main("-v", "x*x", "x"), (0, "2*x"))

    def test_usage(self):
        self.assertEqual(self.run_main(), (2, ""))
        self.assertEqual(self.run_main("-h"), (2, ""))
        self.assertEqual(self.run_main("a", "b", "c", "d"), (2, ""))

    def test_errors(self):
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self.run_main("x+", "x"), (2, ""))
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self.run_main("x", "x", "two"), (2, ""))
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self.run_main("x", "x", "-1"), (2, ""))
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self.run_main("f(x, y)", "x"), (2, ""))


if __name__ == '__main__':
    unittest.main()
