import io
import math
import unittest
from contextlib import redirect_stderr, redirect_stdout

from pumastats.utils import ieee_divide, print_debug, print_error, print_line, round_half_up


class TestIeeeDivide(unittest.TestCase):

    def test_regular_division(self):
        self.assertEqual(ieee_divide(3, 4), 0.75)
        self.assertIsInstance(ieee_divide(4, 2), float)

    def test_zero_by_zero(self):
        self.assertTrue(math.isnan(ieee_divide(0, 0)))

    def test_positive_by_zero(self):
        self.assertEqual(ieee_divide(2, 0), math.inf)

    def test_negative_by_zero(self):
        self.assertEqual(ieee_divide(-2, 0), -math.inf)


class TestRoundHalfUp(unittest.TestCase):

    def test_ties_round_away_from_zero(self):
        self.assertEqual(round_half_up(90.625), 90.63)
        self.assertEqual(round_half_up(15.625), 15.63)
        self.assertEqual(round_half_up(-0.125), -0.13)

    def test_regular_values(self):
        self.assertEqual(round_half_up(62.5), 62.5)
        self.assertEqual(round_half_up(66.66666666666667), 66.67)
        self.assertEqual(round_half_up(30.000000000000004), 30.0)

    def test_non_finite_values_unchanged(self):
        self.assertTrue(math.isnan(round_half_up(math.nan)))
        self.assertEqual(round_half_up(math.inf), math.inf)
        self.assertEqual(round_half_up(-math.inf), -math.inf)


class TestPrintSinks(unittest.TestCase):

    def test_print_line(self):
        output = io.StringIO()
        with redirect_stdout(output):
            print_line("Puma Stats: puma.workers=1 ")
        self.assertEqual(output.getvalue(), "Puma Stats: puma.workers=1 \n")

    def test_print_debug(self):
        output = io.StringIO()
        with redirect_stdout(output):
            print_debug("statsd: notify statsd")
        self.assertIn("statsd: notify statsd", output.getvalue())

    def test_print_error(self):
        output = io.StringIO()
        errors = io.StringIO()
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            error = e
        with redirect_stdout(output), redirect_stderr(errors):
            print_error(error, None, "! Puma Stats Logger: logging stats failed")
        self.assertIn("! Puma Stats Logger: logging stats failed", output.getvalue())
        self.assertIn("boom", output.getvalue())
        self.assertNotIn("Context", output.getvalue())
        self.assertIn("Traceback", errors.getvalue())

    def test_print_error_with_context(self):
        output = io.StringIO()
        with redirect_stdout(output), redirect_stderr(io.StringIO()):
            print_error(ValueError("bad"), {"cycle": 3}, "label")
        self.assertIn("Context: {'cycle': 3}", output.getvalue())


if __name__ == "__main__":
    unittest.main()
