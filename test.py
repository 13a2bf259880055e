import unittest
import io
import logging
import os
import random
import shutil
import tempfile
from unittest.mock import MagicMock, patch

from kmp import build_failure_function, contains, count_matches, iter_matches, search
from display import context_snippet, format_lps, format_results, highlight
from benchmark import (
    BenchmarkResult,
    format_benchmark,
    generate_text,
    growth_ratios,
    is_linear,
    run_benchmark,
    time_search,
)
from verification import VerificationCase, run_verification, verify_case, format_outcome
from pdfreader import parse_pdf_to_pages_text, search_pages
from logging_config import setup_logging
import main


def naive_positions(text, pattern):
    m = len(pattern)
    return [i for i in range(len(text) - m + 1) if text[i:i + m] == pattern]

# --- Test Cases ---

class TestFailureFunction(unittest.TestCase):
    """Tests for the LPS (failure function) construction."""

    def test_known_tables(self):
        self.assertEqual(build_failure_function("ABABCABAB"), [0, 0, 1, 2, 0, 1, 2, 3, 4])
        self.assertEqual(build_failure_function("AAAA"), [0, 1, 2, 3])
        self.assertEqual(build_failure_function("ABCDE"), [0, 0, 0, 0, 0])
        self.assertEqual(build_failure_function("A"), [0])
        self.assertEqual(build_failure_function("AABAACAABAA"), [0, 1, 0, 1, 2, 0, 1, 2, 3, 4, 5])

    def test_empty_and_missing_pattern(self):
        """Building on an empty pattern is a no-op rather than an error."""
        self.assertEqual(build_failure_function(""), [])
        self.assertEqual(build_failure_function(None), [])

    def test_invariants_hold(self):
        rng = random.Random(7)
        for _ in range(200):
            pattern = "".join(rng.choice("ab") for _ in range(rng.randint(1, 20)))
            lps = build_failure_function(pattern)
            self.assertEqual(len(lps), len(pattern))
            self.assertEqual(lps[0], 0)
            for i in range(1, len(lps)):
                self.assertTrue(0 <= lps[i] <= i)
                self.assertLessEqual(lps[i], lps[i - 1] + 1)
                # lps[i] really is the longest proper prefix that is also a suffix
                prefix = pattern[:i + 1]
                longest = max(k for k in range(i + 1) if prefix[:k] == prefix[i + 1 - k:])
                self.assertEqual(lps[i], longest)

    def test_bytes_and_lists(self):
        self.assertEqual(build_failure_function(b"ABAB"), [0, 0, 1, 2])
        self.assertEqual(build_failure_function([1, 2, 1, 2, 1]), [0, 0, 1, 2, 3])

    def test_deterministic(self):
        self.assertEqual(build_failure_function("ABACABA"), build_failure_function("ABACABA"))


class TestSearch(unittest.TestCase):
    """Tests for the scanner."""

    def test_short_string_match(self):
        self.assertEqual(search("ABABDABACDABABCABAB", "ABABCABAB"), [10])

    def test_multiple_matches(self):
        self.assertEqual(search("AAABAAABAAAB", "AAAB"), [0, 4, 8])

    def test_overlapping_matches(self):
        self.assertEqual(search("AAAA", "AA"), [0, 1, 2])
        self.assertEqual(len(search("A" * 10, "AAA")), 8)
        self.assertEqual(search("ABABABAB", "ABAB"), [0, 2, 4])
        self.assertEqual(search("AABAACAABAABAACAABA", "AABAACAABA"), [0, 9])

    def test_exact_match(self):
        self.assertEqual(search("match", "match"), [0])
        self.assertEqual(search("exact match", "exact match"), [0])

    def test_single_character_pattern(self):
        self.assertEqual(search("abcabc", "a"), [0, 3])
        self.assertEqual(search("aaaaa", "a"), [0, 1, 2, 3, 4])

    def test_various_counts(self):
        cases = [
            ("ABABCABABA", "ABA", 3),
            ("AAAAAA", "AA", 5),
            ("ABCDEFG", "XYZ", 0),
            ("hello hello hello", "hello", 3),
            ("test", "test", 1),
            ("abcabc", "abc", 2),
        ]
        for text, pattern, expected in cases:
            with self.subTest(text=text, pattern=pattern):
                self.assertEqual(len(search(text, pattern)), expected)

    def test_medium_text(self):
        text = ("The algorithm is efficient. This algorithm works well. "
                "Algorithm design is important for algorithm performance.")
        self.assertEqual(search(text, "algorithm"), [4, 33, 89])

    def test_degenerate_inputs_give_empty_result(self):
        """Missing, empty or oversized patterns never raise."""
        self.assertEqual(search(None, "pattern"), [])
        self.assertEqual(search("text", None), [])
        self.assertEqual(search(None, None), [])
        self.assertEqual(search("text", ""), [])
        self.assertEqual(search("", ""), [])
        self.assertEqual(search("", "a"), [])
        self.assertEqual(search("short", "very long pattern"), [])
        self.assertEqual(search("hello world", "xyz"), [])

    def test_agrees_with_naive_search(self):
        rng = random.Random(42)
        for _ in range(300):
            text = "".join(rng.choice("ab") for _ in range(rng.randint(0, 40)))
            pattern = "".join(rng.choice("ab") for _ in range(rng.randint(1, 5)))
            with self.subTest(text=text, pattern=pattern):
                self.assertEqual(search(text, pattern), naive_positions(text, pattern))

    def test_bytes_and_lists(self):
        self.assertEqual(search(b"\x00\x01\x00\x01\x00", b"\x00\x01\x00"), [0, 2])
        self.assertEqual(search([1, 2, 3, 1, 2, 3], [2, 3]), [1, 4])

    def test_idempotent(self):
        text = "ABABDABACDABABCABAB" * 5
        self.assertEqual(search(text, "ABAB"), search(text, "ABAB"))

    def test_inputs_not_mutated(self):
        text = list("AABAAB")
        pattern = list("AAB")
        search(text, pattern)
        self.assertEqual(text, list("AABAAB"))
        self.assertEqual(pattern, list("AAB"))

    def test_many_false_starts(self):
        text = "AAAAAAAAAB" * 101
        self.assertEqual(len(search(text, "AAAAAAAAAB")), 101)
        self.assertEqual(search("A" * 20000, "A" * 999 + "B"), [])


class TestIterMatches(unittest.TestCase):
    """Tests for the lazy scanner and convenience queries."""

    def test_is_lazy(self):
        matches = iter_matches("AAAA", "AA")
        self.assertEqual(next(matches), 0)
        self.assertEqual(list(matches), [1, 2])

    def test_reuses_precomputed_table(self):
        pattern = "ABAB"
        lps = build_failure_function(pattern)
        self.assertEqual(list(iter_matches("ABABABAB", pattern, lps)), [0, 2, 4])
        self.assertEqual(list(iter_matches("xxABABxx", pattern, lps)), [2])
        self.assertEqual(lps, [0, 0, 1, 2])

    def test_rejects_mismatched_table(self):
        with self.assertRaises(ValueError):
            list(iter_matches("ABABAB", "ABAB", [0, 0]))

    def test_count_and_contains(self):
        self.assertEqual(count_matches("AAAA", "AA"), 3)
        self.assertEqual(count_matches("abc", ""), 0)
        self.assertTrue(contains("hello world", "world"))
        self.assertFalse(contains("hello world", "xyz"))
        self.assertFalse(contains(None, "x"))


class TestLinearTime(unittest.TestCase):
    """Timing ratio checks, never absolute durations."""

    def test_growth_is_not_quadratic(self):
        base = 2000
        sizes = [base, base * 10, base * 50, base * 100]
        results = run_benchmark(sizes, "test", repeats=3)
        self.assertTrue(is_linear(results, tolerance=3.0), growth_ratios(results))

    def test_adversarial_input_is_not_quadratic(self):
        pattern = "A" * 500 + "B"
        small = time_search("A" * 5000, pattern, repeats=3)
        large = time_search("A" * 250000, pattern, repeats=3)
        self.assertEqual(small.matches, 0)
        self.assertEqual(large.matches, 0)
        self.assertTrue(is_linear([small, large], tolerance=3.0))


class TestBenchmark(unittest.TestCase):
    """Tests for the benchmarking harness."""

    def test_generate_text(self):
        text = generate_text(1000, "test")
        self.assertGreaterEqual(len(text), 1000)
        self.assertEqual(text.count("test"), 9)
        self.assertEqual(len(search(text, "test")), 9)
        self.assertEqual(generate_text(0, "test"), "")

    def test_generate_text_rejects_empty_filler(self):
        with self.assertRaises(ValueError):
            generate_text(10, "x", filler="")

    def test_time_search_counts_matches(self):
        result = time_search("AAAA", "AA", repeats=2)
        self.assertEqual(result.size, 4)
        self.assertEqual(result.matches, 3)
        self.assertGreaterEqual(result.elapsed_ns, 0)

    def test_growth_ratios(self):
        results = [
            BenchmarkResult(size=100, pattern="p", matches=0, elapsed_ns=1000),
            BenchmarkResult(size=1000, pattern="p", matches=0, elapsed_ns=10000),
            BenchmarkResult(size=10000, pattern="p", matches=0, elapsed_ns=200000),
        ]
        self.assertEqual(growth_ratios(results), [1.0, 2.0])
        self.assertTrue(is_linear(results))
        self.assertEqual(growth_ratios(results[:1]), [])

    def test_quadratic_growth_detected(self):
        results = [
            BenchmarkResult(size=100, pattern="p", matches=0, elapsed_ns=100),
            BenchmarkResult(size=1000, pattern="p", matches=0, elapsed_ns=10000),
        ]
        self.assertFalse(is_linear(results))

    def test_zero_size_results_are_skipped(self):
        results = [
            BenchmarkResult(size=0, pattern="p", matches=0, elapsed_ns=5),
            BenchmarkResult(size=100, pattern="p", matches=0, elapsed_ns=100),
            BenchmarkResult(size=1000, pattern="p", matches=0, elapsed_ns=1000),
        ]
        self.assertEqual(growth_ratios(results), [1.0])
        self.assertTrue(is_linear(results))

    def test_benchmark_starting_at_empty_text(self):
        results = run_benchmark([0, 100], "test", repeats=1)
        self.assertEqual(results[0].size, 0)
        self.assertEqual(growth_ratios(results), [])
        self.assertTrue(is_linear(results))
        rows = format_benchmark(results).rstrip().splitlines()[2:]
        self.assertTrue(rows[0].endswith("| -"))
        self.assertTrue(rows[1].endswith("| Fast"))

    def test_format_benchmark(self):
        results = [BenchmarkResult(size=100, pattern="test", matches=1, elapsed_ns=2_500_000)]
        output = format_benchmark(results)
        self.assertIn("Text Size | Pattern | Matches | Time (ms) | Status", output)
        self.assertIn("2.500", output)
        self.assertTrue(output.rstrip().endswith("| Fast"))

    def test_format_benchmark_flags_slow_rows(self):
        results = [
            BenchmarkResult(size=100, pattern="test", matches=1, elapsed_ns=1000),
            BenchmarkResult(size=1000, pattern="test", matches=9, elapsed_ns=100000),
        ]
        rows = format_benchmark(results).rstrip().splitlines()[2:]
        self.assertTrue(rows[0].endswith("| Fast"))
        self.assertTrue(rows[1].endswith("| Check"))


class TestDisplay(unittest.TestCase):
    """Tests for the presentation helpers."""

    def test_format_lps(self):
        output = format_lps("ABABCABAB")
        self.assertIn("LPS Array: [0, 0, 1, 2, 0, 1, 2, 3, 4]", output)
        self.assertIn("'ABABCABAB'", output)

    def test_context_snippet(self):
        text = "0123456789" * 10
        self.assertEqual(context_snippet(text, 0, 2, width=3), "01234")
        self.assertEqual(context_snippet(text, 50, 2, width=3), "78901234")
        self.assertEqual(context_snippet("ab\ncd", 1, 1, width=5), "ab cd")

    def test_format_results(self):
        output = format_results("test text", "test", [0], 1_000_000)
        self.assertIn("TEXT LENGTH: 9 characters", output)
        self.assertIn("Found 1 match(es) at position(s): [0]", output)
        self.assertIn("  [0]: ...test text...", output)
        self.assertIn("Execution time: 1.0000 ms", output)

    def test_format_results_without_matches(self):
        self.assertIn("No matches found.", format_results("hello", "xyz", [], 0))

    def test_highlight(self):
        self.assertEqual(highlight("Pony Tracks", [6], 4), "Pony T[rack]s")
        self.assertEqual(highlight("AAAA", [0, 1, 2], 2), "[AAAA]")
        self.assertEqual(highlight("ABAB", [0, 2], 2), "[AB][AB]")
        self.assertEqual(highlight("hello", [], 3), "hello")


class TestVerification(unittest.TestCase):
    """Tests for the manual verification utility."""

    def test_default_cases_pass(self):
        outcomes = run_verification()
        self.assertTrue(outcomes)
        for outcome in outcomes:
            self.assertTrue(outcome.passed, outcome.case.name)

    def test_failing_case_reported(self):
        case = VerificationCase("Wrong expectation", "AAAA", "AA", [0])
        outcome = verify_case(case)
        self.assertFalse(outcome.passed)
        self.assertEqual(outcome.observed_positions, [0, 1, 2])
        output = format_outcome(outcome)
        self.assertIn("Expected count: 1, observed count: 3", output)
        self.assertIn("Status: FAIL", output)


class TestPdfReader(unittest.TestCase):
    """Tests for PDF text extraction and per-page search."""

    @patch('pdfreader.PdfReader')
    def test_parse_pages(self, mock_reader):
        page_one = MagicMock()
        page_one.extract_text.return_value = "The  quick\nbrown fox"
        page_two = MagicMock()
        page_two.extract_text.return_value = ""
        mock_reader.return_value.pages = [page_one, page_two]

        pages = parse_pdf_to_pages_text("doc.pdf")

        self.assertEqual(pages[0], "The quick brown fox")
        self.assertEqual(pages[1], "")

    @patch('pdfreader.PdfReader', side_effect=FileNotFoundError)
    def test_missing_file(self, _mock_reader):
        self.assertIsNone(parse_pdf_to_pages_text("missing.pdf"))

    @patch('pdfreader.PdfReader', side_effect=ValueError("broken"))
    def test_unreadable_file(self, _mock_reader):
        self.assertIsNone(parse_pdf_to_pages_text("broken.pdf"))

    def test_search_pages(self):
        pages = ["the fox", "no match here", "fox and fox"]
        self.assertEqual(search_pages(pages, "fox"), {1: [4], 3: [0, 8]})
        self.assertEqual(search_pages(pages, ""), {})

    @patch('pdfreader.PdfReader')
    def test_image_only_page_never_matches(self, mock_reader):
        """A page without text must not match words like 'Page' or 'image'."""
        image_page = MagicMock()
        image_page.extract_text.return_value = ""
        text_page = MagicMock()
        text_page.extract_text.return_value = "Page two text"
        mock_reader.return_value.pages = [image_page, text_page]

        pages = parse_pdf_to_pages_text("scan.pdf")

        self.assertEqual(len(pages), 2)
        self.assertEqual(search_pages(pages, "Page"), {2: [0]})
        self.assertEqual(search_pages(pages, "image"), {})


class TestLoggingConfig(unittest.TestCase):
    """Tests for the logging setup."""

    LOGGERS = ("app", "kmp", "benchmark")

    def setUp(self):
        self.log_dir = tempfile.mkdtemp()

    def tearDown(self):
        for name in self.LOGGERS:
            log = logging.getLogger(name)
            for handler in log.handlers:
                handler.close()
            log.handlers.clear()
            log.setLevel(logging.NOTSET)
            log.propagate = True
        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(logging.WARNING)
        shutil.rmtree(self.log_dir, ignore_errors=True)

    def test_setup_creates_log_files(self):
        setup_logging(self.log_dir)
        search("AAAA", "AA")
        logging.getLogger("kmp").handlers[0].flush()
        kmp_log = os.path.join(self.log_dir, "kmp.log")
        self.assertTrue(os.path.exists(kmp_log))
        with open(kmp_log, encoding="utf-8") as f:
            self.assertIn("matches=3", f.read())

    def test_setup_is_repeatable(self):
        setup_logging(self.log_dir)
        setup_logging(self.log_dir)
        for name in self.LOGGERS:
            self.assertEqual(len(logging.getLogger(name).handlers), 1)
        self.assertEqual(len(logging.getLogger().handlers), 1)

    def test_repeated_setup_closes_previous_files(self):
        setup_logging(self.log_dir)
        first_handlers = [logging.getLogger(name).handlers[0] for name in self.LOGGERS]
        setup_logging(self.log_dir)
        for handler in first_handlers:
            self.assertIsInstance(handler, logging.FileHandler)
            self.assertIsNone(handler.stream)


class TestApp(unittest.TestCase):
    """Tests for the command line entry points."""

    @staticmethod
    def _make_outcome(passed):
        outcome = MagicMock()
        outcome.passed = passed
        return outcome

    def _run_demo(self, outcomes):
        with patch('sys.stdout', new_callable=io.StringIO), \
             patch('main.run_demonstrations'), \
             patch('main.run_performance_analysis'), \
             patch('main.format_outcome', return_value="case"), \
             patch('main.run_verification', return_value=outcomes):
            return main.run_demo()

    def test_demo_exit_status_all_pass(self):
        self.assertEqual(self._run_demo([self._make_outcome(True), self._make_outcome(True)]), 0)

    def test_demo_exit_status_on_failure(self):
        self.assertEqual(self._run_demo([self._make_outcome(True), self._make_outcome(False)]), 1)

    def test_demo_with_real_verification(self):
        with patch('sys.stdout', new_callable=io.StringIO) as out, \
             patch('main.run_performance_analysis'):
            self.assertEqual(main.run_demo(), 0)
        self.assertIn("verification cases passed", out.getvalue())

    def test_parse_args(self):
        self.assertTrue(main.parse_args(["--demo"]).demo)
        self.assertFalse(main.parse_args([]).demo)

    def test_parse_args_rejects_unknown_flag(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                main.parse_args(["--bogus"])

# --- Test Runner ---
if __name__ == '__main__':
    unittest.main(verbosity=3)
