import argparse
import os
import signal
import sys
import time
import logging

from benchmark import format_benchmark, is_linear, run_benchmark
from config import BENCHMARK_PATTERN, BENCHMARK_SIZES
from display import format_lps, format_results, highlight
from kmp import search
from pdfreader import parse_pdf_to_pages_text, search_pages
from verification import format_outcome, run_verification

from logging_config import setup_logging

logger = logging.getLogger("app")


class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    RESET = '\033[0m'


DEMO_CASES = [
    ("SHORT STRING TEST", "ABABDABACDABABCABAB", "ABABCABAB"),
    (
        "MEDIUM STRING TEST",
        "The Knuth-Morris-Pratt algorithm is an efficient string matching "
        "algorithm that finds occurrences of a pattern within a text. "
        "The algorithm preprocesses the pattern to create a failure function, "
        "which allows it to skip unnecessary comparisons during the search. "
        "This makes the algorithm very efficient for string searching tasks.",
        "algorithm",
    ),
    (
        "LONG STRING TEST",
        "In computer science, the Knuth-Morris-Pratt string-searching algorithm "
        "(or KMP algorithm) searches for occurrences of a word within a main text "
        "string by employing the observation that when a mismatch occurs, the word "
        "itself embodies sufficient information to determine where the next match "
        "could begin, thus bypassing re-examination of previously matched characters. "
        "The algorithm was conceived by James H. Morris and independently discovered "
        "by Donald Knuth and Vaughan Pratt. The three published it jointly in 1977. "
        "The algorithm compares characters from left to right. When a mismatch occurs, "
        "the algorithm uses a preprocessed table to skip some comparisons.",
        "algorithm",
    ),
]


def timed_search(text, pattern):
    """Run a search and return the matches together with the elapsed nanoseconds."""
    start = time.perf_counter_ns()
    matches = search(text, pattern)
    return matches, time.perf_counter_ns() - start


def run_demonstrations():
    for number, (title, text, pattern) in enumerate(DEMO_CASES, start=1):
        print(f"{Colors.BLUE}### DEMO {number}: {title} ###{Colors.RESET}\n")
        preview = text if len(text) <= 100 else text[:100] + "..."
        print(f"Text: \"{preview}\"")
        print(f"Length: {len(text)} characters\n")
        print(format_lps(pattern))
        matches, elapsed_ns = timed_search(text, pattern)
        print(format_results(text, pattern, matches, elapsed_ns))


def run_edge_case_verification() -> bool:
    """Print every verification outcome. Returns True when all cases pass."""
    outcomes = run_verification()
    for outcome in outcomes:
        color = Colors.GREEN if outcome.passed else Colors.RED
        print(f"{color}{format_outcome(outcome)}{Colors.RESET}\n")
    passed = sum(1 for outcome in outcomes if outcome.passed)
    print(f"{passed}/{len(outcomes)} verification cases passed.\n")
    return passed == len(outcomes)


def run_performance_analysis(pattern: str = BENCHMARK_PATTERN):
    print("Demonstrating O(n+m) time complexity with varying text sizes:\n")
    results = run_benchmark(BENCHMARK_SIZES, pattern)
    print(format_benchmark(results))
    if is_linear(results):
        print(f"{Colors.GREEN}Growth is linear in the text size.{Colors.RESET}\n")
    else:
        print(f"{Colors.YELLOW}Growth looks super-linear; check the machine load and rerun.{Colors.RESET}\n")


class KMPSearchApp:
    """
    Interactive front end for the KMP substring search.
    """

    def __init__(self):
        signal.signal(signal.SIGINT, self._signal_handler)
        logger.info("KMPSearchApp initialized.")

    def _clear_terminal(self):
        """Clears the terminal screen without triggering signal handlers."""
        if os.name == 'nt':  # For Windows
            os.system('cls')
        else:  # For Unix systems
            print('\033[H\033[J')

    def _signal_handler(self, signum, frame):
        """Handles interrupt signals (e.g., Ctrl+C) gracefully."""
        if signum == signal.SIGINT:
            logger.info("Interrupt signal received. Shutting down application.")
            print("\n\nInterrupt signal received. Exiting...")
            sys.exit(0)

    def _search_text(self):
        self._clear_terminal()
        print("Search Text")
        print("-----------")
        text = input("Enter the text to search: ")
        pattern = input("Enter the pattern: ")
        if not pattern:
            print(f"{Colors.YELLOW}Empty pattern: nothing to search for.{Colors.RESET}")
        matches, elapsed_ns = timed_search(text, pattern)
        logger.info(f"Text search for {pattern!r}: {len(matches)} match(es)")
        print(format_results(text, pattern, matches, elapsed_ns))
        if matches:
            print(highlight(text, matches, len(pattern)))
        input("\nPress Enter to return to the main menu...")

    def _search_pdf(self):
        self._clear_terminal()
        print("Search a PDF Document")
        print("---------------------")
        file_path = input("Enter the path to the PDF document: ").strip()

        # Handle double-quoted paths from win11 right click copy as path
        if file_path.startswith('"') and file_path.endswith('"'):
            file_path = file_path[1:-1]
        file_path = os.path.normpath(file_path) if file_path else file_path

        if not file_path or not os.path.exists(file_path):
            logger.warning(f"File not found: {file_path}")
            print(f"{Colors.RED}File not found. Please check the path and try again.{Colors.RESET}")
            input("\nPress Enter to continue...")
            return
        if not file_path.lower().endswith('.pdf'):
            logger.warning(f"File is not a PDF: {file_path}")
            print(f"{Colors.RED}The file is not a PDF. Please provide a valid PDF document.{Colors.RESET}")
            input("\nPress Enter to continue...")
            return

        pages = parse_pdf_to_pages_text(file_path)
        if pages is None:
            print(f"{Colors.RED}Could not read the PDF document. See the logs for details.{Colors.RESET}")
            input("\nPress Enter to continue...")
            return

        pattern = input("Enter the pattern: ")
        found = search_pages(pages, pattern)
        if not found:
            print(f"\n{Colors.YELLOW}No matches found in {len(pages)} page(s).{Colors.RESET}")
        else:
            total = sum(len(positions) for positions in found.values())
            print(f"\n{Colors.GREEN}Found {total} match(es) on {len(found)} of {len(pages)} page(s).{Colors.RESET}")
            for page_number, positions in found.items():
                print(f"  Page {page_number}: {positions}")
        logger.info(f"PDF search for {pattern!r} in {file_path}: {len(found)} page(s) matched")
        input("\nPress Enter to return to the main menu...")

    def _show_lps(self):
        self._clear_terminal()
        pattern = input("Enter the pattern: ")
        print()
        print(format_lps(pattern))
        input("\nPress Enter to continue...")

    def _run_demonstrations(self):
        self._clear_terminal()
        run_demonstrations()
        input("\nPress Enter to continue...")

    def _run_benchmark(self):
        self._clear_terminal()
        pattern = input(f"Enter the benchmark pattern [{BENCHMARK_PATTERN}]: ") or BENCHMARK_PATTERN
        run_performance_analysis(pattern)
        input("\nPress Enter to continue...")

    def _run_verification(self):
        self._clear_terminal()
        run_edge_case_verification()
        input("\nPress Enter to continue...")

    def run(self):
        """Main application loop."""
        menu_actions = {
            '1': self._search_text,
            '2': self._search_pdf,
            '3': self._show_lps,
            '4': self._run_demonstrations,
            '5': self._run_benchmark,
            '6': self._run_verification,
        }

        while True:
            self._clear_terminal()
            print(f"\n{Colors.BLUE}KMP Substring Search{Colors.RESET}")
            print("---------------------------------------")
            print("1. Search text")
            print("2. Search a PDF document")
            print("3. Show LPS array for a pattern")
            print("4. Run demonstrations")
            print("5. Run performance benchmark")
            print("6. Verify edge cases")
            print("7. Exit")
            print("---------------------------------------")
            choice = input("Enter your choice: ")

            if choice in menu_actions:
                logger.info(f"User selected menu option: {choice}")
                menu_actions[choice]()
            elif choice == '7':
                logger.info("User selected exit. Shutting down application.")
                print("Exiting...")
                break
            else:
                logger.warning(f"Invalid menu choice: {choice}")
                print(f"{Colors.RED}Invalid choice. Please try again.{Colors.RESET}")
                time.sleep(1)


def run_demo() -> int:
    """Non-interactive demonstration. Returns the process exit status."""
    print("=" * 80)
    print("KMP STRING MATCHING ALGORITHM - DEMONSTRATION")
    print("=" * 80 + "\n")
    run_demonstrations()
    print(f"{Colors.BLUE}### EDGE CASES ###{Colors.RESET}\n")
    all_passed = run_edge_case_verification()
    print(f"{Colors.BLUE}### PERFORMANCE ANALYSIS ###{Colors.RESET}\n")
    run_performance_analysis()
    return 0 if all_passed else 1


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Linear-time substring search with the Knuth-Morris-Pratt algorithm")
    p.add_argument(
        "--demo",
        action="store_true",
        help="Run the demonstrations, edge-case verification and benchmark, then exit",
    )
    return p.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    setup_logging()
    logger.info("Application starting...")
    try:
        if args.demo:
            sys.exit(run_demo())
        KMPSearchApp().run()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt detected. Exiting.")
    except Exception as e:
        logger.exception(f"An unexpected error occurred in the application: {e}")
        print(f"\n{Colors.RED}An unexpected error occurred: {e}{Colors.RESET}")
        sys.exit(1)
