"""Search tooling configuration and constants."""
import os


# Logging
LOG_PATH: str = os.environ.get("KMP_LOG_PATH", os.path.join("data", "logs"))

# Presentation
CONTEXT_WIDTH: int = 20  # characters shown either side of a match
BANNER_WIDTH: int = 80

# Benchmarking
BENCHMARK_SIZES: tuple = (100, 500, 1000, 5000, 10000)
BENCHMARK_PATTERN: str = "test"
BENCHMARK_FILLER: str = "abc "
BENCHMARK_REPEATS: int = 3
PATTERN_INTERVAL: int = 100  # the pattern is inserted every this many characters
GROWTH_TOLERANCE: float = 3.0
