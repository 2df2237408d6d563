"""Baseline prices and random-walk parameters for the simulated feed."""

from types import MappingProxyType

# Reference prices the simulated feed walks around and measures change against.
# Fixed for the lifetime of the process.
BASELINE_PRICES = MappingProxyType(
    {
        "AAPL": 225.50,
        "GOOGL": 141.20,
        "MSFT": 420.30,
        "AMZN": 178.80,
        "TSLA": 242.50,
        "META": 580.20,
        "NVDA": 145.60,
        "NFLX": 685.40,
    }
)

TRACKED_SYMBOLS: tuple[str, ...] = tuple(BASELINE_PRICES)

# Max per-tick move, in percent, drawn uniformly from [-STEP, +STEP]
MAX_STEP_PERCENT = 0.5

# Volume ranges, half-open [low, high)
SEED_VOLUME_RANGE = (100_000, 1_100_000)  # On activation
TICK_VOLUME_RANGE = (10_000, 60_000)  # Every tick after that
