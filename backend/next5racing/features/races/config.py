"""
Race board configuration constants.

Fixed values that define the board's behaviour. Tunable cadence and feed
settings live in next5racing.config.Settings.
"""


class RaceBoardConfig:
    """Configuration for the next-to-go board."""

    # Maximum number of races shown
    RACE_LIST_LIMIT = 5

    # A race stays listed until it is MORE than this many seconds past its
    # advertised start (exactly 60s past is still listed)
    EXPIRY_THRESHOLD_SECONDS = 60

    # Countdown / expiry sweep cadence (seconds)
    TICK_INTERVAL_SECONDS = 1.0

    # Full refresh cadence (seconds)
    REFRESH_INTERVAL_SECONDS = 60.0

    # How long stop() waits for a cancelled fetch to wind down (seconds)
    STOP_TIMEOUT_SECONDS = 1.0

    # Shown when the reachability signal says we are offline
    NO_CONNECTION_MESSAGE = "No internet connection."
