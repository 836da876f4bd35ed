"""
Reputation arithmetic for the agent registry.

Pure functions translating task outcomes and external signals into bounded
score adjustments.
"""

from typing import Union

Number = Union[int, float]

REPUTATION_MIN = 0
REPUTATION_MAX = 100
SUCCESS_DELTA = 1
FAILURE_DELTA = -2
LIVE_SCORE_LIMIT = 10


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def apply_task_outcome(reputation: int, success: bool) -> int:
    """
    Reputation after one finished task.

    Args:
        reputation: Current reputation score
        success: Whether the task completed successfully

    Returns:
        The new score, +1 on success and -2 on failure, kept within [0, 100]
    """
    delta = SUCCESS_DELTA if success else FAILURE_DELTA
    return int(clamp(reputation + delta, REPUTATION_MIN, REPUTATION_MAX))


def compute_success_rate(reputation: int, tasks_completed: int) -> float:
    """
    Success rate as reputation / tasks_completed * 100.

    The ratio is anchored to the current reputation rather than to a count of
    successful tasks, so it drifts towards zero as tasks accumulate. Values
    are clamped to [0, 100].
    """
    if tasks_completed <= 0:
        return 100.0
    return float(clamp(reputation / tasks_completed * 100, 0, 100))


def clamp_live_score(score: Number) -> int:
    """Clamp a combined crawl score to [-10, 10]."""
    return int(clamp(score, -LIVE_SCORE_LIMIT, LIVE_SCORE_LIMIT))
