from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from penalty.config import BanPolicyConfig
from penalty.rules import Category
from penalty.utils.durations import decay_factor, from_seconds, to_seconds, utcnow_like

log = logging.getLogger(__name__)

DECAY_HORIZON = dt.timedelta(days=720)

Warn = Tuple[Category, dt.datetime]


def get_remaining_ban_time(
    warns: Iterable[Warn],
    now: Optional[dt.datetime] = None,
    decay_horizon: dt.timedelta = DECAY_HORIZON,
) -> Optional[dt.timedelta]:
    """
    Remaining ban time for a warn history, or None when no ban is active.

    The first warn yielded is the reference instant: the ban is considered
    imposed at its timestamp and has been running down since. Callers must
    therefore pass the most recent warn first; see `most_recent_first`.

    Each warn is worth its rule's base duration, decayed linearly to zero over
    `decay_horizon` measured back from the reference instant. Within a rule
    the first warn counts once and every further one is weighted by
    (e - 1) * e^(k - 1), so repeat offenses escalate exponentially.
    """
    reference, groups = _group_by_rule(warns, decay_horizon)
    if reference is None:
        return None

    earned = sum(_escalate(contributions) for contributions in groups.values())
    if now is None:
        now = utcnow_like(reference)
    elapsed = to_seconds(now - reference)
    remaining = earned - elapsed
    log.debug(
        "ban time: rules=%d earned=%.0fs elapsed=%.0fs remaining=%.0fs",
        len(groups),
        earned,
        elapsed,
        remaining,
    )
    if not remaining > 0:
        return None
    result = from_seconds(remaining)
    return result if result > dt.timedelta(0) else None


def earned_ban_time(warns: Iterable[Warn], decay_horizon: dt.timedelta = DECAY_HORIZON) -> dt.timedelta:
    """Total ban time earned by a history, before time served is subtracted."""
    _, groups = _group_by_rule(warns, decay_horizon)
    return from_seconds(sum(_escalate(contributions) for contributions in groups.values()))


def ban_expires_at(
    warns: Iterable[Warn],
    now: Optional[dt.datetime] = None,
    decay_horizon: dt.timedelta = DECAY_HORIZON,
) -> Optional[dt.datetime]:
    warns = list(warns)
    if not warns:
        return None
    if now is None:
        now = utcnow_like(warns[0][1])
    remaining = get_remaining_ban_time(warns, now=now, decay_horizon=decay_horizon)
    if remaining is None:
        return None
    try:
        return now + remaining
    except OverflowError:
        return dt.datetime.max.replace(tzinfo=now.tzinfo)


def is_banned(
    warns: Iterable[Warn],
    now: Optional[dt.datetime] = None,
    decay_horizon: dt.timedelta = DECAY_HORIZON,
) -> bool:
    return get_remaining_ban_time(warns, now=now, decay_horizon=decay_horizon) is not None


def most_recent_first(warns: Iterable[Warn]) -> List[Warn]:
    """Order a history newest first. Ties keep their original order."""
    return sorted(warns, key=lambda warn: warn[1], reverse=True)


def _group_by_rule(
    warns: Iterable[Warn],
    decay_horizon: dt.timedelta,
) -> Tuple[Optional[dt.datetime], Dict[Category, List[float]]]:
    if decay_horizon <= dt.timedelta(0):
        raise ValueError("decay horizon must be positive")

    reference: Optional[dt.datetime] = None
    groups: Dict[Category, List[float]] = {}
    for rule, issued in warns:
        if reference is None:
            reference = issued
        weight = decay_factor(reference - issued, decay_horizon)
        groups.setdefault(rule, []).append(to_seconds(rule.base_duration()) * weight)
    return reference, groups


def _escalate(contributions: List[float]) -> float:
    if not contributions:
        return 0.0
    first, rest = contributions[0], contributions[1:]
    repeated = 0.0
    multiplier = 1.0
    for contribution in rest:
        # 0 * inf is NaN; fully decayed warns add nothing anyway.
        if contribution:
            repeated += contribution * multiplier
        multiplier *= math.e
    return first + (math.e - 1.0) * repeated


class BanTimer:
    """
    Config-bound front for the ban time functions. The clock is injectable so
    callers can evaluate a history as of a fixed instant.
    """

    def __init__(
        self,
        policy: Optional[BanPolicyConfig] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ):
        self._decay_horizon = (policy or BanPolicyConfig()).decay_horizon
        self._clock = clock

    @property
    def decay_horizon(self) -> dt.timedelta:
        return self._decay_horizon

    def remaining(self, warns: Iterable[Warn]) -> Optional[dt.timedelta]:
        return get_remaining_ban_time(warns, now=self._now(), decay_horizon=self._decay_horizon)

    def expires_at(self, warns: Iterable[Warn]) -> Optional[dt.datetime]:
        return ban_expires_at(warns, now=self._now(), decay_horizon=self._decay_horizon)

    def is_banned(self, warns: Iterable[Warn]) -> bool:
        return self.remaining(warns) is not None

    def _now(self) -> Optional[dt.datetime]:
        return self._clock() if self._clock else None
