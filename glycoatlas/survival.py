"""Kaplan-Meier curve alignment and sample-level survival summary."""

import logging
from collections.abc import Iterable
from typing import Literal

import numpy as np
from lifelines import KaplanMeierFitter
from lifelines.statistics import logrank_test

from glycoatlas.models import (
    AlignedSurvivalPoint,
    ClinicalSample,
    GroupSurvivalSummary,
    SampleSurvivalSummary,
    SurvivalPoint,
    VitalStatus,
)

log = logging.getLogger(__name__)

Group = Literal["high", "low"]


def classify_group(label: str) -> Group | None:
    """Map a free-form group label onto "high" / "low".

    The source is not consistent ("High", "High Expression", ...), so this is
    a plain case-sensitive substring test. Labels matching neither are None.
    """
    if "High" in label:
        return "high"
    if "Low" in label:
        return "low"
    return None


def _by_time(points: list[SurvivalPoint]) -> dict[float, float]:
    # sorted() is stable and later dict writes overwrite earlier ones, so for
    # duplicate times the last point in input order wins.
    lookup: dict[float, float] = {}
    for p in sorted(points, key=lambda p: p.time):
        lookup[p.time] = p.survival_prob
    return lookup


def align_survival(points: Iterable[SurvivalPoint]) -> list[AlignedSurvivalPoint]:
    """Merge high/low survival points into one time-ordered series.

    Each entry carries the exact-match probability for each group at that
    time, or None where the group has no observation. No interpolation or
    carry-forward happens here; the chart draws a step-after line that
    connects across the gaps.
    """
    high: list[SurvivalPoint] = []
    low: list[SurvivalPoint] = []
    dropped = 0
    for p in points:
        group = classify_group(p.group)
        if group == "high":
            high.append(p)
        elif group == "low":
            low.append(p)
        else:
            dropped += 1
    if dropped:
        log.debug("Dropped %d survival points with unrecognised group labels", dropped)

    high_at = _by_time(high)
    low_at = _by_time(low)
    times = sorted(set(high_at) | set(low_at))

    return [
        AlignedSurvivalPoint(
            time=t,
            high_probability=high_at.get(t),
            low_probability=low_at.get(t),
        )
        for t in times
    ]


def _median(kmf: KaplanMeierFitter) -> float | None:
    median = kmf.median_survival_time_
    return round(float(median), 2) if np.isfinite(median) else None


def summarize_samples(samples: Iterable[ClinicalSample]) -> SampleSurvivalSummary:
    """Fit a Kaplan-Meier curve per expression group from individual samples.

    Descriptive only: gives group sizes, event counts, median survival and a
    log-rank p-value to set beside the figures reported by the data source.
    """
    durations: dict[Group, list[float]] = {"high": [], "low": []}
    events: dict[Group, list[bool]] = {"high": [], "low": []}
    warnings: list[str] = []

    for s in samples:
        group = classify_group(s.group)
        if group is None:
            continue
        durations[group].append(s.survival_months)
        events[group].append(s.status is VitalStatus.DECEASED)

    groups: list[GroupSurvivalSummary] = []
    for group in ("high", "low"):
        n = len(durations[group])
        median = None
        if n:
            kmf = KaplanMeierFitter()
            kmf.fit(durations[group], event_observed=events[group], label=group)
            median = _median(kmf)
        else:
            warnings.append(f"No samples in the {group} expression group.")
        groups.append(
            GroupSurvivalSummary(
                group=group,
                n_samples=n,
                n_events=sum(events[group]),
                median_survival_months=median,
            )
        )

    p_value = None
    if durations["high"] and durations["low"]:
        result = logrank_test(
            durations["high"],
            durations["low"],
            event_observed_A=events["high"],
            event_observed_B=events["low"],
        )
        if np.isfinite(result.p_value):
            p_value = float(result.p_value)
        else:
            warnings.append("Log-rank test undefined (no events observed).")

    return SampleSurvivalSummary(groups=groups, p_value_log_rank=p_value, warnings=warnings)
