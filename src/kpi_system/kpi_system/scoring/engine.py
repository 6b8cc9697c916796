"""Weighted target-achievement scoring.

Every function here is pure: callers pass a snapshot (``PeriodScore``) and
get plain result records back. Persistence lives in the ``kpi`` and
``evaluations`` feature modules.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from ..core.constants import ACHIEVEMENT_CAP_PERCENT, COMPLETION_PERCENT
from ..core.enums import Grade
from .model import (
    AtRiskItem,
    PeriodScore,
    PeriodScorecard,
    ScoreGroup,
    ScoreItem,
    ScoreResult,
    ScoredGroup,
    ScoredItem,
    TrendPoint,
)


def score(target: float, actual: float, weight: float) -> ScoreResult:
    """Achievement percent and its weighted contribution.

    ``percent`` is uncapped; the 120% cap applies only to the contribution.
    A non-positive target is "not measurable" and scores 0.
    """
    percent = (actual / target) * 100 if target > 0 else 0.0
    capped = min(percent, ACHIEVEMENT_CAP_PERCENT)
    contribution = (capped * weight) / 100 if weight > 0 else 0.0
    return ScoreResult(percent=percent, contribution=contribution)


def score_item(item: ScoreItem) -> ScoredItem:
    r = score(item.target, item.actual, item.weight)
    return ScoredItem(item=item, percent=r.percent, contribution=r.contribution)


def group_totals(group: ScoreGroup) -> tuple[float, float]:
    """(target, actual) of a group: item sums when auto-calculated, else as entered."""
    if group.auto_calculate:
        return (
            sum(i.target for i in group.items),
            sum(i.actual for i in group.items),
        )
    return group.target, group.actual


def aggregate_group(group: ScoreGroup) -> ScoredGroup:
    target, actual = group_totals(group)
    r = score(target, actual, group.weight)
    return ScoredGroup(
        group=group,
        target=target,
        actual=actual,
        percent=r.percent,
        contribution=r.contribution,
        items=tuple(score_item(i) for i in group.items),
    )


def _sum_contributions(groups: Iterable[ScoredGroup]) -> float:
    total = 0.0
    for g in groups:
        total += g.contribution
        total += sum(i.contribution for i in g.items)
    return total


def score_period(period: PeriodScore) -> PeriodScorecard:
    scored = tuple(aggregate_group(g) for g in period.groups)

    completed = 0
    counted = 0
    for g in scored:
        for i in g.items:
            # Items with neither target nor weight are labels, not criteria.
            if i.item.target > 0 or i.item.weight > 0:
                counted += 1
                if i.percent >= COMPLETION_PERCENT:
                    completed += 1

    return PeriodScorecard(
        period=period.period,
        groups=scored,
        total_score=_sum_contributions(scored),
        completed=completed,
        total=counted,
    )


def total_score(period: PeriodScore) -> float:
    return _sum_contributions(aggregate_group(g) for g in period.groups)


def compute_trend(periods: Sequence[PeriodScore]) -> list[TrendPoint]:
    points = [TrendPoint(period=p.period, total_score=total_score(p)) for p in periods]
    points.sort(key=lambda p: p.period)
    return points


def at_risk_items(period: PeriodScore) -> list[AtRiskItem]:
    """Weighted, measurable items below 100%, worst first."""
    out: list[AtRiskItem] = []
    for g in period.groups:
        for item in g.items:
            if item.target <= 0 or item.weight <= 0:
                continue
            r = score(item.target, item.actual, item.weight)
            if r.percent < COMPLETION_PERCENT:
                out.append(
                    AtRiskItem(
                        group_id=g.group_id,
                        group_name=g.name,
                        item=item,
                        percent=r.percent,
                        contribution=r.contribution,
                    )
                )
    out.sort(key=lambda a: a.percent)
    return out


def clone_period(source: PeriodScore, period: str) -> PeriodScore:
    """Copy the structure of ``source`` into a new month with every actual reset to 0."""
    groups = tuple(
        replace(g, actual=0.0, items=tuple(replace(i, actual=0.0) for i in g.items))
        for g in source.groups
    )
    return PeriodScore(period=period, groups=groups)


def default_period(period: str) -> PeriodScore:
    """Starter structure for the very first month."""
    return PeriodScore(
        period=period,
        groups=(
            ScoreGroup(
                group_id="g1",
                name="NHÓM CHỈ TIÊU 1",
                unit="VNĐ",
                weight=50,
                auto_calculate=True,
                items=(ScoreItem(item_id="i1", name="Chỉ tiêu 1", unit="VNĐ", target=1000, actual=0, weight=0),),
            ),
        ),
    )


def grade_for(total: float) -> Grade:
    if total > 110:
        return Grade.A_PLUS
    if total >= 100:
        return Grade.A
    if total >= 90:
        return Grade.B
    if total >= 80:
        return Grade.C
    return Grade.D
