"""Dict <-> record conversion for JSON columns and API payloads."""

from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import ValidationError
from .model import (
    PeriodScore,
    PeriodScorecard,
    ScoreGroup,
    ScoreItem,
    ScoredGroup,
    ScoredItem,
    new_group_id,
    new_item_id,
)


def item_to_dict(item: ScoreItem) -> dict:
    return {
        "id": item.item_id,
        "name": item.name,
        "unit": item.unit,
        "target": item.target,
        "actual": item.actual,
        "weight": item.weight,
    }


def item_from_dict(data: Mapping[str, Any]) -> ScoreItem:
    if not isinstance(data, Mapping):
        raise ValidationError("Chỉ tiêu phải là JSON object")
    return ScoreItem(
        item_id=str(data.get("id") or "") or new_item_id(),
        name=str(data.get("name") or ""),
        unit=str(data.get("unit") or ""),
        target=data.get("target") or 0,
        actual=data.get("actual") or 0,
        weight=data.get("weight") or 0,
    )


def group_to_dict(group: ScoreGroup) -> dict:
    return {
        "id": group.group_id,
        "name": group.name,
        "unit": group.unit,
        "target": group.target,
        "actual": group.actual,
        "weight": group.weight,
        "auto_calculate": group.auto_calculate,
        "items": [item_to_dict(i) for i in group.items],
    }


def group_from_dict(data: Mapping[str, Any]) -> ScoreGroup:
    if not isinstance(data, Mapping):
        raise ValidationError("Nhóm chỉ tiêu phải là JSON object")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise ValidationError("items phải là danh sách")
    return ScoreGroup(
        group_id=str(data.get("id") or "") or new_group_id(),
        name=str(data.get("name") or ""),
        unit=str(data.get("unit") or ""),
        target=data.get("target") or 0,
        actual=data.get("actual") or 0,
        weight=data.get("weight") or 0,
        auto_calculate=data.get("auto_calculate", True),
        items=tuple(item_from_dict(i) for i in items),
    )


def period_to_dict(period: PeriodScore) -> dict:
    return {
        "period": period.period,
        "groups": [group_to_dict(g) for g in period.groups],
    }


def period_from_dict(data: Mapping[str, Any]) -> PeriodScore:
    if not isinstance(data, Mapping):
        raise ValidationError("Dữ liệu chỉ tiêu không hợp lệ")
    groups = data.get("groups") or []
    if not isinstance(groups, list):
        raise ValidationError("groups phải là danh sách")
    return PeriodScore(
        period=str(data.get("period") or ""),
        groups=tuple(group_from_dict(g) for g in groups),
    )


def scored_item_to_dict(s: ScoredItem) -> dict:
    out = item_to_dict(s.item)
    out.update(percent=s.percent, score=s.contribution)
    return out


def scored_group_to_dict(s: ScoredGroup) -> dict:
    out = group_to_dict(s.group)
    out.update(
        target=s.target,
        actual=s.actual,
        percent=s.percent,
        score=s.contribution,
        items=[scored_item_to_dict(i) for i in s.items],
    )
    return out


def scorecard_to_dict(card: PeriodScorecard) -> dict:
    return {
        "period": card.period,
        "total_score": card.total_score,
        "completed": card.completed,
        "total": card.total,
        "incomplete": card.incomplete,
        "groups": [scored_group_to_dict(g) for g in card.groups],
    }
