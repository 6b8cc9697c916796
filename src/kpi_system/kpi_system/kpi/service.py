from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import require_period
from ..common.validators import require_non_empty, require_non_negative
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..scoring import engine
from ..scoring.model import (
    AtRiskItem,
    PeriodScore,
    PeriodScorecard,
    ScoreGroup,
    ScoreItem,
    TrendPoint,
    new_group_id,
    new_item_id,
)
from .repository import KpiRepository

logger = logging.getLogger(__name__)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Bạn không có quyền chỉnh sửa cấu trúc chỉ tiêu")


def _clean_text_changes(changes: dict, name_label: str) -> dict:
    changes = dict(changes)
    if "name" in changes:
        changes["name"] = require_non_empty(changes["name"], name_label)
    if "unit" in changes:
        unit = changes["unit"]
        if unit is not None and not isinstance(unit, str):
            raise ValidationError("Đơn vị tính không hợp lệ")
        changes["unit"] = (unit or "").strip()
    return changes


def _with_ids(period_score: PeriodScore) -> PeriodScore:
    """Give every group and item an id so later edits can address them."""
    groups = tuple(
        replace(
            g,
            group_id=g.group_id or new_group_id(),
            items=tuple(i if i.item_id else replace(i, item_id=new_item_id()) for i in g.items),
        )
        for g in period_score.groups
    )
    return replace(period_score, groups=groups)


class KpiService:
    """Use case: điều hành chỉ tiêu kinh doanh theo tháng.

    Admin edits the structure (groups, items, targets, weights); any signed-in
    user may enter actual results. Every change rewrites the whole month.
    """

    def __init__(self, kpis: KpiRepository):
        self._kpis = kpis

    def list_periods(self) -> list[str]:
        return [p.period for p in self._kpis.list_all()]

    def get_period(self, period: str) -> PeriodScore:
        period = require_period(period)
        found = self._kpis.get_by_period(period)
        if not found:
            raise NotFoundError(f"Chưa có dữ liệu chỉ tiêu cho tháng {period}")
        return found

    def init_period(self, *, current_role: Role, period: str) -> PeriodScore:
        """Create a month from the latest earlier month (actuals zeroed) or the starter template."""
        _require_admin(current_role)
        period = require_period(period)
        if self._kpis.get_by_period(period):
            raise ValidationError(f"Tháng {period} đã có dữ liệu")

        earlier = [p for p in self._kpis.list_all() if p.period < period]
        if earlier:
            source = max(earlier, key=lambda p: p.period)
            created = engine.clone_period(source, period)
            logger.info("kpi period %s initialised from %s", period, source.period)
        else:
            created = engine.default_period(period)
            logger.info("kpi period %s initialised from default template", period)

        self._kpis.upsert(created)
        return created

    def save_period(self, *, current_role: Role, period_score: PeriodScore) -> PeriodScore:
        _require_admin(current_role)
        period_score = _with_ids(period_score)
        self._kpis.upsert(period_score)
        return period_score

    def delete_period(self, *, current_role: Role, period: str) -> None:
        _require_admin(current_role)
        if not self._kpis.delete(require_period(period)):
            raise NotFoundError(f"Chưa có dữ liệu chỉ tiêu cho tháng {period}")

    # --- structure edits (admin) ---

    def add_group(
        self,
        *,
        current_role: Role,
        period: str,
        name: str,
        unit: str = "",
        weight: float = 0,
        auto_calculate: bool = True,
        target: float = 0,
    ) -> ScoreGroup:
        _require_admin(current_role)
        current = self.get_period(period)
        group = ScoreGroup(
            group_id=new_group_id(),
            name=require_non_empty(name, "Tên nhóm"),
            unit=unit or "",
            weight=weight,
            auto_calculate=auto_calculate,
            target=target,
        )
        self._kpis.upsert(replace(current, groups=current.groups + (group,)))
        return group

    def update_group(self, *, current_role: Role, period: str, group_id: str, changes: dict) -> ScoreGroup:
        """Change name/unit/weight/target/auto_calculate of a group."""
        _require_admin(current_role)
        allowed = {"name", "unit", "weight", "target", "auto_calculate"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(f"Không thể sửa trường: {', '.join(sorted(unknown))}")

        changes = _clean_text_changes(changes, "Tên nhóm")
        current = self.get_period(period)
        group = self._get_group(current, group_id)
        updated = replace(group, **changes)
        self._kpis.upsert(self._with_group(current, updated))
        return updated

    def remove_group(self, *, current_role: Role, period: str, group_id: str) -> None:
        _require_admin(current_role)
        current = self.get_period(period)
        self._get_group(current, group_id)
        groups = tuple(g for g in current.groups if g.group_id != group_id)
        self._kpis.upsert(replace(current, groups=groups))

    def add_item(
        self,
        *,
        current_role: Role,
        period: str,
        group_id: str,
        name: str,
        unit: str = "",
        target: float = 0,
        weight: float = 0,
    ) -> ScoreItem:
        _require_admin(current_role)
        current = self.get_period(period)
        group = self._get_group(current, group_id)
        item = ScoreItem(
            item_id=new_item_id(),
            name=require_non_empty(name, "Tên chỉ tiêu"),
            unit=unit or "",
            target=target,
            actual=0,
            weight=weight,
        )
        self._kpis.upsert(self._with_group(current, replace(group, items=group.items + (item,))))
        return item

    def update_item(
        self, *, current_role: Role, period: str, group_id: str, item_id: str, changes: dict
    ) -> ScoreItem:
        """Change name/unit/target/weight of an item."""
        _require_admin(current_role)
        allowed = {"name", "unit", "target", "weight"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(f"Không thể sửa trường: {', '.join(sorted(unknown))}")

        changes = _clean_text_changes(changes, "Tên chỉ tiêu")
        current = self.get_period(period)
        group = self._get_group(current, group_id)
        item = self._get_item(group, item_id)
        updated = replace(item, **changes)
        items = tuple(updated if i.item_id == item_id else i for i in group.items)
        self._kpis.upsert(self._with_group(current, replace(group, items=items)))
        return updated

    def remove_item(self, *, current_role: Role, period: str, group_id: str, item_id: str) -> None:
        _require_admin(current_role)
        current = self.get_period(period)
        group = self._get_group(current, group_id)
        self._get_item(group, item_id)
        items = tuple(i for i in group.items if i.item_id != item_id)
        self._kpis.upsert(self._with_group(current, replace(group, items=items)))

    # --- results entry (any signed-in user) ---

    def record_actual(self, *, period: str, group_id: str, actual: float, item_id: Optional[str] = None) -> PeriodScore:
        actual = require_non_negative(actual, "Kết quả")
        current = self.get_period(period)
        group = self._get_group(current, group_id)

        if item_id is None:
            if group.auto_calculate:
                raise ValidationError("Nhóm tự động tính tổng, hãy nhập kết quả cho từng chỉ tiêu")
            group = replace(group, actual=actual)
        else:
            item = self._get_item(group, item_id)
            items = tuple(replace(i, actual=actual) if i is item else i for i in group.items)
            group = replace(group, items=items)

        updated = self._with_group(current, group)
        self._kpis.upsert(updated)
        return updated

    # --- read models ---

    def scorecard(self, period: str) -> PeriodScorecard:
        return engine.score_period(self.get_period(period))

    def trend(self, *, limit: Optional[int] = None) -> list[TrendPoint]:
        points = engine.compute_trend(list(self._kpis.list_all()))
        if limit is not None and limit > 0:
            points = points[-limit:]
        return points

    def at_risk(self, period: str) -> list[AtRiskItem]:
        return engine.at_risk_items(self.get_period(period))

    @staticmethod
    def _get_group(period_score: PeriodScore, group_id: str) -> ScoreGroup:
        group = period_score.find_group(group_id) if group_id else None
        if not group:
            raise NotFoundError("Nhóm chỉ tiêu không tồn tại")
        return group

    @staticmethod
    def _get_item(group: ScoreGroup, item_id: str) -> ScoreItem:
        for i in group.items:
            if item_id and i.item_id == item_id:
                return i
        raise NotFoundError("Chỉ tiêu không tồn tại")

    @staticmethod
    def _with_group(period_score: PeriodScore, group: ScoreGroup) -> PeriodScore:
        groups = tuple(group if g.group_id == group.group_id else g for g in period_score.groups)
        return replace(period_score, groups=groups)
