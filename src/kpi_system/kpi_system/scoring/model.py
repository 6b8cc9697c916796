from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from uuid import uuid4

from ..common.datetime_utils import require_period
from ..common.validators import require_bool, require_non_negative, require_weight
from ..core.exceptions import ValidationError


def new_group_id() -> str:
    return f"g_{uuid4().hex[:8]}"


def new_item_id() -> str:
    return f"i_{uuid4().hex[:8]}"


def require_unique_ids(ids: Iterable[str], label: str) -> None:
    """Reject a repeated id. Blank ids are skipped; stored documents get ids from the serializer."""
    seen = set()
    for i in ids:
        if not i:
            continue
        if i in seen:
            raise ValidationError(f"Mã {label} bị trùng: {i}")
        seen.add(i)


@dataclass(frozen=True)
class ScoreItem:
    """Một chỉ tiêu đo lường được: mục tiêu, kết quả thực hiện và tỷ trọng."""

    target: float
    actual: float
    weight: float = 0.0
    item_id: str = ""
    name: str = ""
    unit: str = ""

    def __post_init__(self):
        object.__setattr__(self, "target", require_non_negative(self.target, "Mục tiêu"))
        object.__setattr__(self, "actual", require_non_negative(self.actual, "Kết quả"))
        object.__setattr__(self, "weight", require_weight(self.weight))


@dataclass(frozen=True)
class ScoreGroup:
    """Nhóm chỉ tiêu.

    With ``auto_calculate`` the group's target/actual are derived from its
    items and the stored values are ignored. A group and its items may not
    both carry weight.
    """

    target: float = 0.0
    actual: float = 0.0
    weight: float = 0.0
    auto_calculate: bool = True
    items: tuple[ScoreItem, ...] = ()
    group_id: str = ""
    name: str = ""
    unit: str = ""

    def __post_init__(self):
        object.__setattr__(self, "target", require_non_negative(self.target, "Mục tiêu nhóm"))
        object.__setattr__(self, "actual", require_non_negative(self.actual, "Kết quả nhóm"))
        object.__setattr__(self, "weight", require_weight(self.weight, "Tỷ trọng nhóm"))
        auto_calculate = require_bool(self.auto_calculate, "Tự động tính tổng")
        object.__setattr__(self, "auto_calculate", auto_calculate)
        object.__setattr__(self, "items", tuple(self.items))
        require_unique_ids((i.item_id for i in self.items), "chỉ tiêu")

        if self.weight > 0 and any(i.weight > 0 for i in self.items):
            raise ValidationError(
                f"Nhóm '{self.name or self.group_id}' đã có tỷ trọng, "
                "các chỉ tiêu con phải có tỷ trọng 0"
            )


@dataclass(frozen=True)
class PeriodScore:
    """Bộ chỉ tiêu của một tháng (YYYY-MM), lưu nguyên khối."""

    period: str
    groups: tuple[ScoreGroup, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "period", require_period(self.period))
        object.__setattr__(self, "groups", tuple(self.groups))
        require_unique_ids((g.group_id for g in self.groups), "nhóm")

    def find_group(self, group_id: str) -> ScoreGroup | None:
        for g in self.groups:
            if g.group_id == group_id:
                return g
        return None


@dataclass(frozen=True)
class ScoreResult:
    percent: float
    contribution: float


@dataclass(frozen=True)
class ScoredItem:
    item: ScoreItem
    percent: float
    contribution: float


@dataclass(frozen=True)
class ScoredGroup:
    group: ScoreGroup
    target: float
    actual: float
    percent: float
    contribution: float
    items: tuple[ScoredItem, ...] = ()


@dataclass(frozen=True)
class PeriodScorecard:
    period: str
    groups: tuple[ScoredGroup, ...]
    total_score: float
    completed: int
    total: int

    @property
    def incomplete(self) -> int:
        return self.total - self.completed


@dataclass(frozen=True)
class TrendPoint:
    period: str
    total_score: float


@dataclass(frozen=True)
class AtRiskItem:
    group_id: str
    group_name: str
    item: ScoreItem
    percent: float
    contribution: float = 0.0
