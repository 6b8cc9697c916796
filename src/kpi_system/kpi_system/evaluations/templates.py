"""Bộ tiêu chí KI mặc định theo vị trí. Tỷ trọng mỗi bộ cộng lại bằng 100."""

from __future__ import annotations

from ..core.enums import EvaluationTemplate, Role
from ..scoring.model import ScoreItem

_TEMPLATES: dict[EvaluationTemplate, list[dict]] = {
    EvaluationTemplate.AM: [
        {"name": "Doanh số", "unit": "Tr.đ", "weight": 15},
        {"name": "Tổng Doanh thu", "unit": "Tr.đ", "weight": 25},
        {"name": "Doanh thu dịch vụ", "unit": "Tr.đ", "weight": 20},
        {"name": "Nhiệm vụ trọng tâm BGĐ giao", "unit": "%", "weight": 20},
        {"name": "Ý thức thái độ (việc khó, công đoàn...)", "unit": "%", "weight": 10, "target": 100},
        {"name": "Không vi phạm kỷ luật, trừ điểm pháp lý", "unit": "%", "weight": 10, "target": 100},
    ],
    EvaluationTemplate.PM: [
        {"name": "Doanh số", "unit": "Tr.đ", "weight": 10},
        {"name": "Tổng Doanh thu", "unit": "Tr.đ", "weight": 10},
        {"name": "Doanh thu dịch vụ", "unit": "Tr.đ", "weight": 5},
        {"name": "Nhiệm vụ trọng tâm BGĐ giao", "unit": "%", "weight": 45},
        {"name": "Ý thức thái độ (việc khó, công đoàn...)", "unit": "%", "weight": 20, "target": 100},
        {"name": "Không vi phạm kỷ luật, trừ điểm pháp lý", "unit": "%", "weight": 10, "target": 100},
    ],
}


def template_for_role(role: Role) -> EvaluationTemplate:
    return EvaluationTemplate.PM if role == Role.PM else EvaluationTemplate.AM


def build_criteria(template: EvaluationTemplate) -> tuple[ScoreItem, ...]:
    return tuple(
        ScoreItem(
            item_id=f"cri_{idx}",
            name=t["name"],
            unit=t["unit"],
            weight=t["weight"],
            target=t.get("target", 0),
            actual=0,
        )
        for idx, t in enumerate(_TEMPLATES[template])
    )
