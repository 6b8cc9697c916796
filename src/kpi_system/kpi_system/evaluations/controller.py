from __future__ import annotations

from dataclasses import replace

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_role, json_body, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..scoring.serializer import item_from_dict, scored_item_to_dict
from .model import EvaluationResult


def _result_to_dict(result: EvaluationResult) -> dict:
    ev = result.evaluation
    return {
        "id": ev.evaluation_id,
        "user_id": ev.user_id,
        "period": ev.period,
        "template": ev.template.value,
        "note": ev.note or "",
        "criteria": [scored_item_to_dict(c) for c in result.criteria],
        "total_score": result.total_score,
        "grade": result.grade.value,
    }


def register(app: Flask, container: Container) -> None:
    evaluations = container.evaluation_service

    def _ensure_can_view(user_id: int) -> None:
        # Non-admin users only see their own evaluations.
        if session.get("role") != Role.ADMIN.value and int(session["user_id"]) != int(user_id):
            raise AuthorizationError("Bạn không có quyền")

    def _apply_payload(user_id: int, period: str, data: dict):
        ev = evaluations.get_or_new(user_id=user_id, period=period)
        criteria = data.get("criteria")
        if criteria is not None:
            if not isinstance(criteria, list):
                raise ValidationError("criteria phải là danh sách")
            ev = replace(ev, criteria=tuple(item_from_dict(c) for c in criteria))
        if "note" in data:
            ev = replace(ev, note=(str(data.get("note") or "").strip() or None))
        return ev

    @app.route("/api/evaluations/period/<period>", methods=["GET"], endpoint="evaluations_ranking")
    @admin_required
    def evaluations_ranking(period: str):
        return jsonify(
            [
                {
                    "id": r.evaluation_id,
                    "user_id": r.user_id,
                    "full_name": r.full_name,
                    "template": r.template.value,
                    "total_score": r.total_score,
                    "grade": r.grade.value,
                }
                for r in evaluations.list_for_period(period)
            ]
        )

    @app.route("/api/evaluations/<int:user_id>/history", methods=["GET"], endpoint="evaluations_history")
    @login_required
    def evaluations_history(user_id: int):
        _ensure_can_view(user_id)
        return jsonify([{"period": p, "total_score": s} for p, s in evaluations.history_for_user(user_id)])

    @app.route("/api/evaluations/<int:user_id>/<period>", methods=["GET"], endpoint="evaluations_get")
    @login_required
    def evaluations_get(user_id: int, period: str):
        _ensure_can_view(user_id)
        ev = evaluations.get_or_new(user_id=user_id, period=period)
        return jsonify(_result_to_dict(evaluations.evaluate(ev)))

    @app.route("/api/evaluations/<int:user_id>/<period>/preview", methods=["POST"], endpoint="evaluations_preview")
    @login_required
    def evaluations_preview(user_id: int, period: str):
        _ensure_can_view(user_id)
        data = json_body()
        ev = _apply_payload(user_id, period, data)
        if "criterion_id" not in data:
            return jsonify(_result_to_dict(evaluations.evaluate(ev)))

        # Single-criterion edit on top of the (optionally replaced) criteria.
        result = evaluations.record_actual(
            ev,
            criterion_id=str(data.get("criterion_id") or ""),
            actual=data.get("actual"),
            target=data.get("target"),
        )
        return jsonify(_result_to_dict(result))

    @app.route("/api/evaluations/<int:user_id>/<period>", methods=["PUT"], endpoint="evaluations_save")
    @admin_required
    def evaluations_save(user_id: int, period: str):
        ev = _apply_payload(user_id, period, json_body())
        result = evaluations.save(current_role=current_role(), evaluation=ev)
        return jsonify(_result_to_dict(result))
