from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, json_body, login_required
from ..container import Container
from ..scoring.serializer import (
    group_to_dict,
    item_to_dict,
    period_from_dict,
    period_to_dict,
    scorecard_to_dict,
)


def _at_risk_to_dict(a) -> dict:
    return {
        "group_id": a.group_id,
        "group_name": a.group_name,
        "item": item_to_dict(a.item),
        "percent": a.percent,
        "score": a.contribution,
    }


def register(app: Flask, container: Container) -> None:
    kpi = container.kpi_service

    @app.route("/api/kpi/periods", methods=["GET"], endpoint="kpi_periods")
    @login_required
    def kpi_periods():
        return jsonify(kpi.list_periods())

    @app.route("/api/kpi/trend", methods=["GET"], endpoint="kpi_trend")
    @login_required
    def kpi_trend():
        limit = request.args.get("limit", type=int)
        points = kpi.trend(limit=limit)
        return jsonify([{"period": p.period, "total_score": p.total_score} for p in points])

    @app.route("/api/kpi/<period>", methods=["GET"], endpoint="kpi_get")
    @login_required
    def kpi_get(period: str):
        return jsonify(scorecard_to_dict(kpi.scorecard(period)))

    @app.route("/api/kpi/<period>/init", methods=["POST"], endpoint="kpi_init")
    @admin_required
    def kpi_init(period: str):
        created = kpi.init_period(current_role=current_role(), period=period)
        return jsonify(period_to_dict(created)), 201

    @app.route("/api/kpi/<period>", methods=["PUT"], endpoint="kpi_save")
    @admin_required
    def kpi_save(period: str):
        data = json_body()
        data["period"] = period
        saved = kpi.save_period(current_role=current_role(), period_score=period_from_dict(data))
        return jsonify(period_to_dict(saved))

    @app.route("/api/kpi/<period>", methods=["DELETE"], endpoint="kpi_delete")
    @admin_required
    def kpi_delete(period: str):
        kpi.delete_period(current_role=current_role(), period=period)
        return jsonify({"success": True})

    @app.route("/api/kpi/<period>/groups", methods=["POST"], endpoint="kpi_add_group")
    @admin_required
    def kpi_add_group(period: str):
        data = json_body()
        group = kpi.add_group(
            current_role=current_role(),
            period=period,
            name=str(data.get("name", "")),
            unit=str(data.get("unit", "")),
            weight=data.get("weight", 0),
            auto_calculate=data.get("auto_calculate", True),
            target=data.get("target", 0),
        )
        return jsonify(group_to_dict(group)), 201

    @app.route("/api/kpi/<period>/groups/<group_id>", methods=["PATCH"], endpoint="kpi_update_group")
    @admin_required
    def kpi_update_group(period: str, group_id: str):
        group = kpi.update_group(current_role=current_role(), period=period, group_id=group_id, changes=json_body())
        return jsonify(group_to_dict(group))

    @app.route("/api/kpi/<period>/groups/<group_id>", methods=["DELETE"], endpoint="kpi_remove_group")
    @admin_required
    def kpi_remove_group(period: str, group_id: str):
        kpi.remove_group(current_role=current_role(), period=period, group_id=group_id)
        return jsonify({"success": True})

    @app.route("/api/kpi/<period>/groups/<group_id>/items", methods=["POST"], endpoint="kpi_add_item")
    @admin_required
    def kpi_add_item(period: str, group_id: str):
        data = json_body()
        item = kpi.add_item(
            current_role=current_role(),
            period=period,
            group_id=group_id,
            name=str(data.get("name", "")),
            unit=str(data.get("unit", "")),
            target=data.get("target", 0),
            weight=data.get("weight", 0),
        )
        return jsonify(item_to_dict(item)), 201

    @app.route("/api/kpi/<period>/groups/<group_id>/items/<item_id>", methods=["PATCH"], endpoint="kpi_update_item")
    @admin_required
    def kpi_update_item(period: str, group_id: str, item_id: str):
        item = kpi.update_item(
            current_role=current_role(), period=period, group_id=group_id, item_id=item_id, changes=json_body()
        )
        return jsonify(item_to_dict(item))

    @app.route("/api/kpi/<period>/groups/<group_id>/items/<item_id>", methods=["DELETE"], endpoint="kpi_remove_item")
    @admin_required
    def kpi_remove_item(period: str, group_id: str, item_id: str):
        kpi.remove_item(current_role=current_role(), period=period, group_id=group_id, item_id=item_id)
        return jsonify({"success": True})

    @app.route("/api/kpi/<period>/actuals", methods=["PUT"], endpoint="kpi_record_actual")
    @login_required
    def kpi_record_actual(period: str):
        data = json_body()
        item_id = data.get("item_id")
        updated = kpi.record_actual(
            period=period,
            group_id=str(data.get("group_id", "")),
            item_id=str(item_id) if item_id else None,
            actual=data.get("actual", 0),
        )
        return jsonify(period_to_dict(updated))

    @app.route("/api/kpi/<period>/at-risk", methods=["GET"], endpoint="kpi_at_risk")
    @login_required
    def kpi_at_risk(period: str):
        return jsonify([_at_risk_to_dict(a) for a in kpi.at_risk(period)])
