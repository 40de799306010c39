from __future__ import annotations

from datetime import date
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import month_name, now_local
from ..common.validators import optional_id, require_month, require_year
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CommitConflictError,
    RecalculationError,
    ValidationError,
)
from ..container import Container
from .ranking import RankingReporter


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Please log in to continue")
            if session.get("role") != Role.ADMIN.value:
                raise AuthorizationError("You do not have permission")
            return view(*args, **kwargs)

        return wrapper

    def _scope_args(source) -> tuple:
        """month/year default to the current month; campus falls back to the admin's own campus."""
        today = now_local().date()
        month = require_month(source.get("month") or today.month)
        year = require_year(source.get("year") or today.year)
        campus_id = optional_id(source.get("campus_id") or session.get("campus_id"), "campus_id")
        return campus_id, month, year

    def _handle(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except ValidationError as e:
                return _fail(str(e), 400)
            except AuthenticationError as e:
                return _fail(str(e), 401)
            except AuthorizationError as e:
                return _fail(str(e), 403)
            except CommitConflictError as e:
                return _fail(str(e), 409)
            except RecalculationError as e:
                return _fail(str(e), 500)

        return wrapper

    @app.route("/admin/performance", methods=["GET"], endpoint="performance_index")
    @_handle
    @admin_required
    def performance_index():
        campus_id, month, year = _scope_args(request.args)
        ranking = RankingReporter(container.recalculation_service.stored_results(campus_id, month, year))
        return jsonify(
            {
                "success": True,
                "month": month,
                "month_name": month_name(month),
                "year": year,
                "campus_id": campus_id,
                "top_performers": [r.to_dict() for r in ranking.top(container.scoring.top_n)],
                "performances": [r.to_dict() for r in ranking.ordered()],
            }
        )

    @app.route("/admin/performance/calculate", methods=["GET"], endpoint="performance_calculate")
    @_handle
    @admin_required
    def performance_calculate():
        campus_id, month, year = _scope_args(request.args)
        run = container.recalculation_service.preview(campus_id, month, year)
        ranking = RankingReporter(run.results)
        return jsonify(
            {
                "success": True,
                "state": run.state.value,
                "history": [s.value for s in run.history],
                "month": month,
                "year": year,
                "campus_id": campus_id,
                "teachers_count": len(run.results),
                "performances": [r.to_dict() for r in ranking.ordered()],
            }
        )

    @app.route("/admin/performance/save", methods=["POST"], endpoint="performance_save")
    @_handle
    @admin_required
    def performance_save():
        source = request.get_json(silent=True) or request.form
        campus_id, month, year = _scope_args(source)
        run = container.recalculation_service.recalculate(
            campus_id,
            month,
            year,
            created_by=session.get("name") or None,
        )
        return jsonify(
            {
                "success": True,
                "state": run.state.value,
                "history": [s.value for s in run.history],
                "saved": len(run.results),
                "message": f"Teacher performances calculated and saved for {month_name(month)} {year}",
            }
        )

    @app.route("/admin/performance/<int:performance_id>", methods=["GET"], endpoint="performance_details")
    @_handle
    @admin_required
    def performance_details(performance_id: int):
        result = container.recalculation_service.stored_result(performance_id)
        if result is None:
            return _fail("Performance record not found", 404)
        return jsonify({"success": True, "performance": result.to_dict()})

    @app.route("/admin/test-returns/summary", methods=["GET"], endpoint="test_returns_summary")
    @_handle
    @admin_required
    def test_returns_summary():
        campus_id, month, year = _scope_args(request.args)
        summary = container.paper_return_summary_service.build(month=month, year=year, campus_id=campus_id)
        return jsonify({"success": True, "summary": _summary_dict(summary)})


def _summary_dict(summary) -> dict:
    def _d(value):
        return value.isoformat() if isinstance(value, date) else value

    return {
        "month": summary.month,
        "year": summary.year,
        "campus_id": summary.campus_id,
        "total_tests_scheduled": summary.total_tests_scheduled,
        "tests_returned_on_time": summary.tests_returned_on_time,
        "tests_returned_late": summary.tests_returned_late,
        "tests_pending_return": summary.tests_pending_return,
        "on_time_return_percentage": summary.on_time_return_percentage,
        "good_checking_count": summary.good_checking_count,
        "better_checking_count": summary.better_checking_count,
        "bad_checking_count": summary.bad_checking_count,
        "teachers": [vars(t) for t in summary.teachers],
        "recent_returns": [{k: _d(v) for k, v in vars(r).items()} for r in summary.recent_returns],
    }
