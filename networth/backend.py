"""REST backend for the net worth projection."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict

from flask import Flask, Response, jsonify, request

from networth.config import load_settings
from networth.data_model import (
    AssetTableModel,
    ExpenseTableModel,
    IncomeTableModel,
    MajorExpenseTableModel,
    Portfolio,
)
from networth.engine.amortization import annual_installment
from networth.engine.export import EXPORT_FILENAME
from networth.engine.projection import ProjectionError, project_portfolio
from networth.engine.state import PortfolioState
from networth.engine.validation import plan_warnings

app = Flask(__name__)

state = PortfolioState()

TABLE_MODELS = (
    IncomeTableModel(),
    ExpenseTableModel(),
    MajorExpenseTableModel(),
    AssetTableModel(),
)


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize(value: Any):
    if isinstance(value, dict):
        return {key: _sanitize(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize(item) for item in value]
    if isinstance(value, float) and _is_nan(value):
        return None
    return value


def _projection_payload(portfolio: Portfolio, result) -> Dict[str, Any]:
    return {
        "result": _sanitize(result.to_dict()),
        "warnings": plan_warnings(portfolio),
    }


@app.after_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.get("/api/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/schema")
def get_schema():
    payload = {model.name: _sanitize(model.to_payload()) for model in TABLE_MODELS}
    payload["planDefaults"] = {
        "startYear": state.portfolio.start_year,
        "endYear": state.portfolio.end_year,
        "userAge": state.portfolio.user_age,
    }
    return jsonify(payload)


@app.get("/api/portfolio")
def get_portfolio():
    return jsonify(state.portfolio.to_dict())


@app.put("/api/portfolio")
def put_portfolio():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Portfolio must be a JSON object."}), 400
    try:
        portfolio = Portfolio.from_dict(payload)
    except (TypeError, ValueError, AttributeError) as exc:
        app.logger.warning("Rejected portfolio payload: %s", exc)
        return jsonify({"error": f"Invalid portfolio: {exc}"}), 400
    try:
        result = state.set_portfolio(portfolio)
    except ProjectionError as exc:
        app.logger.exception("Projection failed")
        return jsonify({"error": str(exc)}), 500
    return jsonify(_projection_payload(portfolio, result))


@app.post("/api/projection")
def preview_projection():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Portfolio must be a JSON object."}), 400
    try:
        portfolio = Portfolio.from_dict(payload)
    except (TypeError, ValueError, AttributeError) as exc:
        app.logger.warning("Rejected projection payload: %s", exc)
        return jsonify({"error": f"Invalid portfolio: {exc}"}), 400
    try:
        result = project_portfolio(portfolio, strict=state.settings.strict_projection)
    except ProjectionError as exc:
        app.logger.exception("Projection failed")
        return jsonify({"error": str(exc)}), 500
    return jsonify(_projection_payload(portfolio, result))


@app.get("/api/installment")
def installment_preview():
    try:
        principal = float(request.args["principal"])
        interest = float(request.args.get("interest", 0.0))
        start_year = int(request.args["startYear"])
        end_year = int(request.args.get("endYear", start_year))
    except (KeyError, TypeError, ValueError):
        return jsonify({"error": "principal and startYear are required numbers."}), 400
    if end_year < start_year:
        return jsonify({"error": "endYear must not be before startYear."}), 400
    amount = annual_installment(principal, interest, start_year, end_year)
    return jsonify({"annualInstallmentAmount": _sanitize(amount)})


@app.get("/api/export.csv")
def export_csv():
    return Response(
        state.export_csv(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s")
    app.run(debug=False, port=settings.port)
