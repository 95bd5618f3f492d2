# Overview: Flask API routes for reports; parses input and returns JSON responses.

# backend/stockbook/routes/reports.py
"""
Reporting routes.

All figures are derived from the caller's inventory tree at request time;
nothing here is stored.

- /financial          revenue, cost, profit, top sellers
- /financial/summary  short AI-written commentary on /financial
- /restock            sub-categories at or below the low-stock threshold
- /sales              sold items grouped by sale date, newest first
- /sales.pdf          the same record as a printable PDF
"""

from io import BytesIO

from flask import Blueprint, jsonify, current_app, g, send_file

from ..decorators import require_auth, require_permission
from ..formatting import format_cents_grouped
from ..services import report_service
from ..services.inventory_tree import LOW_STOCK_THRESHOLD
from ..services.report_service import SummaryError


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/financial")
@require_auth
@require_permission("VIEW_FINANCIALS")
def financial_report_route():
    try:
        summary = report_service.financial_report(g.current_profile)
        body = summary.to_dict()
        currency = current_app.config["CURRENCY"]
        body["display"] = {
            "revenue": format_cents_grouped(summary.revenue_cents, currency),
            "cost": format_cents_grouped(summary.cost_cents, currency),
            "profit": format_cents_grouped(summary.profit_cents, currency),
        }
        return jsonify(body), 200
    except Exception:
        current_app.logger.exception("Failed to build financial report")
        return jsonify({"error": "Internal server error"}), 500


@reports_bp.post("/financial/summary")
@require_auth
@require_permission("VIEW_FINANCIALS")
def financial_summary_route():
    """
    Ask the language model for a short commentary on the financials.

    502 with a generic message when the model is unreachable or misconfigured.
    """
    try:
        text = report_service.generate_summary(g.current_profile)
    except SummaryError as e:
        return jsonify({"error": str(e)}), 502
    return jsonify({"summary": text}), 200


@reports_bp.get("/restock")
@require_auth
@require_permission("VIEW_RESTOCK_ALERTS")
def restock_route():
    try:
        entries = report_service.restock_alerts(g.current_profile)
        return jsonify({
            "threshold": LOW_STOCK_THRESHOLD,
            "alerts": [entry.to_dict() for entry in entries],
        }), 200
    except Exception:
        current_app.logger.exception("Failed to build restock alerts")
        return jsonify({"error": "Internal server error"}), 500


@reports_bp.get("/sales")
@require_auth
@require_permission("VIEW_SALES")
def sales_record_route():
    try:
        record = report_service.sales_record(g.current_profile)
        return jsonify(record.to_dict()), 200
    except Exception:
        current_app.logger.exception("Failed to build sales record")
        return jsonify({"error": "Internal server error"}), 500


@reports_bp.get("/sales.pdf")
@require_auth
@require_permission("VIEW_SALES")
def sales_record_pdf_route():
    try:
        pdf_bytes = report_service.sales_record_pdf(g.current_profile)
    except Exception:
        current_app.logger.exception("Failed to render sales record PDF")
        return jsonify({"error": "Internal server error"}), 500

    return send_file(
        BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name="sales_record.pdf",
    )
