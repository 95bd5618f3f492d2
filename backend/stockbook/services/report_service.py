# Overview: Service-layer operations for reporting; encapsulates business logic and database work.

from __future__ import annotations

import json

from flask import current_app

from ..formatting import format_cents
from ..models import Profile
from . import inventory_service
from .inventory_tree import (
    FinancialSummary,
    LowStockEntry,
    SalesRecord,
    financial_summary,
    low_stock,
    sales_by_date,
)
from .pdf_export import render_sales_record_pdf
from .textgen_client import TextGenClient, TextGenerationError


SUMMARY_ERROR_MESSAGE = "Failed to generate summary. Please ensure your API key is correctly configured."
EMPTY_SUMMARY = "No summary generated."


class SummaryError(Exception):
    """Raised when the AI summary cannot be produced; str() is user-facing."""
    pass


def financial_report(profile: Profile) -> FinancialSummary:
    return financial_summary(inventory_service.load_tree(profile))


def restock_alerts(profile: Profile) -> list[LowStockEntry]:
    return low_stock(inventory_service.load_tree(profile))


def sales_record(profile: Profile) -> SalesRecord:
    return sales_by_date(inventory_service.load_tree(profile))


def sales_record_pdf(profile: Profile) -> bytes:
    return render_sales_record_pdf(sales_record(profile), current_app.config["CURRENCY"])


def build_summary_prompt(summary: FinancialSummary, currency: str = "KSH") -> str:
    sold = [
        {"name": item.name, "profit": item.profit_cents / 100}
        for item in summary.sold_items
    ]
    return (
        "Analyze the following sales data for my small shop in Kenya and provide a brief "
        "summary of business performance.\n"
        f"- Total Revenue: {format_cents(summary.revenue_cents, currency)}\n"
        f"- Total Cost of Goods Sold: {format_cents(summary.cost_cents, currency)}\n"
        f"- Gross Profit: {format_cents(summary.profit_cents, currency)}\n"
        f"- Total items sold: {summary.items_sold}\n"
        "Provide one actionable insight for me to improve sales or profitability, based on this data.\n"
        "Keep the entire response concise and easy to read, under 150 words.\n"
        f"Here is the list of sold items for context: {json.dumps(sold)}"
    )


def generate_summary(profile: Profile, client: TextGenClient | None = None) -> str:
    """
    Ask the language model for a short business summary of the financials.

    Any failure is raised as SummaryError with one generic message.
    """
    summary = financial_report(profile)
    prompt = build_summary_prompt(summary, current_app.config["CURRENCY"])
    client = client or TextGenClient.from_config(current_app.config)

    try:
        text = client.generate(prompt)
    except TextGenerationError as exc:
        current_app.logger.error("Error generating summary: %s", exc)
        raise SummaryError(SUMMARY_ERROR_MESSAGE) from exc

    return text or EMPTY_SUMMARY
