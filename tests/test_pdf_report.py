"""Tests for the one-page PDF brief."""

from __future__ import annotations

from src.insights import build_plan_cards
from src.pdf_report import build_pdf_bytes
from src.power import TestParameters, analyze
from src.sensitivity import default_grid, sensitivity_table


def test_pdf_with_sensitivity_table() -> None:
    analysis = analyze(TestParameters.from_effect(0.05, 0.02, 0.05, 0.80))
    deltas, powers = default_grid(0.02, 0.80)
    sens = sensitivity_table(0.05, 0.05, deltas, powers)

    pdf = build_pdf_bytes(analysis, build_plan_cards(analysis), "Checkout test", sensitivity=sens)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_pdf_without_sensitivity_table() -> None:
    analysis = analyze(TestParameters.from_effect(0.10, 0.05, 0.01, 0.95))
    pdf = build_pdf_bytes(analysis, build_plan_cards(analysis), "Pricing page")
    assert pdf.startswith(b"%PDF")
