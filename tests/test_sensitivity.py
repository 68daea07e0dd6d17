"""Tests for the sample-size sensitivity grid."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from src.config import CONTROL_RANGES
from src.sensitivity import default_grid, display_table, sensitivity_table, table_csv_bytes


def test_default_grid_centres_on_current_inputs() -> None:
    deltas, powers = default_grid(0.02, 0.85)
    assert deltas == pytest.approx([0.01, 0.015, 0.02, 0.025, 0.03])
    assert 0.85 in powers
    assert powers == sorted(powers)


def test_default_grid_clips_to_control_ranges() -> None:
    deltas, _ = default_grid(0.005, 0.80)
    assert all(CONTROL_RANGES["delta"].min_value < d <= CONTROL_RANGES["delta"].max_value for d in deltas)
    assert 0.0 not in deltas


def test_table_shape_and_monotonicity() -> None:
    df = sensitivity_table(0.05, 0.05, [0.01, 0.02, 0.03], [0.7, 0.8, 0.9])
    n_cols = [c for c in df.columns if c.startswith("N @")]
    assert n_cols == ["N @ 70% power", "N @ 80% power", "N @ 90% power"]

    grid = df[n_cols].astype("float64").to_numpy()
    assert np.all(np.diff(grid, axis=0) <= 0)
    assert np.all(np.diff(grid, axis=1) >= 0)
    assert int(df.loc[1, "N @ 80% power"]) == 1743


def test_invalid_cells_are_na() -> None:
    df = sensitivity_table(0.05, 0.05, [0.0, 0.02, 0.96], [0.8])
    col = df["N @ 80% power"]
    assert str(col.dtype) == "Int64"
    assert pd.isna(col.iloc[0])
    assert pd.isna(col.iloc[2])
    assert not pd.isna(col.iloc[1])


def test_csv_export() -> None:
    df = sensitivity_table(0.05, 0.05, [0.02], [0.8])
    text = table_csv_bytes(df).decode("utf-8")
    header = text.splitlines()[0]
    assert header == "Lift (pts),P2 (%),N @ 80% power"
    assert list(display_table(df).columns) == ["Lift (pts)", "P2 (%)", "N @ 80% power"]
    assert text.splitlines()[1].endswith(",1743")
