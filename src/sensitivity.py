import io
import pandas as pd
from .config import CONTROL_RANGES, SENSITIVITY_DELTA_STEPS, SENSITIVITY_POWERS
from .power import InputOutOfDomain, compute_sample_size

def _power_col(power):
    return f"N @ {power * 100:.0f}% power"

def default_grid(delta, power):
    """
    Effect sizes a few slider steps either side of the current one, and the
    standard power targets plus the current one. Both clipped to the control ranges.
    """
    d_rng = CONTROL_RANGES["delta"]
    p_rng = CONTROL_RANGES["power"]

    deltas = sorted({
        round(delta + k * d_rng.step * 5, 6)
        for k in SENSITIVITY_DELTA_STEPS
        if d_rng.min_value < delta + k * d_rng.step * 5 <= d_rng.max_value
    })
    powers = sorted({
        round(p, 4) for p in (*SENSITIVITY_POWERS, power)
        if p_rng.min_value <= p <= p_rng.max_value
    })
    return deltas, powers

def _n_or_na(p1, p2, alpha, power):
    try:
        return compute_sample_size(p1, p2, alpha, power).sample_size_per_group
    except InputOutOfDomain:
        return pd.NA

def sensitivity_table(p1, alpha, deltas, powers) -> pd.DataFrame:
    """
    Required N per group for each effect size (rows) and power target (columns).
    Cells whose inputs are out of domain are <NA>.
    """
    out = pd.DataFrame({"Delta": [float(d) for d in deltas]})
    out["P2"] = p1 + out["Delta"]
    out["Delta_Pct"] = out["Delta"] * 100
    out["P2_Pct"] = out["P2"] * 100

    for power in powers:
        out[_power_col(power)] = pd.array(
            [_n_or_na(p1, p1 + d, alpha, power) for d in out["Delta"]],
            dtype="Int64"
        )

    return out

def display_table(df: pd.DataFrame) -> pd.DataFrame:
    keep = ["Delta_Pct", "P2_Pct"] + [c for c in df.columns if c.startswith("N @")]
    return df.loc[:, keep].rename(columns={"Delta_Pct": "Lift (pts)", "P2_Pct": "P2 (%)"})

def table_csv_bytes(df: pd.DataFrame) -> bytes:
    bio = io.StringIO()
    display_table(df).to_csv(bio, index=False)
    return bio.getvalue().encode("utf-8")
