import numpy as np
from .config import MIN_SAMPLE_SIZE, PLACEHOLDER

def format_pct(x, digits=1):
    if x is None or not np.isfinite(x):
        return PLACEHOLDER
    return f"{x * 100:.{digits}f}%"

def sample_size_text(stats):
    """Required N per group, thousands-separated, or the placeholder when there is no result."""
    if stats is None:
        return PLACEHOLDER
    return f"{stats.sample_size_per_group:,}"

def variant_rate_text(stats):
    if stats is None:
        return PLACEHOLDER
    return format_pct(stats.p2)

def build_plan_cards(analysis, error=None):
    """
    Cards shown on the page and in the PDF. With no analysis (invalid input)
    every value switches to the placeholder so nothing stale is shown.
    """
    if analysis is None:
        note = str(error) if error else "Adjust the inputs to get a plan."
        return [
            {"label": "Required users per group (N)", "value": PLACEHOLDER, "note": note},
            {"label": "Target conversion rate (P2)", "value": PLACEHOLDER, "note": ""},
            {"label": "Total users", "value": PLACEHOLDER, "note": ""},
            {"label": "Achieved power", "value": PLACEHOLDER, "note": ""},
        ]

    stats = analysis.stats
    n = stats.sample_size_per_group
    return [
        {
            "label": "Required users per group (N)",
            "value": sample_size_text(stats),
            "note": "Each of control and variant",
        },
        {
            "label": "Target conversion rate (P2)",
            "value": variant_rate_text(stats),
            "note": f"Baseline {format_pct(stats.p1)} + {format_pct(analysis.params.delta)}",
        },
        {
            "label": "Total users",
            "value": f"{2 * n:,}",
            "note": "Control + variant",
        },
        {
            "label": "Achieved power",
            "value": format_pct(analysis.achieved_power),
            "note": f"Target {format_pct(analysis.params.power, 0)}",
        },
    ]

def plan_summary(analysis):
    stats = analysis.stats
    params = analysis.params
    n = stats.sample_size_per_group
    boundary = analysis.curves.boundary.value

    lines = [
        f"With {n:,} users in each group, a real move from {format_pct(stats.p1)} to "
        f"{format_pct(stats.p2)} is detected {format_pct(analysis.achieved_power, 0)} of the time.",
        f"Call the variant a winner only if it beats control by at least {format_pct(boundary, 2)} "
        f"(one-tailed, alpha = {params.alpha:.2f}).",
        f"If there is no real difference, that rule still declares a winner "
        f"{format_pct(analysis.type_one_error, 1)} of the time (Type I error).",
        f"If the lift is real, the test misses it {format_pct(analysis.type_two_error, 1)} of the time (Type II error).",
    ]
    if n == MIN_SAMPLE_SIZE:
        lines.append(f"The formula asks for at most {MIN_SAMPLE_SIZE} users per group, so the minimum of {MIN_SAMPLE_SIZE} is used.")
    return lines
