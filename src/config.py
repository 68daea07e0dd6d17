from dataclasses import dataclass

@dataclass(frozen=True)
class Defaults:
    p1: float = 0.05             # baseline conversion rate
    delta: float = 0.02          # absolute lift the test is powered for
    alpha: float = 0.05          # one-tailed
    power: float = 0.80

DEFAULTS = Defaults()

@dataclass(frozen=True)
class ControlRange:
    label: str
    min_value: float
    max_value: float
    step: float
    fmt: str
    help: str = ""

# Widget hints only; the engine re-validates every value it receives
CONTROL_RANGES = {
    "p1": ControlRange(
        "Baseline rate (P₁)", 0.0, 0.20, 0.001, "%.3f",
        "Conversion rate of the control group."
    ),
    "delta": ControlRange(
        "Effect size (Δ)", 0.0, 0.10, 0.001, "%.3f",
        "Absolute lift you want to detect. P₂ = P₁ + Δ."
    ),
    "alpha": ControlRange(
        "Significance level (α)", 0.01, 0.10, 0.01, "%.2f",
        "Chance of a false positive (one-tailed)."
    ),
    "power": ControlRange(
        "Power (1 − β)", 0.70, 0.99, 0.01, "%.2f",
        "Chance of detecting the lift when it is real."
    ),
}

MIN_SAMPLE_SIZE = 10
CURVE_POINTS = 201
CURVE_SPAN_SIGMAS = 4.0
Y_HEADROOM = 1.1

PLACEHOLDER = "—"

COLORS = {
    "null": "#3b82f6",
    "null_fill": "rgba(59, 130, 246, 0.1)",
    "alt": "#059669",
    "alt_fill": "rgba(5, 150, 105, 0.1)",
    "type_one": "rgba(255, 0, 0, 0.4)",
    "type_two": "rgba(255, 165, 0, 0.4)",
    "boundary": "black",
}

REGION_LABELS = {
    "type_one": "Type I error (α)",
    "type_two": "Type II error (β)",
}

# Sensitivity grid around the current inputs
SENSITIVITY_DELTA_STEPS = (-2, -1, 0, 1, 2)
SENSITIVITY_POWERS = (0.70, 0.80, 0.90, 0.95)
