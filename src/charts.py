import io
import matplotlib.pyplot as plt
import plotly.graph_objects as go

TITLE = "Sampling distributions of the difference (P₂ − P₁)"

# -----------------------------
# Helpers for PDF (matplotlib)
# -----------------------------
def fig_to_png_bytes(fig):
    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight", dpi=180)
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()

def _rgba_to_mpl(color):
    """'rgba(255, 0, 0, 0.4)' -> (1.0, 0.0, 0.0, 0.4); anything else is passed through."""
    if not color.startswith("rgba("):
        return color
    r, g, b, a = [float(v) for v in color[5:-1].split(",")]
    return (r / 255, g / 255, b / 255, a)

# =============================
# Matplotlib chart (PDF)
# =============================
def distribution_chart_matplotlib(geometry):
    fig = plt.figure(figsize=(7.0, 3.4))
    ax = fig.add_subplot(111)

    for region in geometry.regions:
        ax.fill(region.x, region.y, color=_rgba_to_mpl(region.fill), linewidth=0, label=region.name)

    for s in geometry.series:
        ax.plot(s.x, s.y, color=s.color, linewidth=2, label=s.name)
        ax.fill_between(s.x, s.y, color=_rgba_to_mpl(s.fill))

    line = geometry.boundary_line
    ax.vlines(line.x, line.y0, line.y1, colors=line.color, linestyles="dashed", linewidth=1.5)

    for a in geometry.annotations:
        ax.annotate(a.text, (a.x, a.y), ha="center", va="bottom", fontsize=7, color=a.color)

    ax.set_ylim(0, geometry.y_max)
    ax.set_yticks([])
    ax.xaxis.set_major_formatter(lambda v, _pos: f"{v * 100:.1f}%")
    ax.set_xlabel("Difference in conversion rates")
    ax.set_ylabel("Probability density")
    ax.set_title(TITLE)
    ax.legend(loc="upper left", fontsize=7, frameon=False)
    ax.grid(False)
    return fig

# =============================
# Plotly chart (interactive UI)
# =============================
def interactive_distribution_chart(geometry):
    fig = go.Figure()

    for s in geometry.series:
        fig.add_trace(go.Scatter(
            x=list(s.x),
            y=list(s.y),
            mode="lines",
            name=s.name,
            line=dict(color=s.color, width=3),
            fill="tozeroy",
            fillcolor=s.fill,
            hovertemplate="Difference: %{x:.2%}<br>Density: %{y:.2f}<extra></extra>"
        ))

    for region in geometry.regions:
        fig.add_trace(go.Scatter(
            x=list(region.x),
            y=list(region.y),
            mode="lines",
            name=region.name,
            fill="toself",
            fillcolor=region.fill,
            line=dict(width=0),
            hoverinfo="skip"
        ))

    line = geometry.boundary_line
    fig.add_shape(
        type="line",
        x0=line.x, x1=line.x, y0=line.y0, y1=line.y1,
        line=dict(color=line.color, dash="dash", width=2),
        layer="above"
    )

    for a in geometry.annotations:
        if a.arrow:
            fig.add_annotation(
                x=a.x, y=a.y, text=a.text, showarrow=True, arrowhead=2, ax=0, ay=-30,
                font=dict(size=10, color=a.color)
            )
        else:
            fig.add_annotation(
                x=a.x, y=a.y, text=a.text, showarrow=False, yshift=10,
                font=dict(size=10, color=a.color)
            )

    fig.update_layout(
        title=TITLE,
        xaxis=dict(title="Difference in conversion rates", tickformat=",.1%", zeroline=True, showgrid=False),
        yaxis=dict(title="Probability density", showticklabels=False, range=[0, geometry.y_max]),
        legend=dict(x=0.02, y=0.98),
        hovermode="closest",
        margin=dict(l=20, r=20, t=50, b=20),
        height=460
    )
    return fig
