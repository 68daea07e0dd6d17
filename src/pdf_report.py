import io
from datetime import datetime
import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas
from reportlab.lib.utils import ImageReader

from .charts import distribution_chart_matplotlib, fig_to_png_bytes
from .geometry import build_geometry
from .insights import plan_summary
from .sensitivity import display_table

def _header(c, title, subtitle):
    c.setFont("Helvetica-Bold", 15)
    c.drawString(2.0 * cm, 28.4 * cm, title)
    c.setFont("Helvetica", 9.5)
    c.drawString(2.0 * cm, 27.8 * cm, subtitle)
    c.setLineWidth(0.6)
    c.line(2.0 * cm, 27.5 * cm, 19.5 * cm, 27.5 * cm)

def _stat_card(c, x, y, w, h, label, value, note):
    c.setLineWidth(0.6)
    c.roundRect(x, y, w, h, 8, stroke=1, fill=0)
    c.setFont("Helvetica", 8.0)
    c.drawString(x + 0.4 * cm, y + h - 0.7 * cm, label[:34])
    c.setFont("Helvetica-Bold", 14)
    c.drawString(x + 0.4 * cm, y + h - 1.65 * cm, value)
    c.setFont("Helvetica", 7.6)
    c.drawString(x + 0.4 * cm, y + 0.45 * cm, note[:36])

def _table(c, df, x, y, col_w=2.9 * cm, row_h=0.5 * cm):
    c.setFont("Helvetica-Bold", 8.6)
    for j, col in enumerate(df.columns):
        c.drawString(x + j * col_w, y, str(col))
    c.setFont("Helvetica", 8.6)
    for i, (_, row) in enumerate(df.iterrows(), start=1):
        for j, v in enumerate(row):
            if pd.isna(v):
                text = "—"
            elif isinstance(v, float):
                text = f"{v:.1f}"
            else:
                text = f"{int(v):,}"
            c.drawString(x + j * col_w, y - i * row_h, text)

def build_pdf_bytes(analysis, cards, report_title, sensitivity=None):
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)

    dt = datetime.now().strftime("%d %b %Y")
    params = analysis.params
    subtitle = (
        f"Generated {dt}  •  P1 {params.p1:.3f}  •  lift {params.delta:.3f}  •  "
        f"alpha {params.alpha:.2f} (one-tailed)  •  power {params.power:.2f}"
    )
    _header(c, report_title, subtitle)

    # Cards
    w, h, gap = 4.1 * cm, 2.1 * cm, 0.35 * cm
    for i, card in enumerate(cards[:4]):
        _stat_card(c, 2.0 * cm + i * (w + gap), 24.9 * cm, w, h, card["label"], card["value"], card["note"])

    # Chart
    fig = distribution_chart_matplotlib(build_geometry(analysis))
    img = ImageReader(io.BytesIO(fig_to_png_bytes(fig)))
    c.drawImage(img, 2.0 * cm, 15.6 * cm, width=17.5 * cm, height=8.8 * cm, preserveAspectRatio=True, mask="auto")

    # Plain-language summary
    c.setFont("Helvetica-Bold", 10.5)
    c.drawString(2.0 * cm, 14.9 * cm, "What this plan means")
    c.setFont("Helvetica", 9.2)
    y = 14.4 * cm
    for line in plan_summary(analysis):
        c.drawString(2.0 * cm, y, line[:115])
        y -= 0.5 * cm

    if sensitivity is not None and len(sensitivity):
        y -= 0.4 * cm
        c.setFont("Helvetica-Bold", 10.5)
        c.drawString(2.0 * cm, y, "Sensitivity: users per group")
        _table(c, display_table(sensitivity), 2.0 * cm, y - 0.7 * cm)

    c.showPage()
    c.save()
    buf.seek(0)
    return buf.getvalue()
