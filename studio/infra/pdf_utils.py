import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

_HEADER = ["Ejercicio", "Series", "Reps", "RPE", "Descanso"]


def generate_pdf_for_plan(plan):
    """Generate a PDF with one table per training day of the provided plan."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(escape(plan.title), styles["Title"]),
        Paragraph(escape(plan.introduction), styles["BodyText"]),
        Spacer(1, 16),
    ]

    table_style = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("ALIGN", (1, 0), (-1, -1), "CENTER"),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ])

    for week in plan.weeks:
        elements.append(Paragraph(f"Semana {week.week}", styles["Heading2"]))
        for day in week.days:
            elements.append(Paragraph(escape(day.day), styles["Heading3"]))
            data = [_HEADER] + [[ex.name, ex.sets, ex.reps, ex.rpe, ex.rest] for ex in day.exercises]
            table = Table(data, repeatRows=1)
            table.setStyle(table_style)
            elements.extend([table, Spacer(1, 10)])

    nutrition = plan.nutrition
    elements.append(Paragraph("Nutrición y descanso", styles["Heading2"]))
    for label, text in (("Proteína", nutrition.protein), ("Hidratación", nutrition.hydration),
                        ("Sueño", nutrition.sleep)):
        elements.append(Paragraph(f"<b>{label}:</b> {escape(text)}", styles["BodyText"]))
    elements.extend([Spacer(1, 12), Paragraph(escape(plan.final_message), styles["Italic"])])

    doc.build(elements)
    return buf.getvalue()
