"""
History export

- CSV of triage assessments (one row per assessment)
- Printable report: Markdown body rendered to HTML, then to PDF with xhtml2pdf
"""
import csv
import html
from datetime import datetime
from io import BytesIO, StringIO
from typing import Any, Dict, List

import markdown
from xhtml2pdf import pisa

from disfagia_monitor.services.risk import risk_label
from disfagia_monitor.services.risk.catalog import FOOD_CONSISTENCIES

CSV_HEADER = ['Data', 'Horário', 'Instrumento', 'Pontuação', 'Nível de Risco']

RADI_INTERPRETATION = (
    "Quanto maior a pontuação, maior a probabilidade de presença de sintomas "
    "relacionados à disfagia orofaríngea. O instrumento não estabelece um ponto de "
    "corte fixo universal, mas sugere que qualquer escore positivo seja interpretado "
    "como alerta para rastreamento adicional e encaminhamento para exames de referência."
)


class ReportGenerationError(Exception):
    """Raised when the PDF renderer reports an error"""


def format_date_time(value: str) -> Dict[str, str]:
    """Split an ISO timestamp into pt-BR date (dd/mm/yyyy) and time (HH:MM)"""
    parsed = datetime.fromisoformat(value)
    return {
        'date': parsed.strftime('%d/%m/%Y'),
        'time': parsed.strftime('%H:%M'),
    }


def csv_filename(patient_name: str) -> str:
    return f"historico-radi-{patient_name}.csv"


def assessments_to_csv(assessments: List[Dict[str, Any]]) -> str:
    """
    Render assessments as CSV text, rows in the given order
    """
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for assessment in assessments:
        when = format_date_time(assessment['completed_at'])
        writer.writerow([
            when['date'],
            when['time'],
            assessment.get('instrument', 'radi').upper(),
            assessment['total_score'],
            assessment['risk_level'],
        ])
    return buffer.getvalue()


def build_report_markdown(
    patient: Dict[str, Any],
    assessments: List[Dict[str, Any]],
    daily_records: List[Dict[str, Any]],
) -> str:
    """
    Markdown body of the patient history report
    """
    lines = [
        f"# Histórico de Disfagia - {html.escape(patient.get('nome', ''))}",
        "",
        f"Gerado em: {datetime.now().strftime('%d/%m/%Y %H:%M')}",
        "",
    ]
    if patient.get('diagnostico'):
        lines += [f"**Diagnóstico:** {html.escape(patient['diagnostico'])}", ""]

    lines += ["## Avaliações de triagem", ""]
    if assessments:
        lines += ["| Data | Horário | Instrumento | Pontuação | Resultado |", "|---|---|---|---|---|"]
        for a in assessments:
            when = format_date_time(a['completed_at'])
            label = a.get('risk_label') or risk_label(a['risk_level'])
            lines.append(f"| {when['date']} | {when['time']} | {a.get('instrument', 'radi').upper()} | {a['total_score']} | {label} |")
        lines += ["", f"**Interpretação:** {RADI_INTERPRETATION}", ""]
    else:
        lines += ["Nenhuma avaliação registrada no período.", ""]

    lines += ["## Registros diários", ""]
    if daily_records:
        lines += ["| Data | Consistência | Sintomas | Pontuação | Resultado |", "|---|---|---|---|---|"]
        for r in daily_records:
            day = datetime.fromisoformat(r['record_date']).strftime('%d/%m/%Y')
            consistency = FOOD_CONSISTENCIES.get(r['food_consistency'], r['food_consistency'])
            symptoms = ", ".join(r.get('symptom_labels') or r.get('symptoms') or []) or "-"
            label = r.get('risk_label') or risk_label(r['risk_level'])
            lines.append(f"| {day} | {consistency} | {symptoms} | {r['risk_score']} | {label} |")
    else:
        lines.append("Nenhum registro diário no período.")

    return "\n".join(lines) + "\n"


REPORT_STYLE = """
    @page { size: a4; margin: 2cm; }
    body { font-family: Helvetica, sans-serif; font-size: 11px; line-height: 1.3; color: #333; }
    h1 { font-size: 20px; margin-bottom: 4px; }
    h2 { font-size: 15px; margin-top: 12px; margin-bottom: 4px; }
    p { margin-top: 4px; margin-bottom: 4px; }
    table { border-collapse: collapse; width: 100%; margin: 6px 0; }
    th, td { border: 1px solid #ddd; padding: 4px; text-align: left; }
    th { background-color: #f2f2f2; font-weight: bold; }
"""


def render_report_pdf(report_markdown: str) -> bytes:
    """
    Convert the Markdown report to PDF bytes

    Raises:
        ReportGenerationError: xhtml2pdf reported errors
    """
    html_content = markdown.markdown(report_markdown, extensions=['extra'])
    styled_html = f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<style>{REPORT_STYLE}</style>
</head>
<body>
{html_content}
</body>
</html>"""

    pdf_buffer = BytesIO()
    pisa_status = pisa.CreatePDF(
        BytesIO(styled_html.encode('utf-8')),
        dest=pdf_buffer,
        encoding='utf-8'
    )
    if pisa_status.err:
        raise ReportGenerationError(f"PDF generation failed: {pisa_status.err}")

    return pdf_buffer.getvalue()
