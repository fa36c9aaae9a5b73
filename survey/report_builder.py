import logging
import os

from fpdf import FPDF

import config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Save text report
# ---------------------------------------------------------------------
def save_text_report(text: str, filename: str = "Survey_Report.txt", report_path: str = None) -> str:
    report_path = report_path or config.REPORT_PATH
    os.makedirs(report_path, exist_ok=True)

    path = os.path.join(report_path, filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


# ---------------------------------------------------------------------
# PDF report class
# ---------------------------------------------------------------------
class PDFReport(FPDF):
    title_text = "Spiritual Persona Survey"

    def header(self):
        self.set_font("Helvetica", "B", 14)
        self.cell(0, 10, self.title_text, new_x="LMARGIN", new_y="NEXT", align="C")
        self.ln(5)

    def section_title(self, title):
        self.set_font("Helvetica", "B", 12)
        self.cell(0, 8, title, new_x="LMARGIN", new_y="NEXT")
        self.ln(2)

    def section_body(self, text):
        self.set_font("Helvetica", "", 10)
        self.multi_cell(0, 6, text)
        self.ln(4)


# ---------------------------------------------------------------------
# Save PDF report
# ---------------------------------------------------------------------
def save_pdf_report(text: str, visuals: dict, filename: str = "Survey_Report.pdf", report_path: str = None) -> str:
    report_path = report_path or config.REPORT_PATH
    os.makedirs(report_path, exist_ok=True)

    pdf = PDFReport()
    pdf.add_page()

    # Sections are delimited by the === markers from section_writer
    for section in text.split("==="):
        section = section.strip()
        if not section:
            continue
        lines = section.split("\n", 1)
        title = lines[0].strip()
        body = lines[1].strip() if len(lines) > 1 else ""
        pdf.section_title(title)
        pdf.section_body(body)

        if "PERSONA DISTRIBUTION" in title:
            for key in ("Distribution_Chart", "Percentage_Distribution"):
                if key in visuals:
                    pdf.image(visuals[key], w=120)
        if "DETAILED SCORES" in title and "Persona_Scores" in visuals:
            pdf.image(visuals["Persona_Scores"], w=140)

    path = os.path.join(report_path, filename)
    pdf.output(path)
    return path


# ---------------------------------------------------------------------
# Build both text + PDF reports
# ---------------------------------------------------------------------
def build_reports(text_report: str, visuals: dict, name: str = "dashboard", report_path: str = None) -> tuple:
    txt_path = save_text_report(text_report, f"{name}_report.txt", report_path)
    pdf_path = save_pdf_report(text_report, visuals, f"{name}_report.pdf", report_path)
    logger.info(f"Reports written: {pdf_path}, {txt_path}")
    return pdf_path, txt_path
