# pdf_export.py
# Geração do PDF da nota no formato da nota física (reportlab)

import os
import subprocess
import sys
from datetime import datetime
from typing import Dict, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from core.calculator import money
from core.config import DEFAULT_COMPANY
from core.exceptions import ExportError
from core.logger import log_error, log_event
from core.models import Nota

CLAUSES = (
    "Cláusula 1: Em caso de cancelamento do contrato não devolvemos o valor recebido.",
    "Cláusula 2: O valor recebido fica disponível para ser reutilizado em caso de cancelamento tendo um aviso de 15 dias antes do evento.",
    "Cláusula 3: Não repassamos pagamentos recebidos de um contrato para outro contrato.",
    "Cláusula 4: O cuidado de uso da roupa é responsabilidade do cliente. É necessário o cliente fazer a conferência do vestido e dos itens na hora de buscar os produtos alugados.",
    "Cláusula 5: Em caso de estragos por mau uso do cliente será avaliado o dano, se houver perda total do produto o cliente fica responsável por fazer o pagamento total do produto.",
    "Cláusula 6: O prazo de entrega deverá ser respeitado em ambas as partes tendo uma tolerância de 8 horas ambas as partes.",
    "Cláusula 7: A devolução do produto caso exceda a data do contrato será cobrado uma multa no valor de 30% do valor do contrato.",
)

CONTENT_WIDTH = A4[0] - 72  # margens de 36pt

GRID = ("GRID", (0, 0), (-1, -1), 0.5, colors.black)

def build_filename(nota: Nota, generated_at: Optional[datetime] = None) -> str:
    """NumeroNota_Nome_Do_Cliente_AAAAMMDD_HHMMSS.pdf"""
    generated_at = generated_at or datetime.now()
    name = nota.customer_name.replace(" ", "_")
    return f"{nota.number}_{name}_{generated_at.strftime('%Y%m%d_%H%M%S')}.pdf"

def checkbox(checked: bool, label: str) -> str:
    return f"[X] {label}" if checked else f"[ ] {label}"

class NotaPdfExporter:
    def __init__(self, output_dir: str, company: Optional[Dict[str, str]] = None):
        self.output_dir = output_dir
        self.company = dict(DEFAULT_COMPANY)
        if company:
            self.company.update(company)

        styles = getSampleStyleSheet()
        self.st_normal = ParagraphStyle("NotaNormal", parent=styles["Normal"], fontName="Helvetica", fontSize=9, leading=11)
        self.st_bold = ParagraphStyle("NotaBold", parent=self.st_normal, fontName="Helvetica-Bold")
        self.st_small = ParagraphStyle("NotaSmall", parent=self.st_normal, fontSize=6, leading=7.5)
        self.st_title = ParagraphStyle("NotaTitle", parent=styles["Title"], fontName="Times-BoldItalic", fontSize=28, leading=32, alignment=TA_CENTER, spaceAfter=0)
        self.st_center = ParagraphStyle("NotaCenter", parent=self.st_normal, fontSize=10, leading=12, alignment=TA_CENTER)
        self.st_center_bold = ParagraphStyle("NotaCenterBold", parent=self.st_bold, alignment=TA_CENTER)
        self.st_number = ParagraphStyle("NotaNumber", parent=self.st_bold, fontSize=12, leading=14, alignment=TA_RIGHT, textColor=colors.red)

    def _p(self, text: str, style: ParagraphStyle) -> Paragraph:
        return Paragraph(escape(text or ""), style)

    def export(self, nota: Nota, generated_at: Optional[datetime] = None) -> str:
        """Gera o PDF da nota e retorna o caminho do arquivo.

        Falhas de disco ou de diagramação viram ExportError.
        """
        path = os.path.join(self.output_dir, build_filename(nota, generated_at))
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            self._build(path, nota)
        except (OSError, LayoutError) as e:
            log_error(f"Falha ao gerar PDF da nota {nota.number}", e)
            raise ExportError(f"Não foi possível gerar o PDF: {e}", {"path": path, "number": nota.number}) from e

        log_event(f"PDF da nota {nota.number} gerado: {path}")
        return path

    def _build(self, path: str, nota: Nota) -> None:
        doc = SimpleDocTemplate(path, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36,
                                title=f"Nota {nota.number}", author=self.company["nome"])
        story = []
        story += self._header(nota)
        story += self._customer_table(nota)
        story += self._dates_table(nota)
        story += self._description(nota)
        story += self._values_table(nota)
        story += self._accessories(nota)
        story += self._clauses()
        story += self._footer(nota)
        doc.build(story)

    # ---- Seções ----
    def _header(self, nota: Nota) -> list:
        c = self.company
        return [
            self._p(c["nome"], self.st_title),
            self._p(c["slogan"], self.st_center),
            self._p(c["telefones"], self.st_center),
            self._p(c["instagram"], self.st_center),
            Spacer(1, 5),
            self._p(f"Nº {nota.number}", self.st_number),
            Spacer(1, 10),
        ]

    def _customer_table(self, nota: Nota) -> list:
        rows = [
            ("Nome:", nota.customer_name),
            ("Endereço:", f"{nota.customer_address}, Nº {nota.customer_number}"),
            ("Bairro:", nota.customer_neighborhood),
            ("Cidade:", nota.customer_city),
            ("Telefone:", nota.customer_phone),
            ("RG:", nota.customer_rg),
            ("CPF:", nota.customer_cpf),
        ]
        data = [[self._p(label, self.st_bold), self._p(value, self.st_normal)] for label, value in rows]
        table = Table(data, colWidths=[70, CONTENT_WIDTH - 70])
        table.setStyle(TableStyle([GRID, ("VALIGN", (0, 0), (-1, -1), "MIDDLE")]))
        return [table, Spacer(1, 10)]

    def _dates_table(self, nota: Nota) -> list:
        data = [
            [self._p("Data do Evento:", self.st_bold), self._p(nota.event_date, self.st_normal),
             self._p("Retirar:", self.st_bold), self._p(nota.pickup_date, self.st_normal)],
            [self._p("Prova:", self.st_bold), self._p(nota.fitting_date, self.st_normal),
             self._p("Devolução:", self.st_bold), self._p(nota.return_date, self.st_normal)],
        ]
        table = Table(data, colWidths=[CONTENT_WIDTH * 0.2, CONTENT_WIDTH * 0.3] * 2)
        table.setStyle(TableStyle([GRID]))
        return [table, Spacer(1, 10)]

    def _description(self, nota: Nota) -> list:
        # Uma linha por célula: a tabela pode quebrar entre páginas
        lines = (nota.description or "").splitlines() or [""]
        rows = [[Paragraph(escape(line) if line.strip() else "&nbsp;", self.st_normal)] for line in lines]
        last = len(rows) - 1
        box = Table(rows, colWidths=[CONTENT_WIDTH], splitByRow=1)
        box.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 0.5, colors.black),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), 1),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
            ("TOPPADDING", (0, 0), (-1, 0), 5),
            ("BOTTOMPADDING", (0, last), (-1, last), 80),
        ]))
        return [self._p("Descrição dos produtos:", self.st_bold), Spacer(1, 2), box, Spacer(1, 10)]

    def _values_table(self, nota: Nota) -> list:
        data = [
            [self._p("Valor:", self.st_bold), self._p(money(nota.value), self.st_normal),
             self._p(f"Sinal: {money(nota.deposit)}", self.st_normal)],
            [self._p(f"Restante: {money(nota.remaining)}", self.st_bold), "", ""],
        ]
        table = Table(data, colWidths=[CONTENT_WIDTH / 3] * 3)
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, 0), 0.5, colors.black),
            ("BOX", (0, 1), (1, 1), 0.5, colors.black),
            ("SPAN", (0, 1), (1, 1)),
        ]))
        return [table, Spacer(1, 10)]

    def _accessories(self, nota: Nota) -> list:
        line = "  ".join(checkbox(checked, label) for label, checked in nota.accessories())
        return [self._p("Acessórios:", self.st_bold), Spacer(1, 2), self._p(line, self.st_normal), Spacer(1, 10)]

    def _clauses(self) -> list:
        text = "<br/>".join(escape(c) for c in CLAUSES)
        return [Paragraph(text, self.st_small), Spacer(1, 10)]

    def _footer(self, nota: Nota) -> list:
        data = [
            [self._p(f"{self.company['cidade']}, {nota.issue_date}", self.st_normal), ""],
            [self._p(f"Atendente: {nota.attendant}", self.st_normal),
             self._p(f"Locatário: {nota.renter}", self.st_normal)],
        ]
        table = Table(data, colWidths=[CONTENT_WIDTH / 2] * 2)
        table.setStyle(TableStyle([
            ("LINEABOVE", (0, 1), (-1, 1), 0.5, colors.black),
            ("TOPPADDING", (0, 1), (-1, 1), 20),
        ]))
        return [table, Spacer(1, 10), self._p(self.company["endereco"], self.st_center_bold)]

def open_pdf(path: str) -> bool:
    """Abre o arquivo no visualizador padrão do sistema. Retorna False se não existir."""
    if not os.path.exists(path):
        return False
    if sys.platform == 'win32':
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == 'darwin':
        subprocess.Popen(['open', path])
    else:
        subprocess.Popen(['xdg-open', path])
    return True
