# notas_page.py
# Lista de notas emitidas (mais recentes primeiro)

import sqlite3
from typing import Any, Callable, List, Optional, cast

from PyQt6.QtWidgets import (
    QAbstractItemView, QHBoxLayout, QHeaderView, QLabel, QLineEdit, QPushButton,
    QTableWidget, QTableWidgetItem, QVBoxLayout,
)

from core.calculator import money
from core.exceptions import AppError
from core.logger import log_error
from core.models import Nota
from core.pdf_export import NotaPdfExporter, open_pdf
from core.services import NotaService
from ui.widgets import BasePage, safe_qta_icon, show_message

COLUMNS = ["Nº", "Cliente", "Telefone", "Evento", "Retirar", "Devolução", "Valor", "Sinal", "Restante", "Criada em"]

class NotasPage(BasePage):
    def __init__(self, service: NotaService, exporter: NotaPdfExporter,
                 new_nota_cb: Optional[Callable[[], None]] = None) -> None:
        super().__init__("Notas", "Contratos emitidos")
        self.service = service
        self.exporter = exporter
        self.new_nota_cb = new_nota_cb
        self._rows: List[Nota] = []

        bl = QVBoxLayout(self.body)
        actions = QHBoxLayout()
        self.btn_new = QPushButton("+ Nova nota")
        self.btn_pdf = QPushButton("Gerar PDF")
        self.btn_pdf.setIcon(safe_qta_icon("ph.file-pdf", color="#dc2626"))
        self.btn_refresh = QPushButton("Atualizar")
        self.btn_refresh.setIcon(safe_qta_icon("ph.arrows-clockwise", color="#475569"))
        actions.addWidget(self.btn_new); actions.addWidget(self.btn_pdf); actions.addWidget(self.btn_refresh)
        actions.addStretch(1)
        actions.addWidget(QLabel("Pesquisar:"))
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Número, cliente ou telefone…")
        self.search_edit.setClearButtonEnabled(True)
        actions.addWidget(self.search_edit, 1)
        bl.addLayout(actions)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setAlternatingRowColors(True)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        if header := self.table.horizontalHeader():
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setStretchLastSection(True)
        bl.addWidget(self.table)
        self.lbl_total = QLabel()
        self.lbl_total.setObjectName("subtitle")
        bl.addWidget(self.lbl_total)

        cast(Any, self.search_edit.textChanged).connect(lambda _t: self.refresh())
        cast(Any, self.btn_refresh.clicked).connect(self.refresh)
        cast(Any, self.btn_pdf.clicked).connect(self.export_selected)
        cast(Any, self.table.cellDoubleClicked).connect(lambda _r, _c: self.export_selected())
        if self.new_nota_cb:
            cast(Any, self.btn_new.clicked).connect(self.new_nota_cb)
        self.refresh()

    def refresh(self) -> None:
        try:
            self._rows = self.service.search(self.search_edit.text())
        except (AppError, sqlite3.Error) as e:
            log_error("Erro ao carregar notas", e)
            show_message(self, "Erro", f"Erro ao carregar notas: {e}")
            return
        self.table.setRowCount(0)
        for n in self._rows:
            row = self.table.rowCount(); self.table.insertRow(row)
            values = [
                n.number, n.customer_name, n.customer_phone, n.event_date, n.pickup_date, n.return_date,
                money(n.value), money(n.deposit), money(n.remaining), n.created_at.strftime("%d/%m/%Y %H:%M"),
            ]
            for col, val in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(val))
        self.lbl_total.setText(f"{len(self._rows)} nota(s)")

    def export_selected(self) -> None:
        row = self.table.currentRow()
        if row < 0 or row >= len(self._rows):
            show_message(self, "Aviso", "Selecione uma nota na lista.")
            return
        nota = self._rows[row]
        try:
            path = self.exporter.export(nota)
        except AppError as e:
            show_message(self, "Erro", f"Erro ao gerar PDF: {e.message}")
            return
        show_message(self, "PDF Gerado", f"PDF gerado com sucesso!\n\nArquivo salvo em:\n{path}")
        open_pdf(path)
