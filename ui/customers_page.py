# customers_page.py
# Cadastro de clientes: formulário, lista e busca

import sqlite3
from typing import Any, Callable, List, Optional, cast

from PyQt6.QtWidgets import (
    QAbstractItemView, QFormLayout, QGroupBox, QHBoxLayout, QHeaderView, QLabel,
    QLineEdit, QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout,
)

from core.exceptions import AppError, ValidationError
from core.logger import log_error
from core.models import Customer
from core.services import CustomerService
from ui.widgets import BasePage, confirm, safe_qta_icon, show_message

COLUMNS = ["Nome", "Telefone", "Endereço", "Bairro", "Cidade", "RG", "CPF"]

class CustomersPage(BasePage):
    def __init__(self, service: CustomerService, toast_cb: Optional[Callable[[str], None]] = None) -> None:
        super().__init__("Clientes", "Cadastro e busca de clientes")
        self.service = service
        self.toast_cb = toast_cb
        self.customers_changed_cb: Optional[Callable[[], None]] = None
        self._editing_id = 0  # 0 = novo cliente
        self._rows: List[Customer] = []

        bl = QHBoxLayout(self.body)

        # Formulário
        form_box = QGroupBox("Dados do cliente")
        form = QFormLayout(form_box)
        self.name = QLineEdit()
        self.address = QLineEdit()
        self.number = QLineEdit()
        self.neighborhood = QLineEdit()
        self.city = QLineEdit()
        self.phone = QLineEdit()
        self.rg = QLineEdit()
        self.cpf = QLineEdit()
        form.addRow("Nome:", self.name)
        form.addRow("Endereço:", self.address)
        form.addRow("Número:", self.number)
        form.addRow("Bairro:", self.neighborhood)
        form.addRow("Cidade:", self.city)
        form.addRow("Telefone:", self.phone)
        form.addRow("RG:", self.rg)
        form.addRow("CPF:", self.cpf)
        btns = QHBoxLayout()
        self.btn_save = QPushButton("Salvar")
        self.btn_save.setIcon(safe_qta_icon("ph.floppy-disk", color="#2563eb"))
        self.btn_clear = QPushButton("Limpar")
        self.btn_delete = QPushButton("Excluir")
        self.btn_delete.setIcon(safe_qta_icon("ph.trash", color="#dc2626"))
        self.btn_delete.setEnabled(False)
        btns.addWidget(self.btn_save); btns.addWidget(self.btn_clear); btns.addWidget(self.btn_delete)
        form.addRow(btns)
        form_box.setFixedWidth(360)
        bl.addWidget(form_box)

        # Lista + busca
        right = QVBoxLayout()
        search_box = QHBoxLayout()
        search_box.addWidget(QLabel("Pesquisar:"))
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Nome, telefone ou CPF…")
        self.search_edit.setClearButtonEnabled(True)
        search_box.addWidget(self.search_edit, 1)
        self.btn_refresh = QPushButton("Atualizar")
        self.btn_refresh.setIcon(safe_qta_icon("ph.arrows-clockwise", color="#475569"))
        search_box.addWidget(self.btn_refresh)
        right.addLayout(search_box)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setAlternatingRowColors(True)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        if header := self.table.horizontalHeader():
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setStretchLastSection(True)
        right.addWidget(self.table)
        bl.addLayout(right, 1)

        cast(Any, self.search_edit.textChanged).connect(lambda _t: self.refresh())
        cast(Any, self.btn_refresh.clicked).connect(self._reload)
        cast(Any, self.btn_save.clicked).connect(self.save)
        cast(Any, self.btn_clear.clicked).connect(self.clear_form)
        cast(Any, self.btn_delete.clicked).connect(self.delete)
        cast(Any, self.table.itemSelectionChanged).connect(self._on_selection)
        self.refresh()

    def refresh(self) -> None:
        try:
            self._rows = self.service.search(self.search_edit.text())
        except (AppError, sqlite3.Error) as e:
            log_error("Erro ao carregar clientes", e)
            show_message(self, "Erro", f"Erro ao carregar clientes: {e}")
            return
        self.table.blockSignals(True)
        self.table.setRowCount(0)
        for c in self._rows:
            row = self.table.rowCount(); self.table.insertRow(row)
            values = [c.name, c.phone, f"{c.address}, {c.number}" if c.number else c.address,
                      c.neighborhood, c.city, c.rg, c.cpf]
            for col, val in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(val))
            self.table.setVerticalHeaderItem(row, QTableWidgetItem(str(c.id)))
        self.table.blockSignals(False)

    def _reload(self) -> None:
        self.refresh()
        self.clear_form()

    def _on_selection(self) -> None:
        sel = self.table.selectionModel()
        selected = sel.selectedRows() if sel else []
        if not selected or selected[0].row() >= len(self._rows):
            return
        c = self._rows[selected[0].row()]
        self._editing_id = c.id
        self.name.setText(c.name)
        self.address.setText(c.address)
        self.number.setText(c.number)
        self.neighborhood.setText(c.neighborhood)
        self.city.setText(c.city)
        self.phone.setText(c.phone)
        self.rg.setText(c.rg)
        self.cpf.setText(c.cpf)
        self.btn_save.setText("Atualizar")
        self.btn_delete.setEnabled(True)

    def clear_form(self) -> None:
        self._editing_id = 0
        for w in (self.name, self.address, self.number, self.neighborhood, self.city, self.phone, self.rg, self.cpf):
            w.clear()
        self.btn_save.setText("Salvar")
        self.btn_delete.setEnabled(False)
        self.table.clearSelection()

    def _form_customer(self) -> Customer:
        return Customer(
            id=self._editing_id,
            name=self.name.text().strip(),
            address=self.address.text().strip(),
            number=self.number.text().strip(),
            neighborhood=self.neighborhood.text().strip(),
            city=self.city.text().strip(),
            phone=self.phone.text().strip(),
            rg=self.rg.text().strip(),
            cpf=self.cpf.text().strip(),
        )

    def save(self) -> None:
        is_new = self._editing_id == 0
        try:
            customer_id = self.service.save(self._form_customer())
        except ValidationError as e:
            show_message(self, "Campo Obrigatório", e.message)
            self.name.setFocus()
            return
        except (AppError, sqlite3.Error) as e:
            log_error("Erro ao salvar cliente", e)
            show_message(self, "Erro", f"Erro ao salvar cliente: {e}")
            return
        msg = f"Cliente cadastrado com sucesso! ID: {customer_id}" if is_new else "Cliente atualizado com sucesso!"
        if self.toast_cb:
            self.toast_cb(msg)
        else:
            show_message(self, "Sucesso", msg)
        self.clear_form()
        self.refresh()
        if self.customers_changed_cb:
            self.customers_changed_cb()

    def delete(self) -> None:
        if not self._editing_id:
            return
        if not confirm(self, "Excluir cliente", f"Excluir o cliente \"{self.name.text()}\"?\n"
                       "As notas já emitidas não são alteradas."):
            return
        try:
            self.service.delete(self._editing_id)
        except (AppError, sqlite3.Error) as e:
            log_error("Erro ao excluir cliente", e)
            show_message(self, "Erro", f"Erro ao excluir cliente: {e}")
            return
        self.clear_form()
        self.refresh()
        if self.customers_changed_cb:
            self.customers_changed_cb()
