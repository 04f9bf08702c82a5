# nota_form.py
# Formulário de emissão de notas (aluguel de ternos e vestidos)

import sqlite3
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Optional, cast

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox, QComboBox, QFormLayout, QGridLayout, QGroupBox, QHBoxLayout, QLabel,
    QLineEdit, QPushButton, QScrollArea, QTextEdit, QVBoxLayout, QWidget,
)

from core.calculator import compute_remaining, money, parse_money
from core.exceptions import AppError, ValidationError
from core.logger import log_error, log_warning
from core.models import ACCESSORIES, Nota
from core.pdf_export import NotaPdfExporter, open_pdf
from core.services import CustomerService, NotaService
from ui.widgets import BasePage, confirm, safe_qta_icon, show_message

FALLBACK_NUMBER = "010001"

class NotaForm(BasePage):
    def __init__(self, notas: NotaService, customers: CustomerService, exporter: NotaPdfExporter,
                 toast_cb: Optional[Callable[[str], None]] = None) -> None:
        super().__init__("Nova nota", "Aluguel de ternos e vestidos")
        self.notas = notas
        self.customers = customers
        self.exporter = exporter
        self.toast_cb = toast_cb
        self.nota_saved_cb: Optional[Callable[[], None]] = None
        self._draft = Nota()

        outer = QVBoxLayout(self.body)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea(); scroll.setWidgetResizable(True)
        content = QWidget(); scroll.setWidget(content)
        outer.addWidget(scroll)
        v = QVBoxLayout(content)

        # Número da nota
        top = QHBoxLayout()
        top.addWidget(QLabel("Cliente cadastrado:"))
        self.customer_combo = QComboBox()
        self.customer_combo.setMinimumWidth(280)
        top.addWidget(self.customer_combo, 1)
        top.addStretch(1)
        self.lbl_number = QLabel()
        self.lbl_number.setStyleSheet("color:#dc2626; font-size:18px; font-weight:600;")
        top.addWidget(self.lbl_number)
        v.addLayout(top)

        # Cliente
        box_c = QGroupBox("Cliente")
        fc = QGridLayout(box_c)
        self.name = QLineEdit(); self.address = QLineEdit(); self.address_number = QLineEdit()
        self.neighborhood = QLineEdit(); self.city = QLineEdit(); self.phone = QLineEdit()
        self.rg = QLineEdit(); self.cpf = QLineEdit()
        fc.addWidget(QLabel("Nome:"), 0, 0); fc.addWidget(self.name, 0, 1, 1, 3)
        fc.addWidget(QLabel("Endereço:"), 1, 0); fc.addWidget(self.address, 1, 1)
        fc.addWidget(QLabel("Nº:"), 1, 2); fc.addWidget(self.address_number, 1, 3)
        fc.addWidget(QLabel("Bairro:"), 2, 0); fc.addWidget(self.neighborhood, 2, 1)
        fc.addWidget(QLabel("Cidade:"), 2, 2); fc.addWidget(self.city, 2, 3)
        fc.addWidget(QLabel("Telefone:"), 3, 0); fc.addWidget(self.phone, 3, 1)
        fc.addWidget(QLabel("RG:"), 4, 0); fc.addWidget(self.rg, 4, 1)
        fc.addWidget(QLabel("CPF:"), 4, 2); fc.addWidget(self.cpf, 4, 3)
        v.addWidget(box_c)

        # Datas (texto livre)
        box_d = QGroupBox("Datas")
        fd = QGridLayout(box_d)
        self.event_date = QLineEdit(); self.fitting_date = QLineEdit()
        self.pickup_date = QLineEdit(); self.return_date = QLineEdit()
        for w in (self.event_date, self.fitting_date, self.pickup_date, self.return_date):
            w.setPlaceholderText("dd/mm/aaaa")
        fd.addWidget(QLabel("Data do Evento:"), 0, 0); fd.addWidget(self.event_date, 0, 1)
        fd.addWidget(QLabel("Retirar:"), 0, 2); fd.addWidget(self.pickup_date, 0, 3)
        fd.addWidget(QLabel("Prova:"), 1, 0); fd.addWidget(self.fitting_date, 1, 1)
        fd.addWidget(QLabel("Devolução:"), 1, 2); fd.addWidget(self.return_date, 1, 3)
        v.addWidget(box_d)

        # Descrição
        box_p = QGroupBox("Descrição dos produtos")
        fp = QVBoxLayout(box_p)
        self.description = QTextEdit()
        self.description.setMinimumHeight(90)
        fp.addWidget(self.description)
        v.addWidget(box_p)

        # Valores
        box_v = QGroupBox("Valores")
        fv = QHBoxLayout(box_v)
        self.value = QLineEdit(); self.value.setPlaceholderText("0,00")
        self.deposit = QLineEdit(); self.deposit.setPlaceholderText("0,00")
        self.lbl_remaining = QLabel()
        self.lbl_remaining.setStyleSheet("font-weight:600;")
        fv.addWidget(QLabel("Valor:")); fv.addWidget(self.value)
        fv.addWidget(QLabel("Sinal:")); fv.addWidget(self.deposit)
        fv.addWidget(QLabel("Restante:")); fv.addWidget(self.lbl_remaining); fv.addStretch(1)
        v.addWidget(box_v)

        # Acessórios
        box_a = QGroupBox("Acessórios")
        fa = QHBoxLayout(box_a)
        self.accessory_checks: dict[str, QCheckBox] = {}
        for attr, label in ACCESSORIES:
            chk = QCheckBox(label)
            self.accessory_checks[attr] = chk
            fa.addWidget(chk)
        fa.addStretch(1)
        v.addWidget(box_a)

        # Rodapé
        box_f = QGroupBox("Rodapé")
        ff = QFormLayout(box_f)
        self.issue_date = QLineEdit(); self.attendant = QLineEdit(); self.renter = QLineEdit()
        ff.addRow("Data:", self.issue_date)
        ff.addRow("Atendente:", self.attendant)
        ff.addRow("Locatário:", self.renter)
        v.addWidget(box_f)

        # Ações
        actions = QHBoxLayout()
        actions.addStretch(1)
        self.btn_clear = QPushButton("Limpar")
        self.btn_pdf = QPushButton("Gerar PDF")
        self.btn_pdf.setIcon(safe_qta_icon("ph.file-pdf", color="#dc2626"))
        self.btn_save = QPushButton("Salvar nota")
        self.btn_save.setIcon(safe_qta_icon("ph.floppy-disk", color="#2563eb"))
        actions.addWidget(self.btn_clear); actions.addWidget(self.btn_pdf); actions.addWidget(self.btn_save)
        v.addLayout(actions)

        cast(Any, self.value.textChanged).connect(lambda _t: self.update_remaining())
        cast(Any, self.deposit.textChanged).connect(lambda _t: self.update_remaining())
        cast(Any, self.customer_combo.activated).connect(self._on_customer_picked)
        cast(Any, self.name.textEdited).connect(self._on_name_edited)
        cast(Any, self.btn_save.clicked).connect(self.save)
        cast(Any, self.btn_pdf.clicked).connect(self.generate_pdf)
        cast(Any, self.btn_clear.clicked).connect(self._ask_clear)

        self.reload_customers()
        self.clear_form()

    # ---- Cliente ----
    def reload_customers(self) -> None:
        self.customer_combo.clear()
        self.customer_combo.addItem("(digitar dados)", 0)
        try:
            for c in self.customers.list():
                label = f"{c.name} ({c.phone})" if c.phone else c.name
                self.customer_combo.addItem(label, c.id)
        except (AppError, sqlite3.Error) as e:
            log_error("Erro ao carregar clientes para a nota", e)

    def _on_customer_picked(self, index: int) -> None:
        customer_id = int(self.customer_combo.itemData(index) or 0)
        if not customer_id:
            self._draft = replace(self._draft, customer_id=0)
            return
        customer = self.customers.get(customer_id)
        if customer is None:
            show_message(self, "Aviso", "Cliente não encontrado. Atualize a lista de clientes.")
            self.reload_customers()
            return
        self._draft = self._draft.with_customer(customer)
        self._fill_customer(self._draft)

    def _fill_customer(self, nota: Nota) -> None:
        self.name.setText(nota.customer_name)
        self.address.setText(nota.customer_address)
        self.address_number.setText(nota.customer_number)
        self.neighborhood.setText(nota.customer_neighborhood)
        self.city.setText(nota.customer_city)
        self.phone.setText(nota.customer_phone)
        self.rg.setText(nota.customer_rg)
        self.cpf.setText(nota.customer_cpf)
        if not self.renter.text():
            self.renter.setText(nota.customer_name)

    def _on_name_edited(self, _text: str) -> None:
        # Nome digitado à mão não é mais o cliente escolhido na lista
        if self._draft.customer_id:
            self._draft = replace(self._draft, customer_id=0)
            self.customer_combo.setCurrentIndex(0)

    # ---- Valores ----
    def update_remaining(self) -> None:
        remaining = compute_remaining(parse_money(self.value.text()), parse_money(self.deposit.text()))
        self.lbl_remaining.setText(money(remaining))
        color = "#dc2626" if remaining < 0 else "#111827"
        self.lbl_remaining.setStyleSheet(f"font-weight:600; color:{color};")

    # ---- Montagem ----
    def _start_draft(self) -> None:
        """Rascunho novo: próximo número e data de hoje vindos do serviço."""
        try:
            self._draft = self.notas.new_nota()
        except (AppError, sqlite3.Error) as e:
            log_warning(f"Não foi possível gerar o número da nota: {e}")
            self._draft = Nota(number=FALLBACK_NUMBER, issue_date=date.today().strftime("%d/%m/%Y"))
            show_message(self, "Aviso", str(e))
        self.lbl_number.setText(f"Nº {self._draft.number}")
        self.issue_date.setText(self._draft.issue_date)

    def form_nota(self) -> Nota:
        value = parse_money(self.value.text())
        deposit = parse_money(self.deposit.text())
        flags = {attr: chk.isChecked() for attr, chk in self.accessory_checks.items()}
        return replace(
            self._draft,
            customer_name=self.name.text().strip(),
            customer_address=self.address.text().strip(),
            customer_number=self.address_number.text().strip(),
            customer_neighborhood=self.neighborhood.text().strip(),
            customer_city=self.city.text().strip(),
            customer_phone=self.phone.text().strip(),
            customer_rg=self.rg.text().strip(),
            customer_cpf=self.cpf.text().strip(),
            event_date=self.event_date.text().strip(),
            fitting_date=self.fitting_date.text().strip(),
            pickup_date=self.pickup_date.text().strip(),
            return_date=self.return_date.text().strip(),
            description=self.description.toPlainText().strip(),
            value=value,
            deposit=deposit,
            remaining=compute_remaining(value, deposit),
            issue_date=self.issue_date.text().strip(),
            attendant=self.attendant.text().strip(),
            renter=self.renter.text().strip(),
            **flags,
        )

    # ---- Ações ----
    def save(self) -> None:
        try:
            nota = self.notas.issue(self.form_nota())
        except ValidationError as e:
            show_message(self, "Campo Obrigatório", e.message)
            self.name.setFocus()
            return
        except (AppError, sqlite3.Error) as e:
            log_error("Erro ao salvar a nota", e)
            show_message(self, "Erro", f"Erro ao salvar a nota: {e}")
            return
        show_message(self, "Sucesso", f"Nota {nota.number} salva com sucesso!\nID: {nota.id}")
        if self.toast_cb:
            self.toast_cb(f"Nota {nota.number} salva")
        if confirm(self, "Gerar PDF", "Deseja gerar o PDF da nota agora?"):
            self._export(nota)
        if self.nota_saved_cb:
            self.nota_saved_cb()
        self.clear_form()

    def generate_pdf(self) -> None:
        """PDF do formulário atual sem salvar no banco."""
        nota = self.form_nota()
        if not nota.customer_name:
            show_message(self, "Campo Obrigatório", "Por favor, preencha pelo menos o nome do cliente.")
            self.name.setFocus()
            return
        self._export(nota)

    def _export(self, nota: Nota) -> Optional[str]:
        try:
            path = self.exporter.export(nota)
        except AppError as e:
            show_message(self, "Erro", f"Erro ao gerar PDF: {e.message}")
            return None
        show_message(self, "PDF Gerado", f"PDF gerado com sucesso!\n\nArquivo salvo em:\n{path}")
        open_pdf(path)
        return path

    def _ask_clear(self) -> None:
        if confirm(self, "Confirmar", "Tem certeza que deseja limpar todos os campos?"):
            self.clear_form()

    def clear_form(self) -> None:
        for w in (self.name, self.address, self.address_number, self.neighborhood, self.city, self.phone,
                  self.rg, self.cpf, self.event_date, self.fitting_date, self.pickup_date, self.return_date,
                  self.value, self.deposit, self.attendant, self.renter):
            w.clear()
        self.description.clear()
        for chk in self.accessory_checks.values():
            chk.setChecked(False)
        self.customer_combo.setCurrentIndex(0)
        self.update_remaining()
        self._start_draft()
        self.name.setFocus(Qt.FocusReason.OtherFocusReason)
