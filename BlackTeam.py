# -*- coding: utf-8 -*-
# Black Team – Controle de Notas (PyQt6 + SQLite)
# -----------------------------------------------------
# Requisitos:
#   pip install -e .
#
# Observações:
# - Banco de dados SQLite local: blackteam.db na pasta da aplicação
#   (ou `database_path` do config.yaml).
# - PDFs das notas na pasta Notas/ (ou `notes_dir` do config.yaml).
# - Módulos: Notas, Nova nota, Clientes
#
# Como executar:
#   python BlackTeam.py

from __future__ import annotations

import sqlite3
import sys
from typing import Any, Optional, cast

from PyQt6.QtCore import Qt, QSize, QTimer, QPropertyAnimation
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QListWidget, QListWidgetItem, QStackedWidget, QFrame, QGraphicsOpacityEffect, QPushButton, QFileDialog,
)

import yaml

from core.config import get_company_info, get_config_path, get_database_path, get_notes_directory, set_notes_directory
from core.database import Database
from core.exceptions import AppError, StorageUnavailable
from core.logger import log_event, log_error, log_startup, log_warning
from core.pdf_export import NotaPdfExporter
from core.repositories import CustomerRepository, NotaRepository
from core.services import CustomerService, NotaService
from ui.customers_page import CustomersPage
from ui.nota_form import NotaForm
from ui.notas_page import NotasPage
from ui.widgets import confirm, safe_qta_icon, show_message

# -----------------------------
# Aviso rápido no rodapé da janela
# -----------------------------
class Toast(QFrame):
    """Faixa no canto inferior direito da janela que some sozinha (nota salva, pasta alterada)."""
    ACCENTS = {
        "success": ("ph.check-circle", "#16a34a"),
        "info": ("ph.info", "#2563eb"),
        "error": ("ph.x-circle", "#dc2626"),
    }

    def __init__(self, parent: QWidget, text: str, kind: str = "success", duration_ms: int = 2600) -> None:
        super().__init__(parent)
        self.setObjectName("Toast")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)
        icon_name, accent = self.ACCENTS.get(kind, self.ACCENTS["info"])
        lay = QHBoxLayout(self)
        lay.setContentsMargins(12, 8, 16, 8)
        icon = QLabel()
        icon.setPixmap(safe_qta_icon(icon_name, color=accent).pixmap(QSize(18, 18)))
        lay.addWidget(icon)
        lay.addWidget(QLabel(text))
        self.setStyleSheet(f"""
        #Toast {{ background: #ffffff; border: 1px solid #e5e7eb; border-left: 4px solid {accent}; border-radius: 8px; }}
        #Toast QLabel {{ color: #111827; background: transparent; }}
        """)
        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self._fade = QPropertyAnimation(self._opacity, b"opacity", self)
        self._fade.setDuration(400)
        self._fade.setStartValue(1.0)
        self._fade.setEndValue(0.0)
        cast(Any, self._fade.finished).connect(self.close)
        self._duration = duration_ms

    def popup(self) -> None:
        # Filho da janela: coordenadas relativas a ela
        parent = self.parentWidget()
        self.adjustSize()
        if parent is not None:
            self.move(parent.width() - self.width() - 24, parent.height() - self.height() - 24)
        self._opacity.setOpacity(1.0)
        self.show()
        self.raise_()
        QTimer.singleShot(self._duration, self._fade.start)

class MainWindow(QMainWindow):
    def __init__(self, db: Database, exporter: NotaPdfExporter) -> None:
        super().__init__()
        self.db = db
        company = get_company_info()
        self.setWindowTitle(f"{company['nome']} – Controle de Notas")
        self.resize(1150, 760)
        self.setMinimumSize(900, 600)

        # Serviços criados aqui e repassados às páginas
        self.customer_service = CustomerService(CustomerRepository(db))
        self.nota_service = NotaService(NotaRepository(db))
        self.exporter = exporter

        root = QWidget(); self.setCentralWidget(root)
        hl = QHBoxLayout(root)
        hl.setContentsMargins(0, 0, 0, 0)

        # Sidebar
        self.sidebar: QListWidget = QListWidget()
        self.sidebar.setObjectName("Sidebar")
        self.sidebar.setIconSize(QSize(20, 20))
        icon_map = {
            "Notas": safe_qta_icon("ph.notebook", color="#8ab4ff"),
            "Nova nota": safe_qta_icon("ph.file-plus", color="#22c55e"),
            "Clientes": safe_qta_icon("ph.users", color="#fca5a5"),
        }
        for name, icon in icon_map.items():
            self.sidebar.addItem(QListWidgetItem(icon, name))
        self.sidebar.setFixedWidth(200)
        hl.addWidget(self.sidebar)

        # Header + páginas
        right = QWidget(); right.setObjectName("RightArea"); right_v = QVBoxLayout(right)
        header = QWidget(); header.setObjectName("Header")
        header_l = QHBoxLayout(header)
        title = QLabel(company["nome"]); title.setObjectName("AppTitle")
        header_l.addWidget(title)
        header_l.addStretch(1)
        db_label = QLabel(self.db.db_path); db_label.setObjectName("subtitle")
        header_l.addWidget(db_label)
        self.btn_notes_dir = QPushButton("Pasta dos PDFs")
        self.btn_notes_dir.setIcon(safe_qta_icon("ph.folder-open", color="#d97706"))
        self.btn_notes_dir.setToolTip(self.exporter.output_dir)
        self.btn_backup = QPushButton("Backup")
        self.btn_backup.setIcon(safe_qta_icon("ph.database", color="#2563eb"))
        header_l.addWidget(self.btn_notes_dir)
        header_l.addWidget(self.btn_backup)
        cast(Any, self.btn_notes_dir.clicked).connect(self.choose_notes_directory)
        cast(Any, self.btn_backup.clicked).connect(self.backup_database)
        right_v.addWidget(header)

        self.pages: QStackedWidget = QStackedWidget()
        self.page_notas = NotasPage(self.nota_service, self.exporter, new_nota_cb=lambda: self.sidebar.setCurrentRow(1))
        self.page_form = NotaForm(self.nota_service, self.customer_service, self.exporter, toast_cb=self.show_toast)
        self.page_customers = CustomersPage(self.customer_service, toast_cb=self.show_toast)
        self.page_form.nota_saved_cb = self.page_notas.refresh
        self.page_customers.customers_changed_cb = self.page_form.reload_customers
        # Ordem deve bater com a sidebar
        self.pages.addWidget(self.page_notas)
        self.pages.addWidget(self.page_form)
        self.pages.addWidget(self.page_customers)
        right_v.addWidget(self.pages, 1)
        hl.addWidget(right, 1)

        cast(Any, self.sidebar.currentRowChanged).connect(self.pages.setCurrentIndex)
        self.sidebar.setCurrentRow(0)

    def show_toast(self, text: str, kind: str = "success") -> None:
        Toast(self, text, kind).popup()

    def backup_database(self) -> Optional[str]:
        """Verifica o banco e grava uma cópia em backups/ ao lado dele. Retorna o caminho."""
        ok, msg = self.db.verify_integrity()
        if not ok:
            log_warning(f"Backup solicitado com banco inconsistente: {msg}")
            if not confirm(self, "Banco com problemas", f"{msg}\n\nCriar o backup mesmo assim?"):
                return None
        try:
            path = self.db.create_backup()
        except (AppError, OSError, sqlite3.Error) as e:
            log_error("Erro ao criar backup", e)
            show_message(self, "Erro", f"Erro ao criar backup: {e}")
            return None
        show_message(self, "Backup", f"Backup criado com sucesso!\n\nArquivo salvo em:\n{path}")
        return path

    def choose_notes_directory(self) -> None:
        folder = QFileDialog.getExistingDirectory(self, "Pasta dos PDFs das notas", self.exporter.output_dir)
        if folder:
            self.change_notes_directory(folder)

    def change_notes_directory(self, folder: str) -> bool:
        """Passa a gravar os PDFs em `folder` e guarda a escolha no config.yaml."""
        try:
            notes_dir = set_notes_directory(folder)
        except (OSError, yaml.YAMLError) as e:
            log_error("Erro ao salvar a pasta das notas", e)
            show_message(self, "Erro", f"Não foi possível salvar a configuração: {e}")
            return False
        self.exporter.output_dir = notes_dir
        self.btn_notes_dir.setToolTip(notes_dir)
        log_event(f"Pasta das notas alterada para {notes_dir}")
        self.show_toast("Pasta dos PDFs alterada", "info")
        return True

def qss_light() -> str:
    return """
* { font-family: 'Segoe UI', Arial; font-size: 14px; color: #1f2937; outline: none; }
QMainWindow { background: #f7f9fc; }
#Header { background: qlineargradient(x1:0,y1:0,x2:1,y2:0, stop:0 #ffffff, stop:1 #eef2ff); border-bottom: 1px solid #dfe3ec; }
#AppTitle { color: #1b2240; font-size: 20px; font-weight: 600; font-style: italic; }
QLabel#subtitle { color: #6b7280; }

QListWidget#Sidebar { background: #111827; color: #e5e7eb; border: none; }
QListWidget#Sidebar::item { padding: 12px; margin: 6px; border-radius: 10px; }
QListWidget#Sidebar::item:selected { background: #374151; color: #ffffff; }
QListWidget#Sidebar::item:hover { background: #1f2937; }

QWidget#RightArea { background: #ffffff; }

QPushButton {
    background: #e5e7eb;
    color: #111827;
    padding: 8px 14px;
    border: 1px solid #d1d5db;
    border-radius: 10px;
}
QPushButton:hover { background: #dbeafe; border: 1px solid #bfdbfe; }
QPushButton:pressed { background: #c7d2fe; border: 1px solid #a5b4fc; }
QPushButton:disabled { color: #9ca3af; }

QLineEdit, QTextEdit, QComboBox {
    background: #ffffff;
    border: 1px solid #d1d5db;
    border-radius: 8px;
    padding: 6px;
    selection-background-color: #e8eefc;
    selection-color: #1b2240;
}
QGroupBox { border: 1px solid #e5e7eb; border-radius: 10px; margin-top: 14px; padding: 8px; }
QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 4px; color: #374151; font-weight: 600; }

QTableWidget { gridline-color: #e5e7eb; alternate-background-color: #f9fafb; }
QHeaderView::section { background: #f3f4f6; padding: 6px; border: none; border-bottom: 1px solid #e5e7eb; }
"""

def main() -> None:
    app = QApplication(sys.argv)
    app.setStyleSheet(qss_light())

    db_path = get_database_path()
    notes_dir = get_notes_directory()
    log_startup(db_path, notes_dir, get_config_path())

    try:
        db = Database(db_path)
    except StorageUnavailable as e:
        log_error("Não foi possível iniciar o banco de dados", e)
        show_message(None, "Erro", f"{e.message}\n\nArquivo: {db_path}")
        sys.exit(1)

    exporter = NotaPdfExporter(notes_dir, get_company_info())
    window = MainWindow(db, exporter)
    window.show()
    log_event("Janela principal aberta")
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
