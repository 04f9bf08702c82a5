# widgets.py
# Componentes compartilhados entre as páginas

from typing import Optional, Sequence

import qtawesome as qta
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from ui.dialogs.custom_messagebox import CustomMessageBox

QSS_POPUP_LIGHT = """
QDialog, QMessageBox { background: #ffffff; color: #1f2937; }
QLabel { color: #1f2937; background: transparent; }
QPushButton {
    background: #e5e7eb; color: #111827;
    border: 1px solid #d1d5db; border-radius: 10px; padding: 8px 14px;
}
QPushButton:hover { background: #dbeafe; border-color: #bfdbfe; }
QPushButton:pressed { background: #c7d2fe; }
"""

def safe_qta_icon(icon_name: str, color: str = "#000000") -> QIcon:
    """Ícone QtAwesome; nome desconhecido devolve ícone vazio."""
    try:
        return qta.icon(icon_name, color=color)
    except Exception:
        return QIcon()

# Títulos usados nas páginas e o ícone correspondente
_KIND_BY_TITLE = {
    "Erro": "error",
    "Aviso": "warning",
    "Campo Obrigatório": "warning",
    "Sucesso": "success",
    "PDF Gerado": "success",
    "Backup": "success",
}

def show_message(
    parent: Optional[QWidget],
    title: str,
    text: str,
    buttons: Sequence[str] = ("OK",),
    default: int = 0,
    kind: Optional[str] = None,
) -> Optional[int]:
    kind = kind or _KIND_BY_TITLE.get(title, "info")
    return CustomMessageBox.ask(parent, title, text, buttons, default, kind, QSS_POPUP_LIGHT)

def confirm(parent: Optional[QWidget], title: str, text: str) -> bool:
    return show_message(parent, title, text, ("Não", "Sim"), default=0, kind="question") == 1

class BasePage(QWidget):
    def __init__(self, title: str, subtitle: str = "") -> None:
        super().__init__()
        self.v = QVBoxLayout(self)
        head = QWidget()
        hl = QHBoxLayout(head)
        t = QLabel(f"<h2 style='margin:0'>{title}</h2>")
        s = QLabel(subtitle)
        s.setObjectName("subtitle")
        hl.addWidget(t)
        hl.addStretch(1)
        hl.addWidget(s)
        self.v.addWidget(head)
        self.body = QWidget()
        self.v.addWidget(self.body, 1)
        self.v.setContentsMargins(16, 16, 16, 16)
