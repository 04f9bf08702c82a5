# custom_messagebox.py
# Diálogo modal usado por todas as páginas (avisos, erros e confirmações)

from typing import Optional, Sequence

import qtawesome as qta
from PyQt6.QtCore import Qt, QSize
from PyQt6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

# tipo -> (ícone, cor)
KINDS = {
    "info": ("ph.info", "#2563eb"),
    "success": ("ph.check-circle", "#16a34a"),
    "warning": ("ph.warning", "#d97706"),
    "error": ("ph.x-circle", "#dc2626"),
    "question": ("ph.question", "#2563eb"),
}

class CustomMessageBox(QDialog):
    """Mensagem com botões livres.

    `result_index` guarda o índice do botão clicado; fechar pela janela ou com
    Esc deixa None, que quem chama trata como "não".
    """
    def __init__(self, parent: Optional[QWidget], title: str, text: str,
                 buttons: Sequence[str] = ("OK",), default: int = 0,
                 kind: str = "info", qss: Optional[str] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(360)
        self.result_index: Optional[int] = None

        body = QHBoxLayout()
        icon_name, color = KINDS.get(kind, KINDS["info"])
        icon = QLabel()
        icon.setPixmap(qta.icon(icon_name, color=color).pixmap(QSize(32, 32)))
        icon.setAlignment(Qt.AlignmentFlag.AlignTop)
        body.addWidget(icon)
        label = QLabel(text)
        label.setWordWrap(True)
        # Caminhos de PDF/backup podem ser copiados da mensagem
        label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        body.addWidget(label, 1)

        row = QHBoxLayout()
        row.addStretch(1)
        self.buttons = []
        for index, caption in enumerate(buttons):
            btn = QPushButton(caption)
            btn.clicked.connect(lambda _checked=False, ix=index: self._choose(ix))
            row.addWidget(btn)
            self.buttons.append(btn)

        layout = QVBoxLayout(self)
        layout.addLayout(body)
        layout.addLayout(row)
        if qss:
            self.setStyleSheet(qss)
        if self.buttons:
            chosen = self.buttons[min(max(default, 0), len(self.buttons) - 1)]
            chosen.setDefault(True)
            chosen.setFocus()

    def _choose(self, index: int) -> None:
        self.result_index = index
        self.accept()

    @classmethod
    def ask(cls, parent: Optional[QWidget], title: str, text: str, buttons: Sequence[str] = ("OK",),
            default: int = 0, kind: str = "info", qss: Optional[str] = None) -> Optional[int]:
        dlg = cls(parent, title, text, buttons, default, kind, qss)
        dlg.exec()
        return dlg.result_index
