# exceptions.py
# Erros da aplicação

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base para todos os erros da aplicação."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StorageUnavailable(AppError):
    """Banco de dados não pôde ser aberto ou inicializado."""
    def __init__(self, message: str = "Banco de dados indisponível", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ValidationError(AppError):
    """Dados inválidos rejeitados antes de chegar ao banco."""
    def __init__(self, message: str = "Dados inválidos", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ExportError(AppError):
    """PDF da nota não pôde ser gravado ou diagramado."""
    def __init__(self, message: str = "Falha ao gerar o PDF", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
