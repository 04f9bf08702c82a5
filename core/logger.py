# logger.py
# Registro das operações da loja (clientes, notas, PDFs e backups) em arquivo diário

import logging
import os
import sys
from datetime import datetime
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'

def get_log_directory() -> str:
    """
    Pasta dos logs.

    BLACKTEAM_LOG_DIR tem prioridade; senão %LOCALAPPDATA%\\BlackTeam\\logs no
    Windows e ~/.blackteam/logs nos demais sistemas.
    """
    custom = os.getenv('BLACKTEAM_LOG_DIR')
    if custom:
        log_dir = custom
    elif sys.platform == 'win32' and os.getenv('LOCALAPPDATA'):
        log_dir = os.path.join(os.environ['LOCALAPPDATA'], 'BlackTeam', 'logs')
    else:
        log_dir = os.path.join(os.path.expanduser('~'), '.blackteam', 'logs')
    os.makedirs(log_dir, exist_ok=True)
    return log_dir

LOG_DIR = get_log_directory()
LOG_PATH = os.path.join(LOG_DIR, f'blackteam_{datetime.now():%Y%m%d}.log')

logger = logging.getLogger('blackteam')
logger.setLevel(logging.INFO)

# Arquivo recebe tudo; no console só avisos e erros
if not logger.handlers:
    _file_handler = logging.FileHandler(LOG_PATH, encoding='utf-8')
    _file_handler.setFormatter(logging.Formatter(LOG_FORMAT, '%Y-%m-%d %H:%M:%S'))
    logger.addHandler(_file_handler)

    _console_handler = logging.StreamHandler()
    _console_handler.setLevel(logging.WARNING)
    _console_handler.setFormatter(logging.Formatter(LOG_FORMAT, '%H:%M:%S'))
    logger.addHandler(_console_handler)

def log_event(msg: str) -> None:
    logger.info(msg)

def log_error(msg: str, exc: Optional[BaseException] = None) -> None:
    """Registra o erro; com exceção, grava também o traceback dela."""
    if exc is None:
        logger.error(msg)
    else:
        logger.error("%s: %s", msg, exc, exc_info=exc)

def log_warning(msg: str) -> None:
    logger.warning(msg)

def log_debug(msg: str) -> None:
    logger.debug(msg)

def log_startup(db_path: str = "", notes_dir: str = "", config_path: str = "") -> None:
    """Cabeçalho de cada sessão: onde ficam banco, PDFs, configuração e log."""
    mode = 'executável' if getattr(sys, 'frozen', False) else 'script'
    if config_path:
        config_state = 'encontrado' if os.path.exists(config_path) else 'ausente, usando padrões'
        config_line = f"{config_path} ({config_state})"
    else:
        config_line = '-'
    logger.info('-' * 60)
    logger.info(f"Black Team - Controle de Notas ({mode})")
    logger.info(f"Python {sys.version.split()[0]} em {sys.platform}")
    logger.info(f"Banco de dados: {db_path or '-'}")
    logger.info(f"Pasta das notas: {notes_dir or '-'}")
    logger.info(f"Configuração: {config_line}")
    logger.info(f"Log: {LOG_PATH}")
