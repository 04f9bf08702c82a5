# config.py
# Configurações globais e leitura de YAML

from typing import Dict, Any
import yaml
import os
import sys

def get_app_directory() -> str:
    """
    Retorna o diretório da aplicação.
    Em executáveis PyInstaller é a pasta do .exe; em desenvolvimento, a raiz do projeto.
    """
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    return os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

APP_DIR = get_app_directory()

# Arquivo de configuração fica ao lado do executável
_CONFIG_PATH = os.path.join(APP_DIR, 'config.yaml')

DB_FILENAME = 'blackteam.db'
NOTES_DIRNAME = 'Notas'

# Cabeçalho/rodapé impressos na nota
DEFAULT_COMPANY: Dict[str, str] = {
    "nome": "Black Team",
    "slogan": "Ternos e Vestidos para festas",
    "telefones": "(31) 2524-3199 / 9 9341-3966",
    "instagram": "@blackteam.vestidos",
    "endereco": "Av. Londres - nº 49. Loja 05 - Bairro Eldorado - Contagem/MG",
    "cidade": "Contagem",
}

def get_config_path() -> str:
    return _CONFIG_PATH

def load_config() -> Dict[str, Any]:
    """
    Carrega as configurações do arquivo YAML.

    Returns:
        Dict[str, Any]: Dicionário com as configurações (vazio se não existir)
    """
    if not os.path.exists(_CONFIG_PATH):
        return {}
    with open(_CONFIG_PATH, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}

def save_config(data: Dict[str, Any]) -> None:
    """
    Salva as configurações no arquivo YAML.

    Args:
        data: Dicionário com as configurações para salvar
    """
    with open(_CONFIG_PATH, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, allow_unicode=True)

def get_database_path() -> str:
    """
    Retorna o caminho do banco de dados.

    Usa `database_path` do config.yaml quando definido; caso contrário o arquivo
    blackteam.db na pasta da aplicação.
    """
    db_path = load_config().get('database_path')
    if db_path:
        return os.path.abspath(db_path)
    return os.path.join(APP_DIR, DB_FILENAME)

def get_notes_directory() -> str:
    """Pasta onde os PDFs das notas são salvos (criada sob demanda pelo exportador)."""
    notes_dir = load_config().get('notes_dir')
    if notes_dir:
        return os.path.abspath(notes_dir)
    return os.path.join(APP_DIR, NOTES_DIRNAME)

def get_company_info() -> Dict[str, str]:
    """Dados da loja para o PDF; valores do config.yaml sobrescrevem os padrões."""
    info = dict(DEFAULT_COMPANY)
    custom = load_config().get('empresa') or {}
    for key, value in custom.items():
        if value is not None:
            info[str(key)] = str(value)
    return info

def set_notes_directory(path: str) -> str:
    """Grava `notes_dir` no config.yaml mantendo as demais chaves. Retorna o caminho absoluto."""
    notes_dir = os.path.abspath(path)
    config = load_config()
    config['notes_dir'] = notes_dir
    save_config(config)
    return notes_dir
