"""
Testes das configurações (config.yaml)
"""

import os

import pytest

from core import config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    monkeypatch.setattr(config, "_CONFIG_PATH", str(path))
    monkeypatch.setattr(config, "APP_DIR", str(tmp_path))
    return path


def test_missing_config_is_empty(config_file):
    assert config.load_config() == {}


def test_defaults_next_to_application(config_file, tmp_path):
    assert config.get_database_path() == os.path.join(str(tmp_path), "blackteam.db")
    assert config.get_notes_directory() == os.path.join(str(tmp_path), "Notas")
    assert config.get_company_info() == config.DEFAULT_COMPANY


def test_save_and_load_round_trip(config_file, tmp_path):
    custom_db = str(tmp_path / "dados" / "loja.db")
    config.save_config({"database_path": custom_db, "empresa": {"instagram": "@loja"}})

    assert config.get_database_path() == custom_db
    info = config.get_company_info()
    assert info["instagram"] == "@loja"
    assert info["nome"] == "Black Team"


def test_set_notes_directory_keeps_other_keys(config_file, tmp_path):
    config.save_config({"database_path": "loja.db", "empresa": {"cidade": "Betim"}})

    chosen = config.set_notes_directory(str(tmp_path / "pdfs"))

    assert chosen == str(tmp_path / "pdfs")
    assert config.get_notes_directory() == chosen
    saved = config.load_config()
    assert saved["database_path"] == "loja.db"
    assert saved["empresa"] == {"cidade": "Betim"}


def test_config_path_is_next_to_application(config_file):
    assert config.get_config_path() == str(config_file)
