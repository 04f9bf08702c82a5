# database.py
# Responsável pela conexão e operações com o banco de dados SQLite

import sqlite3
import os
from contextlib import contextmanager
from pathlib import Path
from datetime import datetime
from typing import Any, Iterator, List, Optional, Tuple, Union, Mapping

from core.exceptions import StorageUnavailable
from core.logger import log_error, log_event

# Parameter type accepted by sqlite3 (positional tuple or named mapping)
Params = Union[Tuple[Any, ...], Mapping[str, Any]]

# Nomes de tabelas/colunas iguais aos dos bancos já em uso na loja
SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS Clientes (
        Id INTEGER PRIMARY KEY AUTOINCREMENT,
        Nome TEXT NOT NULL,
        Endereco TEXT,
        Numero TEXT,
        Bairro TEXT,
        Cidade TEXT,
        Telefone TEXT,
        RG TEXT,
        CPF TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Notas (
        Id INTEGER PRIMARY KEY AUTOINCREMENT,
        NumeroNota TEXT NOT NULL,
        ClienteId INTEGER,
        ClienteNome TEXT,
        ClienteEndereco TEXT,
        ClienteNumero TEXT,
        ClienteBairro TEXT,
        ClienteCidade TEXT,
        ClienteTelefone TEXT,
        ClienteRG TEXT,
        ClienteCPF TEXT,
        DataEvento TEXT,
        DataProva TEXT,
        DataRetirar TEXT,
        DataDevolucao TEXT,
        DescricaoProdutos TEXT,
        Valor REAL,
        Sinal REAL,
        Restante REAL,
        Gravata INTEGER,
        Sapato INTEGER,
        Clutch INTEGER,
        Estola INTEGER,
        Camisa INTEGER,
        Colete INTEGER,
        DataContagem TEXT,
        Atendente TEXT,
        Locatario TEXT,
        DataCriacao TEXT
    )
    """,
)

class Database:
    """Acesso ao arquivo SQLite.

    Cada operação abre a própria conexão e a fecha ao terminar, inclusive em caso
    de erro. O esquema é criado na construção.
    """
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_db()

    def _init_db(self) -> None:
        try:
            with self.connection() as conn:
                for ddl in SCHEMA:
                    conn.execute(ddl)
        except sqlite3.Error as e:
            log_error(f"Falha ao inicializar banco {self.db_path}", e)
            raise StorageUnavailable(
                f"Não foi possível abrir o banco de dados: {e}",
                {"db_path": self.db_path},
            ) from e

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path, timeout=10)
        except sqlite3.Error as e:
            log_error(f"Falha ao abrir banco {self.db_path}", e)
            raise StorageUnavailable(
                f"Não foi possível abrir o banco de dados: {e}",
                {"db_path": self.db_path},
            ) from e
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Conexão com escopo: commit no sucesso, rollback no erro, sempre fecha."""
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def execute(self, sql: str, params: Params = ()) -> int:
        """Executa um comando e retorna o número de linhas afetadas."""
        with self.connection() as conn:
            return conn.execute(sql, params).rowcount

    def insert(self, sql: str, params: Params = ()) -> int:
        """Executa um INSERT e retorna o id gerado."""
        with self.connection() as conn:
            cur = conn.execute(sql, params)
            return int(cur.lastrowid)

    def query(self, sql: str, params: Params = ()) -> List[sqlite3.Row]:
        with self.connection() as conn:
            try:
                return conn.execute(sql, params).fetchall()
            except sqlite3.DatabaseError as e:
                if "malformed" in str(e).lower() or "corrupt" in str(e).lower():
                    raise sqlite3.DatabaseError(f"Banco de dados corrompido: {e}. Use a função de restaurar backup.")
                raise

    def query_one(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        with self.connection() as conn:
            return conn.execute(sql, params).fetchone()

    def scalar(self, sql: str, params: Params = ()) -> Any:
        row = self.query_one(sql, params)
        return row[0] if row is not None else None

    def verify_integrity(self) -> Tuple[bool, str]:
        """Verifica a integridade do banco de dados"""
        try:
            result = self.query_one("PRAGMA integrity_check")
        except sqlite3.Error as e:
            return False, f"Erro ao verificar: {str(e)}"
        if result and result[0] == "ok":
            return True, "Banco de dados íntegro"
        return False, f"Problemas detectados: {result[0] if result else 'desconhecido'}"

    def create_backup(self, backup_dir: Optional[str] = None) -> str:
        """Cria uma cópia consistente do banco e retorna o caminho do arquivo."""
        if backup_dir is None:
            backup_dir = str(Path(self.db_path).parent / "backups")

        os.makedirs(backup_dir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        backup_path = os.path.join(backup_dir, f"backup_{timestamp}.db")

        # Usa backup API do SQLite para garantir consistência
        backup_conn = sqlite3.connect(backup_path)
        try:
            with self.connection() as conn:
                conn.backup(backup_conn)
        finally:
            backup_conn.close()

        log_event(f"Backup criado: {backup_path}")
        return backup_path
