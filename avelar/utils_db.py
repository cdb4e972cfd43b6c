import time
import logging
from contextlib import contextmanager

from flask import abort
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from . import db


logger = logging.getLogger("db.retry")


class ErroOperacao(Exception):
    """Falha ao gravar no banco. A mensagem já vem pronta para o alerta."""


def get_or_404(model, ident):
    """Busca por chave primária via Session.get; 404 se ausente."""
    obj = db.session.get(model, ident)
    if obj is None:
        abort(404)
    return obj


def _is_sqlite_busy(error: BaseException) -> bool:
    msg = str(error).lower()
    return ("database is locked" in msg) or ("database is busy" in msg) or ("sqlite_busy" in msg)


def commit_with_retry(max_retries: int = 5, backoff_seconds: float = 0.1) -> None:
    """Commit com nova tentativa quando o SQLite local sinaliza bloqueio.

    Em Postgres o erro não é de bloqueio e sobe na primeira falha.
    """
    attempt = 0
    while True:
        try:
            db.session.commit()
            return
        except OperationalError as exc:  # pragma: no cover - depende de concorrência real
            if attempt < max_retries and _is_sqlite_busy(exc):
                attempt += 1
                db.session.rollback()
                time.sleep(backoff_seconds * (2 ** (attempt - 1)))
                continue
            logger.error("Commit failed after %s retries: %s", attempt, exc)
            raise


@contextmanager
def transactional(descricao: str | None = None, max_retries: int = 3, backoff_seconds: float = 0.2):
    """Transação com commit no fim do bloco.

    Com `descricao`, erros de banco viram ErroOperacao("Erro ao <descricao>: ...")
    para exibição ao usuário; demais exceções (ex.: ValueError de regra de
    negócio) fazem rollback e sobem intactas.

        with transactional("salvar cliente"):
            db.session.add(cliente)
    """
    try:
        yield
        commit_with_retry(max_retries=max_retries, backoff_seconds=backoff_seconds)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Falha de banco (%s)", descricao or "operação")
        if descricao:
            detalhe = getattr(exc, "orig", None) or exc
            raise ErroOperacao(f"Erro ao {descricao}: {detalhe}") from exc
        raise
    except Exception:
        db.session.rollback()
        raise
