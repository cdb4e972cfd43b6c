import os
import sqlite3
import logging

from flask import Flask, flash, has_request_context, redirect, request, url_for
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from sqlalchemy import event
from sqlalchemy.engine import Engine

"""Aplicação principal e fábrica Flask.

Os módulos de domínio (clientes, vendas, estoque...) são carregados pelo
registro em main/registry.py dentro de create_app, evitando ciclos de
importação entre blueprints e models.
"""


# Extensões globais (inicializadas no create_app).
# `db` é o único ponto de acesso ao banco relacional (Postgres do Supabase
# em produção, SQLite local em desenvolvimento/testes).
db = SQLAlchemy()
csrf = CSRFProtect()

logger = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def _sqlite_pragmas_on_connect(dbapi_connection, connection_record):  # pragma: no cover - infra
    if isinstance(dbapi_connection, sqlite3.Connection):
        cur = dbapi_connection.cursor()
        # Integridade referencial e espera curta em bloqueios de escrita
        cur.execute("PRAGMA foreign_keys=ON")
        cur.execute("PRAGMA busy_timeout=1000")
        cur.close()


def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_object("config.Config")
    if config_object:
        app.config.from_object(config_object)

    os.makedirs(app.instance_path, exist_ok=True)

    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    app.logger.setLevel(getattr(logging, level, logging.INFO))
    logging.getLogger("avelar").setLevel(getattr(logging, level, logging.INFO))

    db.init_app(app)
    csrf.init_app(app)

    # Templates ficam ao lado de cada blueprint: 'clientes/lista.html' etc.
    from jinja2 import ChoiceLoader, FileSystemLoader

    loaders: list[object] = []
    if app.jinja_env.loader is not None:
        loaders.append(app.jinja_env.loader)
    loaders.append(FileSystemLoader(app.root_path))
    app.jinja_env.loader = ChoiceLoader(loaders)  # type: ignore[assignment]

    app.config.setdefault("SESSION_COOKIE_HTTPONLY", True)
    app.config.setdefault("SESSION_COOKIE_SAMESITE", "Lax")
    if app.config.get("ENV") == "production":  # pragma: no cover
        app.config.setdefault("SESSION_COOKIE_SECURE", True)

    from .formatters import register_filters  # noqa: WPS433

    register_filters(app)

    from .auth.auth import auth_bp  # noqa: WPS433
    from .core.core import core_bp  # noqa: WPS433
    from .main.registry import MODULOS, load_module, navegacao, titulo_pagina  # noqa: WPS433
    from .users.users import users_bp  # noqa: WPS433

    app.register_blueprint(core_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")
    for nome in MODULOS:
        load_module(app, nome)

    @app.context_processor
    def _inject_layout():
        loja = app.config.get("NOME_LOJA", "Óticas Avelar")
        blueprint = request.blueprint if has_request_context() else None
        return {
            "nome_loja": loja,
            "navegacao": navegacao(),
            "titulo_pagina": titulo_pagina(blueprint, loja),
        }

    from .utils_db import ErroOperacao  # noqa: WPS433

    @app.errorhandler(ErroOperacao)
    def _erro_operacao(exc):
        # Falha de banco não tratada na rota: alerta + volta para a tela anterior
        flash(str(exc), "danger")
        return redirect(request.referrer or url_for("main.dashboard"))

    @app.cli.command("init-db")
    def init_db():  # pragma: no cover - utilitário de desenvolvimento
        """Cria as tabelas no banco configurado (desenvolvimento)."""
        db.create_all()
        print("Tabelas criadas")

    if app.config.get("TESTING"):
        with app.app_context():
            db.create_all()

    @app.route("/health")
    def health():  # pragma: no cover - endpoint trivial
        return {"status": "ok"}

    logger.debug("Aplicação criada com %s módulos", len(MODULOS))
    return app
