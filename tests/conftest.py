import os
import sys
import tempfile

import pytest

# Ensure project root (parent of tests) is on sys.path before importing app
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from avelar import create_app, db  # noqa: E402


@pytest.fixture()
def app():
    # Banco SQLite temporário por teste
    tmpdir = tempfile.TemporaryDirectory()
    instance = tmpdir.name

    class TestConfig:
        TESTING = True
        SECRET_KEY = "test"
        REQUIRE_LOGIN = True
        DEBUG_LOGIN_BYPASS = True
        WTF_CSRF_ENABLED = False
        ENFORCE_PASSWORD_POLICY = False  # desativa política em testes
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + os.path.join(instance, "avelar.db")
        SQLALCHEMY_TRACK_MODIFICATIONS = False
        CEP_API_URL = "https://cep.test/ws/{cep}/json/"

    flask_app = create_app(TestConfig)
    with flask_app.app_context():
        db.create_all()
    yield flask_app
    # Libera conexões para evitar lock em Windows ao remover diretório
    with flask_app.app_context():
        db.session.remove()
        db.engine.dispose()
    tmpdir.cleanup()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def make_cliente(app):
    def _make(nome="Maria Souza", **campos):
        from avelar.clientes.models import Cliente

        cliente = Cliente(nome=nome, **campos)
        db.session.add(cliente)
        db.session.commit()
        return cliente.id

    return _make


@pytest.fixture()
def make_produto(app):
    def _make(nome="Armação Classic", sku=None, categoria="armacao", estoque=10, preco=250.0, **campos):
        from avelar.produtos.models import Produto

        produto = Produto(
            nome=nome,
            sku=sku or nome.upper().replace(" ", "-"),
            categoria=categoria,
            preco_venda=preco,
            preco_custo=campos.pop("preco_custo", preco / 2),
            estoque_atual=estoque,
            estoque_minimo=campos.pop("estoque_minimo", 1),
            ativo=campos.pop("ativo", True),
            **campos,
        )
        db.session.add(produto)
        db.session.commit()
        return produto.id

    return _make
