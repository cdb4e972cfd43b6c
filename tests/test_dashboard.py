from datetime import date, datetime, time

from avelar.main.registry import MODULOS, load_module, modulos_carregados, navegacao, titulo_pagina
from avelar.main.services import nivel_estoque


def test_estatisticas_e_alertas(client, app, make_produto, make_cliente):
    with app.app_context():
        from avelar import db
        from avelar.vendas.models import Venda

        make_cliente()
        make_produto("Solução 120ml", categoria="solucao", estoque=1)
        make_produto("Estojo", categoria="acessorio", estoque=4)
        make_produto("Armação Farta", estoque=30)
        make_produto("Inativo", estoque=0, ativo=False)
        agora = datetime.combine(date.today(), time(12))
        db.session.add(Venda(numero_venda=1, subtotal=150, desconto=0, total=150, created_at=agora))
        db.session.add(Venda(numero_venda=2, subtotal=80, desconto=0, total=80, created_at=agora,
                             status="cancelada"))
        db.session.commit()

    resp = client.get("/dashboard/api/stats")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "vendas_hoje": 2,
        "total_clientes": 1,
        "estoque_baixo": 2,
        "faturamento_mes": 150.0,
    }

    resp = client.get("/dashboard/")
    assert "CRÍTICO".encode() in resp.data
    assert "Solução 120ml".encode() in resp.data
    assert "Armação Farta".encode() not in resp.data


def test_nivel_estoque():
    assert nivel_estoque(0) == "CRÍTICO"
    assert nivel_estoque(1) == "CRÍTICO"
    assert nivel_estoque(2) == "BAIXO"


def test_modulo_desconhecido_mostra_erro(client):
    resp = client.get("/dashboard/modulo/inexistente")
    assert resp.status_code == 404
    assert "Módulo não encontrado".encode() in resp.data
    assert b"Voltar ao Dashboard" in resp.data


def test_modulo_redireciona_para_entrada(client):
    resp = client.get("/dashboard/modulo/lentes_contato")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/lentes-contato/")
    # CEP não aparece no menu
    assert client.get("/dashboard/modulo/cep").status_code == 404


def test_registro_idempotente(app):
    assert modulos_carregados(app) == set(MODULOS)
    regras_antes = len(list(app.url_map.iter_rules()))
    load_module(app, "clientes")
    assert len(list(app.url_map.iter_rules())) == regras_antes
    assert "cep" not in [m.nome for m in navegacao()]


def test_titulo_pagina():
    assert titulo_pagina("clientes", "Óticas Avelar") == "Clientes - Óticas Avelar"
    assert titulo_pagina(None, "Óticas Avelar") == "Óticas Avelar"


def test_titulo_no_layout(client):
    resp = client.get("/fornecedores/")
    assert "<title>Fornecedores - Óticas Avelar</title>".encode() in resp.data


def test_cadastros_lista_atalhos(client):
    resp = client.get("/dashboard/cadastros")
    assert b"/clientes/novo" in resp.data
    assert b"/consultorio/novo" in resp.data
