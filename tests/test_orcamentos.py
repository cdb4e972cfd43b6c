from datetime import date, timedelta

import pytest


def test_salvar_orcamento_exige_cliente_e_itens(client, app, make_produto):
    resp = client.post("/orcamentos/salvar", follow_redirects=True)
    assert "Selecione um cliente para o orçamento!".encode() in resp.data

    with app.app_context():
        from avelar.clientes.models import Cliente
        from avelar import db

        cliente = Cliente(nome="Rita")
        db.session.add(cliente)
        db.session.commit()
        cid = cliente.id
    client.post("/orcamentos/cliente", data={"cliente_id": cid})
    resp = client.post("/orcamentos/salvar", follow_redirects=True)
    assert "Adicione produtos ao orçamento!".encode() in resp.data


def test_orcamento_nao_controla_estoque_e_carrega_no_pdv(client, app, make_produto, make_cliente):
    with app.app_context():
        pid = make_produto(estoque=1, preco=300.0)
        cid = make_cliente()

    client.post("/orcamentos/adicionar", data={"produto_id": pid, "quantidade": 3})
    client.post("/orcamentos/cliente", data={"cliente_id": cid})
    resp = client.post("/orcamentos/salvar", data={"observacoes": "Cliente volta sábado"}, follow_redirects=True)
    assert "Orçamento #1 salvo com sucesso!".encode() in resp.data

    with app.app_context():
        from avelar.orcamentos.models import Orcamento

        orc = Orcamento.query.one()
        assert orc.total == 900.0
        assert orc.data_validade == date.today() + timedelta(days=7)
        assert len(orc.itens) == 1
        orc_id = orc.id

    # estoque (1) não atende as 3 unidades do orçamento
    resp = client.post(f"/orcamentos/{orc_id}/carregar", follow_redirects=True)
    assert "Estoque insuficiente para Armação Classic".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.produtos.models import Produto

        db.session.get(Produto, pid).estoque_atual = 5
        db.session.commit()

    resp = client.post(f"/orcamentos/{orc_id}/carregar", follow_redirects=True)
    assert "Orçamento #1 carregado no PDV".encode() in resp.data
    assert "Armação Classic".encode() in resp.data

    resp = client.post("/vendas/finalizar", data={"forma_pagamento": "pix"}, follow_redirects=True)
    assert "Venda #1 finalizada com sucesso!".encode() in resp.data
    with app.app_context():
        from avelar.vendas.models import Venda

        venda = Venda.query.one()
        assert venda.total == 900.0
        assert venda.cliente_id == cid


def test_aprovar_rejeitar_e_expirado(app, make_cliente):
    with app.app_context():
        from avelar import db
        from avelar.orcamentos.models import Orcamento
        from avelar.orcamentos.services import aprovar, rejeitar

        cid = make_cliente()
        vigente = Orcamento(cliente_id=cid, total=10, status="pendente", data_validade=date.today())
        vencido = Orcamento(cliente_id=cid, total=10, status="pendente",
                            data_validade=date.today() - timedelta(days=1))
        db.session.add_all([vigente, vencido])
        db.session.commit()

        aprovar(vigente)
        assert vigente.status == "aprovado"
        with pytest.raises(ValueError, match="Somente orçamentos pendentes"):
            rejeitar(vigente)

        assert vencido.expirado()
        assert vencido.status_label == "Expirado"
        with pytest.raises(ValueError, match="Orçamento expirado"):
            aprovar(vencido)
        rejeitar(vencido)
        assert vencido.status == "rejeitado"
        assert not vencido.expirado()


def test_rotas_de_status(client, app, make_cliente):
    with app.app_context():
        from avelar import db
        from avelar.orcamentos.models import Orcamento

        cid = make_cliente()
        orc = Orcamento(cliente_id=cid, total=10, status="pendente", data_validade=date.today())
        db.session.add(orc)
        db.session.commit()
        orc_id = orc.id

    resp = client.post(f"/orcamentos/{orc_id}/rejeitar", follow_redirects=True)
    assert "Orçamento rejeitado".encode() in resp.data
    resp = client.post(f"/orcamentos/{orc_id}/aprovar", follow_redirects=True)
    assert "Somente orçamentos pendentes podem ser alterados".encode() in resp.data
    resp = client.post(f"/orcamentos/{orc_id}/carregar", follow_redirects=True)
    assert "Orçamento rejeitado não pode ser carregado".encode() in resp.data


def test_orcamento_aprovado_fora_da_validade_nao_carrega(client, app, make_cliente, make_produto):
    with app.app_context():
        from avelar import db
        from avelar.orcamentos.models import Orcamento, OrcamentoItem

        cid = make_cliente()
        pid = make_produto(estoque=5, preco=200.0)
        orc = Orcamento(cliente_id=cid, total=200, status="aprovado",
                        data_validade=date.today() - timedelta(days=2))
        orc.itens.append(OrcamentoItem(produto_id=pid, quantidade=1, preco_unitario=200.0, subtotal=200.0))
        db.session.add(orc)
        db.session.commit()
        orc_id = orc.id
        assert not orc.expirado()
        assert orc.fora_da_validade()

    resp = client.post(f"/orcamentos/{orc_id}/carregar", follow_redirects=True)
    assert "Orçamento expirado".encode() in resp.data
    resp = client.get("/vendas/")
    assert b"Carrinho vazio" in resp.data
