def _produto(app, make_produto, **kw):
    with app.app_context():
        return make_produto(**kw)


def test_finalizar_venda_baixa_estoque_e_gera_lancamento(client, app, make_produto, make_cliente):
    with app.app_context():
        pid = make_produto(estoque=3, preco=100.0)
        cid = make_cliente()

    client.post("/vendas/adicionar", data={"produto_id": pid, "quantidade": 2})
    client.post("/vendas/cliente", data={"cliente_id": cid})
    resp = client.post(
        "/vendas/finalizar",
        data={"desconto": "10", "forma_pagamento": "pix"},
        follow_redirects=True,
    )
    assert resp.status_code == 200
    assert "Venda #1 finalizada com sucesso!".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.estoque.models import EstoqueMovimentacao
        from avelar.financeiro.models import Lancamento
        from avelar.produtos.models import Produto
        from avelar.vendas.models import Venda

        venda = Venda.query.one()
        assert venda.cliente_id == cid
        assert venda.subtotal == 200.0
        assert venda.total == 190.0
        assert db.session.get(Produto, pid).estoque_atual == 1
        mov = EstoqueMovimentacao.query.one()
        assert (mov.saldo_anterior, mov.saldo_atual, mov.motivo) == (3, 1, "venda")
        lanc = Lancamento.query.one()
        assert lanc.tipo == "receita"
        assert lanc.status == "pago"
        assert lanc.valor == 190.0
        assert lanc.venda_id == venda.id

    # carrinho limpo após finalizar
    resp = client.get("/vendas/")
    assert b"Carrinho vazio" in resp.data


def test_carrinho_respeita_estoque(client, app, make_produto):
    pid = _produto(app, make_produto, estoque=1)
    resp = client.post("/vendas/adicionar", data={"produto_id": pid, "quantidade": 2}, follow_redirects=True)
    assert "Estoque insuficiente!".encode() in resp.data


def test_finalizar_carrinho_vazio(client):
    resp = client.post("/vendas/finalizar", data={"forma_pagamento": "dinheiro"}, follow_redirects=True)
    assert "Adicione produtos ao carrinho!".encode() in resp.data


def test_desconto_maior_que_subtotal(client, app, make_produto):
    pid = _produto(app, make_produto, preco=50.0)
    client.post("/vendas/adicionar", data={"produto_id": pid})
    resp = client.post(
        "/vendas/finalizar",
        data={"desconto": "80", "forma_pagamento": "dinheiro"},
        follow_redirects=True,
    )
    assert "Desconto inválido".encode() in resp.data
    with app.app_context():
        from avelar.vendas.models import Venda

        assert Venda.query.count() == 0


def test_carrinho_incrementa_e_remove(app, make_produto):
    from avelar.vendas.carrinho import carrinho_orcamento, carrinho_venda

    with app.app_context():
        pid = make_produto(estoque=2, preco=10.0)
    with app.test_request_context():
        from avelar import db
        from avelar.produtos.models import Produto

        produto = db.session.get(Produto, pid)
        carrinho = carrinho_venda()
        carrinho.adicionar(produto)
        carrinho.adicionar(produto)
        assert carrinho.quantidade_itens == 2
        assert carrinho.total == 20.0
        try:
            carrinho.adicionar(produto)
        except ValueError as exc:
            assert str(exc) == "Estoque insuficiente!"
        else:  # pragma: no cover
            raise AssertionError("esperava estoque insuficiente")
        carrinho.atualizar_quantidade(pid, 0)
        assert carrinho.vazio()

        # orçamento não limita pelo estoque
        orc = carrinho_orcamento()
        orc.adicionar(produto, 5)
        assert orc.total == 50.0
        assert carrinho.vazio()


def test_numero_venda_sequencial(app):
    with app.app_context():
        from avelar import db
        from avelar.vendas.models import Venda
        from avelar.vendas.services import proximo_numero_venda

        assert proximo_numero_venda() == 1
        db.session.add(Venda(numero_venda=7, total=0, subtotal=0, desconto=0))
        db.session.commit()
        assert proximo_numero_venda() == 8
