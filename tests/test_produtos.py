from avelar.produtos.services import campos_da_categoria, margem, rotulo_campo


def test_campos_e_rotulos():
    assert "curva_base" in campos_da_categoria("lente_contato")
    assert "ponte" not in campos_da_categoria("lente_contato")
    assert campos_da_categoria(None) == []
    assert rotulo_campo("indice_refracao") == "Índice de Refração"
    assert rotulo_campo("curva_base") == "Curva Base"


def test_margem(app):
    with app.app_context():
        from avelar.produtos.models import Produto

        assert margem(Produto(preco_venda=200, preco_custo=80)) == (120.0, 60.0)
        assert margem(Produto(preco_venda=0, preco_custo=10)) == (-10.0, 0.0)


def test_cadastro_limpa_campos_de_outra_categoria(client, app):
    resp = client.post(
        "/produtos/novo",
        data={
            "sku": "LC-001",
            "nome": "Biofinity",
            "categoria": "lente_contato",
            "preco_venda": "180",
            "preco_custo": "90",
            "estoque_atual": "6",
            "estoque_minimo": "2",
            "ativo": "y",
            "curva_base": "8.6",
            "ponte": "18mm",
        },
        follow_redirects=True,
    )
    assert "Produto salvo com sucesso!".encode() in resp.data
    assert b"Curva Base" in resp.data

    with app.app_context():
        from avelar.estoque.models import EstoqueMovimentacao
        from avelar.produtos.models import Produto

        produto = Produto.query.one()
        assert produto.curva_base == "8.6"
        assert produto.ponte is None
        assert produto.estoque_atual == 6
        mov = EstoqueMovimentacao.query.one()
        assert mov.motivo == "estoque_inicial"

    resp = client.post(
        "/produtos/novo",
        data={"sku": "LC-001", "nome": "Repetido", "categoria": "acessorio", "preco_venda": "10"},
        follow_redirects=True,
    )
    assert "SKU já cadastrado".encode() in resp.data


def test_busca_pdv_ignora_sem_estoque(client, app, make_produto):
    with app.app_context():
        make_produto("Ray-Ban Aviador", estoque=2)
        make_produto("Ray-Ban Clubmaster", estoque=0)
        make_produto("Ray-Ban Wayfarer", estoque=3, ativo=False)

    resp = client.get("/produtos/buscar?q=ray-ban&destino=vendas")
    assert b"Ray-Ban Aviador" in resp.data
    assert b"Ray-Ban Clubmaster" not in resp.data
    assert b"Ray-Ban Wayfarer" not in resp.data

    resp = client.get("/produtos/buscar?q=ray-ban&destino=orcamentos")
    assert b"Ray-Ban Clubmaster" in resp.data
