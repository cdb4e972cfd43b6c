from datetime import date, datetime

import pytest

from avelar.lentes_contato.services import alerta_validade, calcular_validade


def test_alerta_validade():
    hoje = date(2024, 1, 10)
    assert alerta_validade(date(2024, 1, 9), hoje=hoje) == ("vencido", "Vencido")
    assert alerta_validade(date(2024, 1, 10), hoje=hoje) == ("proximo", "Vence em 0 dias")
    assert alerta_validade(date(2024, 2, 8), hoje=hoje) == ("proximo", "Vence em 29 dias")
    assert alerta_validade(date(2024, 2, 9), hoje=hoje) == ("ok", "OK")
    assert alerta_validade(date(2024, 1, 20), hoje=hoje, dias_alerta=5) == ("ok", "OK")


def test_calcular_validade():
    assert calcular_validade(date(2024, 3, 1), None) == date(2026, 3, 1)
    assert calcular_validade(date(2024, 3, 1), 6) == date(2024, 9, 1)


def test_agendar_e_realizar_controle(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    resp = client.post(
        "/lentes-contato/controles/novo",
        data={
            "cliente_id": cid,
            "produto_id": "0",
            "data_proximo_controle": "2024-08-01",
            "status": "agendado",
            "frequencia_uso": "diario",
        },
        follow_redirects=True,
    )
    assert "Controle agendado com sucesso!".encode() in resp.data

    with app.app_context():
        from avelar.lentes_contato.models import ControleLenteContato

        controle = ControleLenteContato.query.one()
        controle_id = controle.id
        assert controle.produto_id is None
        assert controle.atrasado(date(2024, 8, 2))

    resp = client.post(f"/lentes-contato/controles/{controle_id}/realizar", follow_redirects=True)
    assert "Controle marcado como realizado!".encode() in resp.data
    resp = client.post(f"/lentes-contato/controles/{controle_id}/realizar", follow_redirects=True)
    assert "Este controle já foi realizado".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.lentes_contato.models import ControleLenteContato

        controle = db.session.get(ControleLenteContato, controle_id)
        assert controle.status == "realizado"
        assert controle.data_ultimo_controle == date.today()


def test_registrar_lote(client, app, make_produto):
    with app.app_context():
        lente = make_produto("Acuvue Oasys", categoria="lente_contato", validade_meses=36)
        armacao = make_produto("Armação Teste")

    resp = client.post(
        "/lentes-contato/lotes/novo",
        data={"produto_id": lente, "numero_lote": "L123", "data_fabricacao": "2024-02-01", "quantidade_lote": "12"},
        follow_redirects=True,
    )
    assert "Lote registrado! Validade: 01/02/2027".encode() in resp.data
    assert b"L123" in resp.data

    with app.app_context():
        from avelar import db
        from avelar.lentes_contato.services import registrar_lote
        from avelar.produtos.models import Produto

        with pytest.raises(ValueError, match="não é uma lente de contato"):
            registrar_lote(db.session.get(Produto, armacao), numero_lote="X",
                           data_fabricacao=date(2024, 1, 1), quantidade_lote=1)


def test_relatorio_conta_vendas_do_mes(app, make_produto):
    with app.app_context():
        from avelar import db
        from avelar.lentes_contato.services import gerar_relatorio
        from avelar.vendas.models import Venda, VendaItem

        lente = make_produto("Air Optix", categoria="lente_contato", estoque=2, estoque_minimo=2,
                             preco=90.0, tipo_lente="mensal")
        outra = make_produto("Armação X")
        venda = Venda(numero_venda=1, subtotal=270, desconto=0, total=270, status="concluida",
                      created_at=datetime.now())
        venda.itens.append(VendaItem(produto_id=lente, quantidade=3, preco_unitario=90, subtotal=270))
        venda.itens.append(VendaItem(produto_id=outra, quantidade=1, preco_unitario=10, subtotal=10))
        db.session.add(venda)
        db.session.commit()

        rel = gerar_relatorio()
        assert rel.total_lentes == 1
        assert rel.estoque_baixo == 1
        assert rel.unidades_mes == 3
        assert rel.faturamento_mes == 270.0
        assert rel.mais_vendidas == [("Air Optix", 3)]
        assert rel.tipos_populares == [("mensal", 3)]
