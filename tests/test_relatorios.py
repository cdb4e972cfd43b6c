from datetime import date, datetime, time

import pytest


def _venda(numero, total, created_at, status="concluida", itens=()):
    from avelar import db
    from avelar.vendas.models import Venda, VendaItem

    venda = Venda(numero_venda=numero, subtotal=total, desconto=0, total=total,
                  status=status, created_at=created_at)
    for produto_id, qtd, subtotal in itens:
        venda.itens.append(VendaItem(produto_id=produto_id, quantidade=qtd,
                                     preco_unitario=subtotal / qtd, subtotal=subtotal))
    db.session.add(venda)
    db.session.commit()
    return venda


def test_metricas_vendas_periodo(app, make_produto):
    with app.app_context():
        from avelar.relatorios.services import metricas_vendas

        armacao = make_produto("Armação Aviador")
        lente = make_produto("Lente Multifocal", categoria="lente")
        _venda(1, 300.0, datetime(2024, 4, 2, 10), itens=[(armacao, 1, 300.0)])
        _venda(2, 500.0, datetime(2024, 4, 2, 23, 30), itens=[(lente, 2, 500.0)])
        _venda(3, 100.0, datetime(2024, 4, 5, 9), itens=[(armacao, 1, 100.0)])
        _venda(4, 999.0, datetime(2024, 4, 3, 9), status="cancelada", itens=[(lente, 1, 999.0)])
        _venda(5, 50.0, datetime(2024, 4, 6, 9), itens=[(armacao, 1, 50.0)])

        m = metricas_vendas(date(2024, 4, 1), date(2024, 4, 5))
        assert m.quantidade == 3
        assert m.faturamento == 900.0
        assert m.ticket_medio == 300.0
        assert m.vendas_por_dia == [(date(2024, 4, 2), 2, 800.0), (date(2024, 4, 5), 1, 100.0)]
        assert m.top_produtos[0] == ("Armação Aviador", 2, 400.0)
        assert m.top_produtos[1] == ("Lente Multifocal", 2, 500.0)

        with pytest.raises(ValueError, match="Data final anterior"):
            metricas_vendas(date(2024, 4, 5), date(2024, 4, 1))


def test_metricas_financeiras_margem(app):
    with app.app_context():
        from avelar.relatorios.services import MetricasFinanceiras

        assert MetricasFinanceiras(receitas=1000, despesas=250).margem == 75.0
        assert MetricasFinanceiras().margem == 0.0
        assert MetricasFinanceiras(receitas=100, despesas=150).lucro == -50.0


def test_api_resumo(client, app):
    with app.app_context():
        _venda(1, 120.0, datetime.combine(date.today(), time(12)))
    resp = client.get("/relatorios/api/resumo")
    assert resp.status_code == 200
    dados = resp.get_json()
    assert dados["vendas"]["quantidade"] == 1
    assert dados["vendas"]["faturamento"] == 120.0
    assert set(dados["financeiro"]) == {"receitas", "despesas", "lucro", "margem"}

    resp = client.get("/relatorios/api/resumo?inicio=2024-05-10&fim=2024-05-01")
    assert resp.status_code == 400
    assert resp.get_json()["erro"] == "Data final anterior à inicial"


def test_pagina_relatorios_com_periodo_invalido(client):
    resp = client.get("/relatorios/?inicio=2024-05-10&fim=2024-05-01")
    assert resp.status_code == 200
    assert "Data final anterior à inicial".encode() in resp.data


def test_venda_no_fim_da_noite_conta_no_dia_local(app):
    with app.app_context():
        from avelar.main.services import estatisticas
        from avelar.relatorios.services import metricas_vendas

        _venda(1, 200.0, datetime(2026, 10, 19, 22, 0))
        _venda(2, 80.0, datetime(2026, 10, 19, 23, 59, 59, 500000))

        m = metricas_vendas(date(2026, 10, 19), date(2026, 10, 19))
        assert m.quantidade == 2
        assert m.vendas_por_dia == [(date(2026, 10, 19), 2, 280.0)]
        assert estatisticas(date(2026, 10, 19))["vendas_hoje"] == 2
        assert estatisticas(date(2026, 10, 20))["vendas_hoje"] == 0


def test_created_at_padrao_usa_relogio_local(app):
    with app.app_context():
        from avelar import db
        from avelar.relatorios.services import metricas_vendas
        from avelar.vendas.models import Venda

        antes = datetime.now()
        venda = Venda(numero_venda=1, subtotal=50, desconto=0, total=50, status="concluida")
        db.session.add(venda)
        db.session.commit()
        depois = datetime.now()

        assert antes <= venda.created_at <= depois
        dia = venda.created_at.date()
        assert metricas_vendas(dia, dia).quantidade == 1
