from datetime import date, timedelta

import pytest


def _lancamento(**campos):
    from avelar import db
    from avelar.financeiro.models import Lancamento

    lanc = Lancamento(**campos)
    db.session.add(lanc)
    db.session.commit()
    return lanc


def test_resumo_do_mes(app):
    hoje = date(2024, 5, 15)
    with app.app_context():
        from avelar.financeiro.models import Lancamento
        from avelar.financeiro.services import calcular_resumo

        lancamentos = [
            Lancamento(tipo="receita", descricao="Venda", valor=300, status="pago",
                       data_vencimento=hoje, data_pagamento=date(2024, 5, 2)),
            Lancamento(tipo="despesa", descricao="Aluguel", valor=120, status="pago",
                       data_vencimento=hoje, data_pagamento=date(2024, 5, 10)),
            # pago no mês anterior: fora do resumo
            Lancamento(tipo="receita", descricao="Antiga", valor=999, status="pago",
                       data_vencimento=date(2024, 4, 1), data_pagamento=date(2024, 4, 30)),
            Lancamento(tipo="receita", descricao="Crediário", valor=80, status="pendente",
                       data_vencimento=date(2024, 5, 20)),
            Lancamento(tipo="despesa", descricao="Fornecedor", valor=50, status="pendente",
                       data_vencimento=date(2024, 6, 1)),
            # pendente vencido não entra em a receber
            Lancamento(tipo="receita", descricao="Atrasada", valor=40, status="pendente",
                       data_vencimento=date(2024, 5, 1)),
        ]
        resumo = calcular_resumo(lancamentos, hoje=hoje)
    assert resumo.receitas == 300
    assert resumo.despesas == 120
    assert resumo.a_receber == 80
    assert resumo.a_pagar == 50
    assert resumo.saldo == 180


def test_status_vencido_e_filtro(app):
    hoje = date.today()
    with app.app_context():
        from avelar.financeiro.services import listar_lancamentos

        atrasada = _lancamento(tipo="receita", descricao="Atrasada", valor=10,
                               data_vencimento=hoje - timedelta(days=3))
        _lancamento(tipo="receita", descricao="Em dia", valor=10, data_vencimento=hoje + timedelta(days=3))
        assert atrasada.status_efetivo() == "vencido"
        assert [lanc.descricao for lanc in listar_lancamentos(status="vencido")] == ["Atrasada"]
        assert [lanc.descricao for lanc in listar_lancamentos(status="pendente")] == ["Em dia"]


def test_pagar_lancamento(client, app):
    with app.app_context():
        lanc_id = _lancamento(tipo="despesa", descricao="Luz", valor=75.5, data_vencimento=date.today()).id

    resp = client.post(f"/financeiro/{lanc_id}/pagar", follow_redirects=True)
    assert "Movimentação marcada como paga!".encode() in resp.data
    resp = client.post(f"/financeiro/{lanc_id}/pagar", follow_redirects=True)
    assert "Lançamento já está pago".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.financeiro.models import Lancamento

        lanc = db.session.get(Lancamento, lanc_id)
        assert lanc.status == "pago"
        assert lanc.data_pagamento == date.today()


def test_nova_movimentacao_pelo_formulario(client, app):
    resp = client.post(
        "/financeiro/novo",
        data={
            "tipo": "despesa",
            "categoria": "aluguel",
            "descricao": "Aluguel da loja",
            "valor": "1500",
            "data_vencimento": date.today().isoformat(),
            "cliente_id": "0",
        },
        follow_redirects=True,
    )
    assert "Movimentação salva com sucesso!".encode() in resp.data
    with app.app_context():
        from avelar.financeiro.models import Lancamento

        lanc = Lancamento.query.one()
        assert lanc.status == "pendente"
        assert lanc.cliente_id is None


def test_marcar_como_pago_rejeita_repeticao(app):
    with app.app_context():
        from avelar.financeiro.services import marcar_como_pago

        lanc = _lancamento(tipo="receita", descricao="X", valor=1, data_vencimento=date.today())
        marcar_como_pago(lanc, hoje=date(2024, 1, 1))
        assert lanc.data_pagamento == date(2024, 1, 1)
        with pytest.raises(ValueError):
            marcar_como_pago(lanc)
