from datetime import date, timedelta

import pytest

from avelar.garantias.services import calcular_data_fim, validar_tipo


def test_calcular_data_fim():
    inicio = date(2024, 1, 31)
    assert calcular_data_fim(inicio, "6_meses") == date(2024, 7, 31)
    assert calcular_data_fim(inicio, "12_meses", 1) == date(2024, 2, 29)
    assert calcular_data_fim(inicio, "30_dias") == date(2024, 3, 1)
    assert calcular_data_fim(inicio, "fabricante") == date(2025, 1, 31)
    assert calcular_data_fim(inicio, "vitalicia") is None


def test_tipo_por_produto():
    validar_tipo("armacao", "vitalicia")
    with pytest.raises(ValueError, match="não disponível"):
        validar_tipo("servico", "vitalicia")
    with pytest.raises(ValueError, match="Selecione o tipo de produto!"):
        validar_tipo("", "6_meses")


def _garantia(app, cliente_id, **campos):
    with app.app_context():
        from avelar import db
        from avelar.garantias.models import Garantia

        dados = dict(
            cliente_id=cliente_id,
            tipo_produto="armacao",
            tipo_garantia="12_meses",
            data_inicio=date.today(),
            data_fim=date.today() + timedelta(days=365),
            status="ativa",
        )
        dados.update(campos)
        garantia = Garantia(**dados)
        db.session.add(garantia)
        db.session.commit()
        return garantia.id


def test_nova_garantia_pelo_formulario(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    resp = client.post(
        "/garantias/nova",
        data={
            "cliente_id": cid,
            "produto_id": "0",
            "tipo_produto": "lente",
            "tipo_garantia": "24_meses",
            "data_inicio": "2024-03-10",
        },
        follow_redirects=True,
    )
    assert "Garantia registrada com sucesso!".encode() in resp.data
    with app.app_context():
        from avelar.garantias.models import Garantia
        from avelar.garantias.services import TERMOS_PADRAO

        garantia = Garantia.query.one()
        assert garantia.data_fim == date(2026, 3, 10)
        assert garantia.produto_id is None
        assert garantia.termos == TERMOS_PADRAO


def test_tipo_incompativel_no_formulario(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    resp = client.post(
        "/garantias/nova",
        data={"cliente_id": cid, "produto_id": "0", "tipo_produto": "servico",
              "tipo_garantia": "vitalicia", "data_inicio": "2024-03-10"},
        follow_redirects=True,
    )
    assert "Tipo de garantia não disponível para este produto".encode() in resp.data


def test_estender_e_cancelar(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    gid = _garantia(app, cid, data_fim=date(2030, 1, 15), duracao_meses=12)

    resp = client.post(f"/garantias/{gid}/estender", data={"meses": "6"}, follow_redirects=True)
    assert "Garantia estendida até 15/07/2030".encode() in resp.data

    resp = client.post(f"/garantias/{gid}/estender", data={"meses": "0"}, follow_redirects=True)
    assert "Informe um número de meses válido!".encode() in resp.data

    resp = client.post(f"/garantias/{gid}/cancelar", follow_redirects=True)
    assert b"Garantia cancelada" in resp.data
    resp = client.post(f"/garantias/{gid}/cancelar", follow_redirects=True)
    assert "Garantia já está cancelada".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.garantias.models import Garantia

        garantia = db.session.get(Garantia, gid)
        assert garantia.status == "cancelada"
        assert garantia.duracao_meses == 18


def test_vitalicia_nao_estende(app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    gid = _garantia(app, cid, tipo_garantia="vitalicia", data_fim=None)
    with app.app_context():
        from avelar import db
        from avelar.garantias.models import Garantia
        from avelar.garantias.services import estender_garantia

        garantia = db.session.get(Garantia, gid)
        assert garantia.status_efetivo() == "ativa"
        with pytest.raises(ValueError, match="vitalícia"):
            estender_garantia(garantia, 12)


def test_vencida_e_reativada_ao_estender(app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    gid = _garantia(app, cid, data_fim=date.today() - timedelta(days=10), status="ativa")
    antiga = _garantia(app, cid, data_fim=date.today() - timedelta(days=100), status="ativa")
    with app.app_context():
        from avelar import db
        from avelar.garantias.models import Garantia
        from avelar.garantias.services import estender_garantia, listar_garantias

        assert sorted(g.id for g in listar_garantias("vencida")) == sorted([gid, antiga])
        garantia = db.session.get(Garantia, gid)
        assert garantia.status_efetivo() == "vencida"
        estender_garantia(garantia, 3)
        assert garantia.status == "ativa"
        assert garantia.status_efetivo() == "ativa"

        outra = db.session.get(Garantia, antiga)
        estender_garantia(outra, 1)
        assert outra.status_efetivo() == "vencida"


def test_ocorrencia_troca_consome_garantia(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    gid = _garantia(app, cid)
    resp = client.post(
        f"/garantias/{gid}/ocorrencias",
        data={"tipo": "troca", "descricao": "Haste quebrada", "resolucao": "Armação trocada"},
        follow_redirects=True,
    )
    assert "Ocorrência registrada".encode() in resp.data
    assert b"Haste quebrada" in resp.data

    resp = client.post(
        f"/garantias/{gid}/ocorrencias",
        data={"tipo": "ajuste", "descricao": "Ajuste de plaquetas"},
        follow_redirects=True,
    )
    assert "Ocorrências só podem ser registradas em garantias ativas".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.garantias.models import Garantia

        garantia = db.session.get(Garantia, gid)
        assert garantia.status == "utilizada"
        assert len(garantia.ocorrencias) == 1


def test_estatisticas(app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    _garantia(app, cid)
    _garantia(app, cid, data_fim=date.today() - timedelta(days=1))
    _garantia(app, cid, status="cancelada")
    with app.app_context():
        from avelar.garantias.services import estatisticas

        stats = estatisticas()
        assert (stats.total, stats.ativas, stats.vencidas, stats.ocorrencias_mes) == (3, 1, 1, 0)
