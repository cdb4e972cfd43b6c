from datetime import date, timedelta

import pytest

from avelar.consultorio.services import HORARIOS, calendario_mes


def test_horarios_do_expediente():
    assert HORARIOS[0] == "08:00"
    assert HORARIOS[-1] == "18:30"
    assert len(HORARIOS) == 22


def _profissional(app, nome="Dra. Marta"):
    with app.app_context():
        from avelar import db
        from avelar.consultorio.models import Profissional

        prof = Profissional(nome=nome, especialidade="Optometria")
        db.session.add(prof)
        db.session.commit()
        return prof.id


def _dados(cid, pid, dia, hora="09:00"):
    return {
        "cliente_id": cid,
        "profissional_id": pid,
        "data": dia.isoformat(),
        "hora": hora,
        "tipo_consulta": "teste_visao",
        "duracao": "30",
    }


def test_agendamento_com_conflito(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
        outro = make_cliente("João Silva")
    pid = _profissional(app)
    dia = date.today() + timedelta(days=1)

    resp = client.post("/consultorio/novo", data=_dados(cid, pid, dia), follow_redirects=True)
    assert "Agendamento salvo com sucesso!".encode() in resp.data

    resp = client.post("/consultorio/novo", data=_dados(outro, pid, dia), follow_redirects=True)
    assert "Já existe um agendamento para este profissional neste horário!".encode() in resp.data

    # outro profissional no mesmo horário é permitido
    pid2 = _profissional(app, "Dr. Rui")
    resp = client.post("/consultorio/novo", data=_dados(outro, pid2, dia), follow_redirects=True)
    assert "Agendamento salvo com sucesso!".encode() in resp.data

    with app.app_context():
        from avelar.consultorio.models import Agendamento

        assert Agendamento.query.count() == 2


def test_cancelar_libera_horario(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    pid = _profissional(app)
    dia = date.today() + timedelta(days=2)
    client.post("/consultorio/novo", data=_dados(cid, pid, dia, "10:30"))

    with app.app_context():
        from avelar.consultorio.models import Agendamento

        ag_id = Agendamento.query.one().id

    resp = client.post(f"/consultorio/{ag_id}/cancelar", follow_redirects=True)
    assert b"Agendamento cancelado" in resp.data
    resp = client.post(f"/consultorio/{ag_id}/confirmar", follow_redirects=True)
    assert "Somente agendamentos pendentes podem ser confirmados".encode() in resp.data

    resp = client.post("/consultorio/novo", data=_dados(cid, pid, dia, "10:30"), follow_redirects=True)
    assert "Agendamento salvo com sucesso!".encode() in resp.data

    with app.app_context():
        from avelar import db
        from avelar.consultorio.models import Agendamento

        cancelado = db.session.get(Agendamento, ag_id)
        assert cancelado.status == "cancelado"
        assert cancelado.observacoes == f"Cancelado em {date.today().strftime('%d/%m/%Y')}"


def test_status_do_agendamento(app, make_cliente):
    with app.app_context():
        from avelar.consultorio.models import Agendamento
        from avelar.consultorio.services import cancelar, confirmar, registrar_comparecimento

        ag = Agendamento(status="agendado", observacoes="Trazer óculos")
        confirmar(ag)
        assert ag.status == "confirmado"
        registrar_comparecimento(ag, True)
        assert ag.status == "realizado"
        with pytest.raises(ValueError):
            cancelar(ag)

        ag2 = Agendamento(status="agendado", observacoes="Trazer óculos")
        registrar_comparecimento(ag2, False)
        assert ag2.status == "faltou"

        ag3 = Agendamento(status="confirmado", observacoes="Trazer óculos")
        cancelar(ag3, hoje=date(2024, 5, 2))
        assert ag3.observacoes == "Trazer óculos\nCancelado em 02/05/2024"


def test_editar_mantem_proprio_horario(client, app, make_cliente):
    with app.app_context():
        cid = make_cliente()
    pid = _profissional(app)
    dia = date.today() + timedelta(days=3)
    client.post("/consultorio/novo", data=_dados(cid, pid, dia, "14:00"))
    with app.app_context():
        from avelar.consultorio.models import Agendamento

        ag_id = Agendamento.query.one().id

    dados = _dados(cid, pid, dia, "14:00")
    dados["observacoes"] = "Paciente pediu lembrete"
    resp = client.post(f"/consultorio/{ag_id}/editar", data=dados, follow_redirects=True)
    assert "Agendamento atualizado com sucesso!".encode() in resp.data


def test_calendario_mes(app, make_cliente):
    with app.app_context():
        from avelar import db
        from avelar.consultorio.models import Agendamento, Profissional

        cid = make_cliente()
        prof = Profissional(nome="Dra. Marta")
        db.session.add(prof)
        db.session.flush()
        for hora, status in (("09:00", "agendado"), ("09:30", "confirmado"), ("10:00", "cancelado")):
            db.session.add(Agendamento(cliente_id=cid, profissional_id=prof.id, data=date(2024, 9, 10),
                                       hora=hora, tipo_consulta="teste_visao", status=status))
        db.session.commit()

        semanas = calendario_mes(2024, 9)
    # setembro/2024 começa num domingo
    assert semanas[0][0] == (date(2024, 9, 1), 0)
    dias = {dia: qtd for semana in semanas for dia, qtd in semana if dia}
    assert len(dias) == 30
    assert dias[date(2024, 9, 10)] == 2
    assert all(len(semana) == 7 for semana in semanas)


def test_pagina_calendario_navega_meses(client):
    resp = client.get("/consultorio/calendario?ano=2024&mes=1")
    assert resp.status_code == 200
    assert "Janeiro de 2024".encode() in resp.data
