from __future__ import annotations

import calendar
from datetime import date

from .. import db
from .models import Agendamento

LIMITE_LISTA = 100


def gerar_horarios(inicio: int = 8, fim: int = 18, passo: int = 30) -> list[str]:
    """Horários de `inicio`:00 até `fim`:30, a cada `passo` minutos."""
    return [f"{hora:02d}:{minuto:02d}" for hora in range(inicio, fim + 1) for minuto in range(0, 60, passo)]


HORARIOS = gerar_horarios()


def existe_conflito(data: date, hora: str, profissional_id: int, ignorar_id: int | None = None) -> bool:
    query = Agendamento.query.filter(
        Agendamento.data == data,
        Agendamento.hora == hora,
        Agendamento.profissional_id == profissional_id,
        Agendamento.status != "cancelado",
    )
    if ignorar_id:
        query = query.filter(Agendamento.id != ignorar_id)
    return db.session.query(query.exists()).scalar()


def validar_agendamento(agendamento: Agendamento) -> None:
    if agendamento.hora not in HORARIOS:
        raise ValueError("Horário fora do expediente")
    if existe_conflito(agendamento.data, agendamento.hora, agendamento.profissional_id, agendamento.id):
        raise ValueError("Já existe um agendamento para este profissional neste horário!")


def confirmar(agendamento: Agendamento) -> None:
    if agendamento.status != "agendado":
        raise ValueError("Somente agendamentos pendentes podem ser confirmados")
    agendamento.status = "confirmado"


def cancelar(agendamento: Agendamento, *, hoje: date | None = None) -> None:
    if agendamento.status in ("cancelado", "realizado"):
        raise ValueError(f"Agendamento já está {agendamento.status_label.lower()}")
    nota = f"Cancelado em {(hoje or date.today()).strftime('%d/%m/%Y')}"
    agendamento.status = "cancelado"
    agendamento.observacoes = f"{agendamento.observacoes}\n{nota}" if agendamento.observacoes else nota


def registrar_comparecimento(agendamento: Agendamento, compareceu: bool) -> None:
    if agendamento.status not in ("agendado", "confirmado"):
        raise ValueError("Agendamento não está em aberto")
    agendamento.status = "realizado" if compareceu else "faltou"


def proximos_agendamentos(data: date | None = None, *, hoje: date | None = None) -> list[Agendamento]:
    """Com `data`, só aquele dia; senão tudo de hoje em diante."""
    query = Agendamento.query
    if data:
        query = query.filter(Agendamento.data == data)
    else:
        query = query.filter(Agendamento.data >= (hoje or date.today()))
    return query.order_by(Agendamento.data, Agendamento.hora).limit(LIMITE_LISTA).all()


def calendario_mes(ano: int, mes: int) -> list[list[tuple[date | None, int]]]:
    """Semanas do mês com a contagem de agendamentos não cancelados por dia."""
    primeiro = date(ano, mes, 1)
    ultimo = date(ano, mes, calendar.monthrange(ano, mes)[1])
    contagem = dict(
        db.session.query(Agendamento.data, db.func.count(Agendamento.id))
        .filter(
            Agendamento.data >= primeiro,
            Agendamento.data <= ultimo,
            Agendamento.status != "cancelado",
        )
        .group_by(Agendamento.data)
        .all()
    )
    semanas = []
    for semana in calendar.Calendar(firstweekday=6).monthdatescalendar(ano, mes):
        semanas.append([(dia, contagem.get(dia, 0)) if dia.month == mes else (None, 0) for dia in semana])
    return semanas
