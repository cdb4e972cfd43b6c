"""Helpers de datas compartilhados pelos módulos (períodos e parsing)."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time

from dateutil.relativedelta import relativedelta


def hoje() -> date:
    return date.today()


def inicio_do_dia(dia: date) -> datetime:
    return datetime.combine(dia, time.min)


def fim_do_dia(dia: date) -> datetime:
    return datetime.combine(dia, time.max)


def inicio_mes(referencia: date | None = None) -> date:
    referencia = referencia or date.today()
    return referencia.replace(day=1)


def fim_mes(referencia: date | None = None) -> date:
    referencia = referencia or date.today()
    ultimo = calendar.monthrange(referencia.year, referencia.month)[1]
    return referencia.replace(day=ultimo)


def somar_meses(dia: date, meses: int) -> date:
    """Soma meses respeitando fim de mês (31/01 + 1 mês -> 28/02 ou 29/02)."""
    return dia + relativedelta(months=meses)


def parse_data(raw: str | None) -> date | None:
    """Aceita 'aaaa-mm-dd' (input date) ou 'dd/mm/aaaa'. Vazio -> None."""
    if not raw:
        return None
    raw = raw.strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise ValueError("Data inválida, use dd/mm/aaaa")


def calcular_idade(nascimento: date | None, referencia: date | None = None) -> int | None:
    if not nascimento:
        return None
    referencia = referencia or date.today()
    anos = referencia.year - nascimento.year
    if (referencia.month, referencia.day) < (nascimento.month, nascimento.day):
        anos -= 1
    return anos
