"""Serviços do financeiro: filtros, baixa de pagamento e resumo mensal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy import and_, or_

from ..utils_datas import fim_mes, inicio_mes
from .models import Lancamento

LIMITE_LISTA = 100


@dataclass
class ResumoFinanceiro:
    receitas: float = 0.0
    despesas: float = 0.0
    a_receber: float = 0.0
    a_pagar: float = 0.0

    @property
    def saldo(self) -> float:
        return round(self.receitas - self.despesas, 2)


def listar_lancamentos(
    *, tipo: str | None = None, status: str | None = None, hoje: date | None = None
) -> list[Lancamento]:
    """Ordenados por vencimento. Status 'vencido' = pendente com vencimento passado."""
    hoje = hoje or date.today()
    query = Lancamento.query
    if tipo:
        query = query.filter(Lancamento.tipo == tipo)
    if status == "vencido":
        query = query.filter(
            or_(
                Lancamento.status == "vencido",
                and_(Lancamento.status == "pendente", Lancamento.data_vencimento < hoje),
            )
        )
    elif status == "pendente":
        query = query.filter(Lancamento.status == "pendente", Lancamento.data_vencimento >= hoje)
    elif status:
        query = query.filter(Lancamento.status == status)
    return query.order_by(Lancamento.data_vencimento.asc(), Lancamento.id).limit(LIMITE_LISTA).all()


def marcar_como_pago(lancamento: Lancamento, *, hoje: date | None = None) -> Lancamento:
    if lancamento.status == "pago":
        raise ValueError("Lançamento já está pago")
    lancamento.status = "pago"
    lancamento.data_pagamento = hoje or date.today()
    return lancamento


def calcular_resumo(lancamentos, *, hoje: date | None = None) -> ResumoFinanceiro:
    """Resumo do mês de `hoje`.

    - receitas/despesas: pagas com data_pagamento dentro do mês
    - a receber/a pagar: pendentes com vencimento a partir de hoje
    """
    hoje = hoje or date.today()
    ini, fim = inicio_mes(hoje), fim_mes(hoje)
    resumo = ResumoFinanceiro()
    for lanc in lancamentos:
        valor = float(lanc.valor or 0)
        if lanc.status == "pago" and lanc.data_pagamento and ini <= lanc.data_pagamento <= fim:
            if lanc.tipo == "receita":
                resumo.receitas += valor
            elif lanc.tipo == "despesa":
                resumo.despesas += valor
        elif lanc.status == "pendente" and lanc.data_vencimento and lanc.data_vencimento >= hoje:
            if lanc.tipo == "receita":
                resumo.a_receber += valor
            elif lanc.tipo == "despesa":
                resumo.a_pagar += valor
    resumo.receitas = round(resumo.receitas, 2)
    resumo.despesas = round(resumo.despesas, 2)
    resumo.a_receber = round(resumo.a_receber, 2)
    resumo.a_pagar = round(resumo.a_pagar, 2)
    return resumo


def resumo_do_mes(hoje: date | None = None) -> ResumoFinanceiro:
    hoje = hoje or date.today()
    ini = inicio_mes(hoje)
    lancamentos = Lancamento.query.filter(
        or_(
            and_(Lancamento.status == "pago", Lancamento.data_pagamento >= ini),
            and_(Lancamento.status == "pendente", Lancamento.data_vencimento >= hoje),
        )
    ).all()
    return calcular_resumo(lancamentos, hoje=hoje)
