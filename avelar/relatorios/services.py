"""Indicadores de vendas por período e financeiros do mês."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import func

from .. import db
from ..financeiro.services import resumo_do_mes
from ..produtos.models import Produto
from ..utils_datas import fim_do_dia, inicio_do_dia, inicio_mes
from ..vendas.models import Venda, VendaItem

LIMITE_TOP_PRODUTOS = 10


def periodo_padrao(hoje: date | None = None) -> tuple[date, date]:
    hoje = hoje or date.today()
    return inicio_mes(hoje), hoje


@dataclass
class MetricasVendas:
    inicio: date
    fim: date
    quantidade: int = 0
    faturamento: float = 0.0
    vendas_por_dia: list[tuple[date, int, float]] = field(default_factory=list)
    top_produtos: list[tuple[str, int, float]] = field(default_factory=list)

    @property
    def ticket_medio(self) -> float:
        if not self.quantidade:
            return 0.0
        return round(self.faturamento / self.quantidade, 2)

    def como_dict(self) -> dict:
        return {
            "inicio": self.inicio.isoformat(),
            "fim": self.fim.isoformat(),
            "quantidade": self.quantidade,
            "faturamento": self.faturamento,
            "ticket_medio": self.ticket_medio,
            "vendas_por_dia": [
                {"data": dia.isoformat(), "quantidade": qtd, "total": total}
                for dia, qtd, total in self.vendas_por_dia
            ],
            "top_produtos": [
                {"nome": nome, "quantidade": qtd, "total": total} for nome, qtd, total in self.top_produtos
            ],
        }


def metricas_vendas(inicio: date, fim: date) -> MetricasVendas:
    """Vendas concluídas entre `inicio` e `fim`, com `fim` incluído."""
    if fim < inicio:
        raise ValueError("Data final anterior à inicial")
    vendas = (
        Venda.query.filter(
            Venda.status == "concluida",
            Venda.created_at >= inicio_do_dia(inicio),
            Venda.created_at <= fim_do_dia(fim),
        )
        .order_by(Venda.created_at)
        .all()
    )
    metricas = MetricasVendas(inicio=inicio, fim=fim, quantidade=len(vendas))
    metricas.faturamento = round(sum(float(v.total or 0) for v in vendas), 2)

    por_dia: dict[date, list] = {}
    for venda in vendas:
        acumulado = por_dia.setdefault(venda.created_at.date(), [0, 0.0])
        acumulado[0] += 1
        acumulado[1] += float(venda.total or 0)
    metricas.vendas_por_dia = [(dia, qtd, round(total, 2)) for dia, (qtd, total) in sorted(por_dia.items())]

    if vendas:
        linhas = (
            db.session.query(
                Produto.nome,
                func.sum(VendaItem.quantidade).label("quantidade"),
                func.sum(VendaItem.subtotal).label("total"),
            )
            .join(VendaItem, VendaItem.produto_id == Produto.id)
            .filter(VendaItem.venda_id.in_([v.id for v in vendas]))
            .group_by(Produto.id, Produto.nome)
            .order_by(func.sum(VendaItem.quantidade).desc(), Produto.nome)
            .limit(LIMITE_TOP_PRODUTOS)
            .all()
        )
        metricas.top_produtos = [(nome, int(qtd or 0), round(float(total or 0), 2)) for nome, qtd, total in linhas]
    return metricas


@dataclass
class MetricasFinanceiras:
    receitas: float = 0.0
    despesas: float = 0.0

    @property
    def lucro(self) -> float:
        return round(self.receitas - self.despesas, 2)

    @property
    def margem(self) -> float:
        """Lucro sobre receitas, em %; 0 sem receitas."""
        if not self.receitas:
            return 0.0
        return round(self.lucro / self.receitas * 100, 1)

    def como_dict(self) -> dict:
        return {
            "receitas": self.receitas,
            "despesas": self.despesas,
            "lucro": self.lucro,
            "margem": self.margem,
        }


def metricas_financeiras(hoje: date | None = None) -> MetricasFinanceiras:
    resumo = resumo_do_mes(hoje)
    return MetricasFinanceiras(receitas=resumo.receitas, despesas=resumo.despesas)
