"""Indicadores do painel inicial."""

from __future__ import annotations

from datetime import date

from sqlalchemy import func

from .. import db
from ..clientes.models import Cliente
from ..produtos.models import Produto
from ..utils_datas import fim_do_dia, inicio_do_dia, inicio_mes
from ..vendas.models import Venda

LIMITE_ALERTA = 5
LIMITE_CRITICO = 2
QTD_RECENTES = 5


def estatisticas(hoje: date | None = None, *, limite_alerta: int = LIMITE_ALERTA) -> dict:
    """vendas_hoje, total_clientes, estoque_baixo e faturamento_mes (vendas concluídas)."""
    hoje = hoje or date.today()
    vendas_hoje = (
        db.session.query(func.count(Venda.id))
        .filter(Venda.created_at >= inicio_do_dia(hoje), Venda.created_at <= fim_do_dia(hoje))
        .scalar()
        or 0
    )
    total_clientes = db.session.query(func.count(Cliente.id)).scalar() or 0
    estoque_baixo = (
        db.session.query(func.count(Produto.id))
        .filter(Produto.ativo.is_(True), Produto.estoque_atual < limite_alerta)
        .scalar()
        or 0
    )
    faturamento = (
        db.session.query(func.coalesce(func.sum(Venda.total), 0))
        .filter(Venda.status == "concluida", Venda.created_at >= inicio_do_dia(inicio_mes(hoje)))
        .scalar()
    )
    return {
        "vendas_hoje": int(vendas_hoje),
        "total_clientes": int(total_clientes),
        "estoque_baixo": int(estoque_baixo),
        "faturamento_mes": round(float(faturamento or 0), 2),
    }


def vendas_recentes(limite: int = QTD_RECENTES) -> list[Venda]:
    return Venda.query.order_by(Venda.created_at.desc(), Venda.id.desc()).limit(limite).all()


def nivel_estoque(quantidade: int, *, limite_critico: int = LIMITE_CRITICO) -> str:
    return "CRÍTICO" if quantidade < limite_critico else "BAIXO"


def alertas_estoque(
    limite: int = QTD_RECENTES,
    *,
    limite_alerta: int = LIMITE_ALERTA,
    limite_critico: int = LIMITE_CRITICO,
) -> list[tuple[Produto, str]]:
    produtos = (
        Produto.query.filter(Produto.ativo.is_(True), Produto.estoque_atual < limite_alerta)
        .order_by(Produto.estoque_atual, Produto.nome)
        .limit(limite)
        .all()
    )
    return [(p, nivel_estoque(p.estoque_atual, limite_critico=limite_critico)) for p in produtos]
