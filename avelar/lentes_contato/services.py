"""Catálogo, acompanhamento de usuários e validade de lotes de lentes de contato."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from .. import db
from ..produtos.models import Produto
from ..utils_datas import inicio_do_dia, inicio_mes, somar_meses
from ..vendas.models import Venda, VendaItem
from .models import ControleLenteContato, ControleValidadeLC

VALIDADE_PADRAO_MESES = 24
LIMITE_CONTROLES = 20
DIAS_ALERTA_PADRAO = 30


def listar_lentes(somente_ativas: bool = True) -> list[Produto]:
    query = Produto.query.filter(Produto.categoria == "lente_contato")
    if somente_ativas:
        query = query.filter(Produto.ativo.is_(True))
    return query.order_by(Produto.nome).all()


def listar_controles(limite: int = LIMITE_CONTROLES) -> list[ControleLenteContato]:
    return (
        ControleLenteContato.query.order_by(ControleLenteContato.data_proximo_controle)
        .limit(limite)
        .all()
    )


def realizar_controle(controle: ControleLenteContato, *, hoje: date | None = None) -> None:
    if controle.status == "realizado":
        raise ValueError("Este controle já foi realizado")
    if controle.status == "cancelado":
        raise ValueError("Controle cancelado não pode ser realizado")
    controle.status = "realizado"
    controle.data_ultimo_controle = hoje or date.today()


def calcular_validade(data_fabricacao: date, validade_meses: int | None) -> date:
    return somar_meses(data_fabricacao, validade_meses or VALIDADE_PADRAO_MESES)


def alerta_validade(data_validade: date, *, hoje: date | None = None,
                    dias_alerta: int = DIAS_ALERTA_PADRAO) -> tuple[str, str]:
    """Retorna (nivel, texto): vencido, proximo ou ok.

    >>> alerta_validade(date(2024, 1, 20), hoje=date(2024, 1, 10))
    ('proximo', 'Vence em 10 dias')
    """
    hoje = hoje or date.today()
    dias = (data_validade - hoje).days
    if dias < 0:
        return "vencido", "Vencido"
    if dias < dias_alerta:
        return "proximo", f"Vence em {dias} dias"
    return "ok", "OK"


def registrar_lote(produto: Produto, *, numero_lote: str, data_fabricacao: date,
                   quantidade_lote: int, observacoes: str | None = None) -> ControleValidadeLC:
    if produto.categoria != "lente_contato":
        raise ValueError("Produto não é uma lente de contato")
    if not (numero_lote or "").strip():
        raise ValueError("Informe o número do lote")
    lote = ControleValidadeLC(
        produto_id=produto.id,
        numero_lote=numero_lote.strip(),
        data_fabricacao=data_fabricacao,
        data_validade=calcular_validade(data_fabricacao, produto.validade_meses),
        quantidade_lote=quantidade_lote or 0,
        observacoes=observacoes or None,
    )
    db.session.add(lote)
    return lote


def listar_lotes() -> list[ControleValidadeLC]:
    return ControleValidadeLC.query.order_by(ControleValidadeLC.data_validade).all()


@dataclass
class RelatorioLentes:
    total_lentes: int = 0
    estoque_baixo: int = 0
    unidades_mes: int = 0
    faturamento_mes: float = 0.0
    mais_vendidas: list[tuple[str, int]] = field(default_factory=list)
    tipos_populares: list[tuple[str, int]] = field(default_factory=list)


def gerar_relatorio(hoje: date | None = None) -> RelatorioLentes:
    """Estoque baixo aqui é estoque_atual <= estoque_minimo."""
    hoje = hoje or date.today()
    lentes = listar_lentes()
    rel = RelatorioLentes(total_lentes=len(lentes))
    rel.estoque_baixo = sum(1 for lente in lentes if (lente.estoque_atual or 0) <= (lente.estoque_minimo or 0))

    itens = (
        db.session.query(VendaItem)
        .join(Venda, VendaItem.venda_id == Venda.id)
        .join(Produto, VendaItem.produto_id == Produto.id)
        .filter(
            Produto.categoria == "lente_contato",
            Venda.status == "concluida",
            Venda.created_at >= inicio_do_dia(inicio_mes(hoje)),
        )
        .all()
    )
    rel.unidades_mes = sum(i.quantidade for i in itens)
    rel.faturamento_mes = round(sum(float(i.subtotal or 0) for i in itens), 2)

    por_produto: Counter = Counter()
    por_tipo: Counter = Counter()
    for item in itens:
        por_produto[item.produto.nome] += item.quantidade
        por_tipo[item.produto.tipo_lente or "Não informado"] += item.quantidade
    rel.mais_vendidas = por_produto.most_common(5)
    rel.tipos_populares = por_tipo.most_common(5)
    return rel
