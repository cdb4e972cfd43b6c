"""Movimentação de estoque.

Toda alteração de saldo passa por `movimentar_estoque`, que grava a
movimentação com saldo anterior/atual. As funções apenas adicionam objetos
à sessão; o commit fica com quem chama (rota ou outro serviço).
"""

from __future__ import annotations

from .. import db
from ..produtos.models import Produto
from .models import EstoqueMovimentacao

TIPOS_AJUSTE = ("entrada", "saida", "ajuste")
LIMITE_MOVIMENTACOES = 50


def movimentar_estoque(
    produto: Produto,
    delta: int,
    *,
    motivo: str,
    observacoes: str | None = None,
) -> EstoqueMovimentacao:
    """Soma `delta` ao saldo do produto e registra a movimentação.

    Saldo negativo é rejeitado com ValueError("Estoque insuficiente!").
    """
    anterior = int(produto.estoque_atual or 0)
    novo = anterior + int(delta)
    if novo < 0:
        raise ValueError("Estoque insuficiente!")
    produto.estoque_atual = novo
    mov = EstoqueMovimentacao()
    mov.produto_id = produto.id
    mov.tipo = "entrada" if delta >= 0 else "saida"
    mov.quantidade = abs(int(delta))
    mov.saldo_anterior = anterior
    mov.saldo_atual = novo
    mov.motivo = motivo
    mov.observacoes = observacoes
    db.session.add(mov)
    return mov


def ajustar_estoque(
    produto: Produto,
    *,
    tipo: str,
    quantidade: int | None,
    motivo: str,
    observacoes: str | None = None,
) -> EstoqueMovimentacao:
    """Ajuste manual: entrada soma, saída subtrai, ajuste define o saldo."""
    if tipo not in TIPOS_AJUSTE:
        raise ValueError("Tipo de movimentação inválido")
    if quantidade is None or quantidade < 0 or (quantidade == 0 and tipo != "ajuste"):
        raise ValueError("Informe uma quantidade válida!")
    if tipo == "entrada":
        delta = quantidade
    elif tipo == "saida":
        delta = -quantidade
    else:
        delta = quantidade - int(produto.estoque_atual or 0)
    return movimentar_estoque(produto, delta, motivo=motivo, observacoes=observacoes)


def ultimas_movimentacoes(produto_id: int | None = None, limite: int = LIMITE_MOVIMENTACOES):
    query = EstoqueMovimentacao.query
    if produto_id:
        query = query.filter_by(produto_id=produto_id)
    return query.order_by(EstoqueMovimentacao.created_at.desc(), EstoqueMovimentacao.id.desc()).limit(limite).all()


def listar_estoque(categoria: str | None = None) -> list[Produto]:
    query = Produto.query
    if categoria and categoria != "todos":
        query = query.filter(Produto.categoria == categoria)
    return query.order_by(Produto.nome).all()


def produtos_estoque_baixo(limite: int | None = None) -> list[Produto]:
    """Ativos com saldo abaixo do mínimo cadastrado."""
    query = Produto.query.filter(
        Produto.ativo.is_(True),
        Produto.estoque_atual < Produto.estoque_minimo,
    ).order_by(Produto.estoque_atual)
    if limite:
        query = query.limit(limite)
    return query.all()
