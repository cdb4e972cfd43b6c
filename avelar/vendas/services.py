"""Finalização de vendas do PDV."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import func

from .. import db
from ..estoque.services import movimentar_estoque
from ..financeiro.models import Lancamento
from ..produtos.models import Produto
from .carrinho import Carrinho
from .models import Venda, VendaItem

logger = logging.getLogger(__name__)

LIMITE_HISTORICO = 50


def proximo_numero_venda() -> int:
    atual = db.session.query(func.max(Venda.numero_venda)).scalar()
    return int(atual or 0) + 1


def finalizar_venda(
    carrinho: Carrinho,
    *,
    desconto: float | None = 0,
    forma_pagamento: str = "dinheiro",
    observacoes: str | None = None,
    gerar_lancamento: bool = True,
) -> Venda:
    """Cria venda, itens e baixas de estoque a partir do carrinho.

    Apenas adiciona à sessão do banco; o commit é do chamador (uma única
    transação para venda, itens, estoque e lançamento). Não limpa o
    carrinho.
    """
    if carrinho.vazio():
        raise ValueError("Adicione produtos ao carrinho!")
    subtotal = carrinho.total
    desconto = round(float(desconto or 0), 2)
    if desconto < 0 or desconto > subtotal:
        raise ValueError("Desconto inválido")

    venda = Venda()
    venda.numero_venda = proximo_numero_venda()
    venda.cliente_id = carrinho.cliente_id
    venda.receita_id = carrinho.receita_id
    venda.subtotal = subtotal
    venda.desconto = desconto
    venda.total = round(subtotal - desconto, 2)
    venda.forma_pagamento = forma_pagamento
    venda.status = "concluida"
    venda.observacoes = observacoes
    db.session.add(venda)
    db.session.flush()

    for item in carrinho.itens:
        produto = db.session.get(Produto, item["produto_id"])
        if produto is None or not produto.ativo:
            raise ValueError(f"Produto indisponível: {item['nome']}")
        venda_item = VendaItem()
        venda_item.venda_id = venda.id
        venda_item.produto_id = produto.id
        venda_item.quantidade = int(item["quantidade"])
        venda_item.preco_unitario = float(item["preco_unitario"])
        venda_item.subtotal = float(item["subtotal"])
        db.session.add(venda_item)
        # saldo validado contra o banco, não contra o carrinho
        movimentar_estoque(
            produto,
            -venda_item.quantidade,
            motivo="venda",
            observacoes=f"Venda #{venda.numero_venda}",
        )

    if gerar_lancamento and venda.total > 0:
        lanc = Lancamento()
        lanc.tipo = "receita"
        lanc.categoria = "venda"
        lanc.descricao = f"Venda #{venda.numero_venda}"
        lanc.valor = venda.total
        lanc.data_vencimento = date.today()
        lanc.data_pagamento = date.today()
        lanc.status = "pago"
        lanc.venda_id = venda.id
        lanc.cliente_id = venda.cliente_id
        db.session.add(lanc)

    logger.info("Venda #%s: %s itens, total %.2f", venda.numero_venda, len(carrinho.itens), venda.total)
    return venda


def historico_vendas(limite: int = LIMITE_HISTORICO) -> list[Venda]:
    return Venda.query.order_by(Venda.created_at.desc(), Venda.id.desc()).limit(limite).all()
