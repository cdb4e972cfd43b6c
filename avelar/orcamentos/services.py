from __future__ import annotations

import logging
from datetime import date, timedelta

from .. import db
from ..produtos.models import Produto
from ..vendas.carrinho import Carrinho
from .models import Orcamento, OrcamentoItem

logger = logging.getLogger(__name__)

VALIDADE_PADRAO_DIAS = 7
LIMITE_LISTA = 50


def salvar_orcamento(
    carrinho: Carrinho,
    *,
    validade_dias: int = VALIDADE_PADRAO_DIAS,
    observacoes: str | None = None,
    hoje: date | None = None,
) -> Orcamento:
    """Grava orçamento e itens a partir do carrinho (commit do chamador)."""
    if not carrinho.cliente_id:
        raise ValueError("Selecione um cliente para o orçamento!")
    if carrinho.vazio():
        raise ValueError("Adicione produtos ao orçamento!")
    orcamento = Orcamento(
        cliente_id=carrinho.cliente_id,
        total=carrinho.total,
        status="pendente",
        data_validade=(hoje or date.today()) + timedelta(days=validade_dias),
        observacoes=observacoes or None,
    )
    for item in carrinho.itens:
        orcamento.itens.append(
            OrcamentoItem(
                produto_id=item["produto_id"],
                quantidade=int(item["quantidade"]),
                preco_unitario=float(item["preco_unitario"]),
                subtotal=float(item["subtotal"]),
            )
        )
    db.session.add(orcamento)
    db.session.flush()
    logger.info("Orçamento #%s: %s itens, total %.2f", orcamento.id, len(orcamento.itens), orcamento.total)
    return orcamento


def _exigir_pendente(orcamento: Orcamento) -> None:
    if orcamento.status != "pendente":
        raise ValueError("Somente orçamentos pendentes podem ser alterados")


def aprovar(orcamento: Orcamento) -> None:
    _exigir_pendente(orcamento)
    if orcamento.expirado():
        raise ValueError("Orçamento expirado")
    orcamento.status = "aprovado"


def rejeitar(orcamento: Orcamento) -> None:
    _exigir_pendente(orcamento)
    orcamento.status = "rejeitado"


def carregar_no_carrinho(orcamento: Orcamento, carrinho: Carrinho) -> None:
    """Substitui o carrinho do PDV pelos itens do orçamento.

    Preços vêm do cadastro atual do produto. Estoque insuficiente interrompe
    a carga e deixa o carrinho vazio.
    """
    if orcamento.status == "rejeitado":
        raise ValueError("Orçamento rejeitado não pode ser carregado")
    if orcamento.fora_da_validade():
        raise ValueError("Orçamento expirado")
    carrinho.limpar()
    try:
        for item in orcamento.itens:
            produto = db.session.get(Produto, item.produto_id)
            if produto is None or not produto.ativo:
                raise ValueError("Produto do orçamento não está mais disponível")
            try:
                carrinho.adicionar(produto, item.quantidade)
            except ValueError:
                raise ValueError(f"Estoque insuficiente para {produto.nome}") from None
    except ValueError:
        carrinho.limpar()
        raise
    carrinho.definir_cliente(orcamento.cliente_id)


def listar_orcamentos(status: str | None = None) -> list[Orcamento]:
    query = Orcamento.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(Orcamento.created_at.desc(), Orcamento.id.desc()).limit(LIMITE_LISTA).all()
