"""Carrinho guardado na sessão Flask (PDV e orçamentos).

Cada item é um dict com produto_id, nome, sku, preco_unitario, quantidade,
subtotal e estoque_disponivel. Com `controlar_estoque=True` (PDV) a
quantidade nunca passa do estoque lido ao adicionar o produto.
"""

from __future__ import annotations

from flask import session


class Carrinho:
    def __init__(self, chave: str, *, controlar_estoque: bool = True):
        self.chave = chave
        self.controlar_estoque = controlar_estoque

    # --- sessão ---
    def _itens(self) -> list[dict]:
        return list(session.get(self.chave, {}).get("itens", []))

    def _estado(self) -> dict:
        return dict(session.get(self.chave, {}))

    def _salvar(self, itens: list[dict] | None = None, **extra) -> None:
        estado = self._estado()
        if itens is not None:
            estado["itens"] = itens
        estado.update(extra)
        session[self.chave] = estado
        session.modified = True

    # --- leitura ---
    @property
    def itens(self) -> list[dict]:
        return self._itens()

    @property
    def cliente_id(self) -> int | None:
        return self._estado().get("cliente_id")

    @property
    def receita_id(self) -> int | None:
        return self._estado().get("receita_id")

    @property
    def total(self) -> float:
        return round(sum(float(i["subtotal"]) for i in self._itens()), 2)

    @property
    def quantidade_itens(self) -> int:
        return sum(int(i["quantidade"]) for i in self._itens())

    def vazio(self) -> bool:
        return not self._itens()

    def resumo(self) -> dict:
        return {
            "itens": self._itens(),
            "total": self.total,
            "quantidade_itens": self.quantidade_itens,
            "cliente_id": self.cliente_id,
            "receita_id": self.receita_id,
        }

    # --- escrita ---
    def adicionar(self, produto, quantidade: int = 1) -> dict:
        """Adiciona o produto ou incrementa a linha existente."""
        if quantidade < 1:
            raise ValueError("Quantidade inválida")
        itens = self._itens()
        estoque = int(produto.estoque_atual or 0)
        for item in itens:
            if item["produto_id"] == produto.id:
                if self.controlar_estoque and item["quantidade"] + quantidade > estoque:
                    raise ValueError("Estoque insuficiente!")
                item["quantidade"] += quantidade
                item["estoque_disponivel"] = estoque
                item["subtotal"] = round(item["quantidade"] * item["preco_unitario"], 2)
                self._salvar(itens)
                return item
        if self.controlar_estoque and quantidade > estoque:
            raise ValueError("Estoque insuficiente!")
        preco = float(produto.preco_venda or 0)
        item = {
            "produto_id": produto.id,
            "nome": produto.nome,
            "sku": produto.sku,
            "preco_unitario": preco,
            "quantidade": quantidade,
            "subtotal": round(preco * quantidade, 2),
            "estoque_disponivel": estoque,
        }
        itens.append(item)
        self._salvar(itens)
        return item

    def atualizar_quantidade(self, produto_id: int, quantidade: int) -> None:
        """Quantidade < 1 remove a linha."""
        if quantidade < 1:
            self.remover(produto_id)
            return
        itens = self._itens()
        for item in itens:
            if item["produto_id"] == produto_id:
                if self.controlar_estoque and quantidade > int(item["estoque_disponivel"]):
                    raise ValueError("Quantidade maior que estoque disponível!")
                item["quantidade"] = quantidade
                item["subtotal"] = round(quantidade * item["preco_unitario"], 2)
                self._salvar(itens)
                return
        raise ValueError("Item não está no carrinho")

    def remover(self, produto_id: int) -> None:
        self._salvar([i for i in self._itens() if i["produto_id"] != produto_id])

    def definir_cliente(self, cliente_id: int | None) -> None:
        self._salvar(cliente_id=cliente_id or None)

    def definir_receita(self, receita_id: int | None) -> None:
        self._salvar(receita_id=receita_id or None)

    def limpar(self) -> None:
        session.pop(self.chave, None)
        session.modified = True


def carrinho_venda() -> Carrinho:
    return Carrinho("carrinho_venda", controlar_estoque=True)


def carrinho_orcamento() -> Carrinho:
    return Carrinho("carrinho_orcamento", controlar_estoque=False)
