from datetime import datetime

from .. import db

FORMAS_PAGAMENTO = [
    ("dinheiro", "Dinheiro"),
    ("pix", "PIX"),
    ("cartao_debito", "Cartão de Débito"),
    ("cartao_credito", "Cartão de Crédito"),
    ("crediario", "Crediário"),
]

STATUS_VENDA = [("concluida", "Concluída"), ("cancelada", "Cancelada")]


class Venda(db.Model):
    __tablename__ = "vendas"
    id = db.Column(db.Integer, primary_key=True)
    numero_venda = db.Column(db.Integer, unique=True, nullable=False)
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), index=True)
    receita_id = db.Column(db.Integer, db.ForeignKey("receitas.id"))
    subtotal = db.Column(db.Float, nullable=False, default=0.0)
    desconto = db.Column(db.Float, nullable=False, default=0.0)
    total = db.Column(db.Float, nullable=False, default=0.0)
    forma_pagamento = db.Column(db.String(20), default="dinheiro")
    status = db.Column(db.String(20), nullable=False, default="concluida", index=True)
    observacoes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)

    itens = db.relationship("VendaItem", backref="venda", lazy="select", cascade="all, delete-orphan")

    @property
    def forma_pagamento_label(self) -> str:
        return dict(FORMAS_PAGAMENTO).get(self.forma_pagamento, self.forma_pagamento or "-")

    @property
    def status_label(self) -> str:
        return dict(STATUS_VENDA).get(self.status, self.status or "-")

    def __repr__(self):  # pragma: no cover
        return f"<Venda #{self.numero_venda}>"


class VendaItem(db.Model):
    __tablename__ = "venda_itens"
    id = db.Column(db.Integer, primary_key=True)
    venda_id = db.Column(db.Integer, db.ForeignKey("vendas.id"), nullable=False, index=True)
    produto_id = db.Column(db.Integer, db.ForeignKey("produtos.id"), nullable=False, index=True)
    quantidade = db.Column(db.Integer, nullable=False)
    preco_unitario = db.Column(db.Float, nullable=False)
    subtotal = db.Column(db.Float, nullable=False)

    produto = db.relationship("Produto")
