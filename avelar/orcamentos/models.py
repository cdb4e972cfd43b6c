from datetime import date, datetime

from .. import db

STATUS_ORCAMENTO = [
    ("pendente", "Pendente"),
    ("aprovado", "Aprovado"),
    ("rejeitado", "Rejeitado"),
]


class Orcamento(db.Model):
    __tablename__ = "orcamentos"
    id = db.Column(db.Integer, primary_key=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), nullable=False, index=True)
    total = db.Column(db.Float, nullable=False, default=0.0)
    status = db.Column(db.String(15), nullable=False, default="pendente", index=True)
    data_validade = db.Column(db.Date, nullable=False)
    observacoes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)

    cliente = db.relationship("Cliente")
    itens = db.relationship("OrcamentoItem", backref="orcamento", lazy="select", cascade="all, delete-orphan")

    def fora_da_validade(self, hoje: date | None = None) -> bool:
        hoje = hoje or date.today()
        return bool(self.data_validade and self.data_validade < hoje)

    def expirado(self, hoje: date | None = None) -> bool:
        """Pendente fora da validade (aprovados e rejeitados mantêm o rótulo)."""
        return self.status == "pendente" and self.fora_da_validade(hoje)

    @property
    def status_label(self) -> str:
        if self.expirado():
            return "Expirado"
        return dict(STATUS_ORCAMENTO).get(self.status, self.status)


class OrcamentoItem(db.Model):
    __tablename__ = "orcamento_itens"
    id = db.Column(db.Integer, primary_key=True)
    orcamento_id = db.Column(db.Integer, db.ForeignKey("orcamentos.id"), nullable=False, index=True)
    produto_id = db.Column(db.Integer, db.ForeignKey("produtos.id"), nullable=False)
    quantidade = db.Column(db.Integer, nullable=False)
    preco_unitario = db.Column(db.Float, nullable=False)
    subtotal = db.Column(db.Float, nullable=False)

    produto = db.relationship("Produto")
