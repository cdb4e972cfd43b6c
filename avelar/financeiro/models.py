from datetime import date, datetime

from sqlalchemy import CheckConstraint

from .. import db

TIPOS = [("receita", "Receita"), ("despesa", "Despesa")]

CATEGORIAS = [
    ("venda", "Venda"),
    ("servico", "Serviço"),
    ("aluguel", "Aluguel"),
    ("salario", "Salário"),
    ("fornecedor", "Fornecedor"),
    ("outro", "Outro"),
]

STATUS = [("pendente", "Pendente"), ("pago", "Pago"), ("vencido", "Vencido")]


class Lancamento(db.Model):
    """Movimentação financeira (conta a pagar/receber)."""

    __tablename__ = "financeiro_movimentacoes"
    __table_args__ = (
        CheckConstraint("valor >= 0", name="ck_fin_valor_nao_negativo"),
        CheckConstraint("tipo IN ('receita','despesa')", name="ck_fin_tipo"),
    )
    id = db.Column(db.Integer, primary_key=True)
    tipo = db.Column(db.String(10), nullable=False)
    categoria = db.Column(db.String(20), default="outro")
    descricao = db.Column(db.String(200), nullable=False)
    valor = db.Column(db.Float, nullable=False, default=0.0)
    data_vencimento = db.Column(db.Date, nullable=False, index=True)
    data_pagamento = db.Column(db.Date)
    status = db.Column(db.String(10), nullable=False, default="pendente")
    observacoes = db.Column(db.Text)
    venda_id = db.Column(db.Integer, db.ForeignKey("vendas.id"))
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"))
    created_at = db.Column(db.DateTime, default=datetime.now)

    cliente = db.relationship("Cliente")

    def status_efetivo(self, hoje: date | None = None) -> str:
        """Pendente com vencimento passado aparece como vencido."""
        hoje = hoje or date.today()
        if self.status == "pendente" and self.data_vencimento and self.data_vencimento < hoje:
            return "vencido"
        return self.status

    @property
    def status_label(self) -> str:
        return dict(STATUS).get(self.status_efetivo(), self.status)

    @property
    def categoria_label(self) -> str:
        return dict(CATEGORIAS).get(self.categoria, self.categoria or "-")

    def __repr__(self):  # pragma: no cover
        return f"<Lancamento {self.tipo} {self.valor}>"
