from datetime import datetime

from .. import db

TIPOS_MOVIMENTACAO = [("entrada", "Entrada"), ("saida", "Saída")]

MOTIVOS = [
    ("inventario", "Inventário"),
    ("ajuste", "Ajuste"),
    ("devolucao", "Devolução"),
    ("perda", "Perda"),
    ("venda", "Venda"),
    ("estoque_inicial", "Estoque inicial"),
    ("outro", "Outro"),
]


class EstoqueMovimentacao(db.Model):
    __tablename__ = "estoque_movimentacoes"
    id = db.Column(db.Integer, primary_key=True)
    produto_id = db.Column(db.Integer, db.ForeignKey("produtos.id"), nullable=False, index=True)
    tipo = db.Column(db.String(10), nullable=False)
    quantidade = db.Column(db.Integer, nullable=False)
    saldo_anterior = db.Column(db.Integer, nullable=False)
    saldo_atual = db.Column(db.Integer, nullable=False)
    motivo = db.Column(db.String(30))
    observacoes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)

    @property
    def motivo_label(self) -> str:
        return dict(MOTIVOS).get(self.motivo, self.motivo or "-")
