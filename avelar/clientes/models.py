from datetime import datetime

from .. import db
from ..utils_datas import calcular_idade


class Cliente(db.Model):
    __tablename__ = "clientes"
    id = db.Column(db.Integer, primary_key=True)
    nome = db.Column(db.String(150), nullable=False, index=True)
    cpf = db.Column(db.String(14), unique=True)
    email = db.Column(db.String(120))
    telefone = db.Column(db.String(20))
    data_nascimento = db.Column(db.Date)
    observacoes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now)

    vendas = db.relationship("Venda", backref="cliente", lazy="dynamic")
    receitas = db.relationship("Receita", backref="cliente", lazy="dynamic")

    def idade(self) -> int | None:
        return calcular_idade(self.data_nascimento)

    def __repr__(self):  # pragma: no cover
        return f"<Cliente {self.nome}>"
