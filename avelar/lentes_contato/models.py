from datetime import date, datetime

from .. import db

FREQUENCIAS_USO = [
    ("diario", "Diário"),
    ("alternado", "Dias Alternados"),
    ("fim_semana", "Finais de Semana"),
    ("eventos", "Apenas Eventos"),
]

STATUS_CONTROLE = [
    ("agendado", "Agendado"),
    ("realizado", "Realizado"),
    ("cancelado", "Cancelado"),
    ("reagendado", "Reagendado"),
]


class ControleLenteContato(db.Model):
    """Acompanhamento periódico do cliente usuário de lentes de contato."""

    __tablename__ = "controles_lentes_contato"
    id = db.Column(db.Integer, primary_key=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), nullable=False, index=True)
    produto_id = db.Column(db.Integer, db.ForeignKey("produtos.id"))
    data_ultima_compra = db.Column(db.Date)
    data_proximo_controle = db.Column(db.Date, nullable=False, index=True)
    data_ultimo_controle = db.Column(db.Date)
    frequencia_uso = db.Column(db.String(20))
    horas_uso_diario = db.Column(db.Integer)
    solucao_limpeza = db.Column(db.String(100))
    observacoes = db.Column(db.Text)
    status = db.Column(db.String(15), nullable=False, default="agendado", index=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    cliente = db.relationship("Cliente")
    produto = db.relationship("Produto")

    def atrasado(self, hoje: date | None = None) -> bool:
        hoje = hoje or date.today()
        return self.status == "agendado" and self.data_proximo_controle < hoje

    @property
    def status_label(self) -> str:
        return dict(STATUS_CONTROLE).get(self.status, self.status)

    @property
    def frequencia_label(self) -> str:
        return dict(FREQUENCIAS_USO).get(self.frequencia_uso, self.frequencia_uso or "-")


class ControleValidadeLC(db.Model):
    """Lote recebido de lentes de contato com a respectiva validade."""

    __tablename__ = "controles_validade_lc"
    id = db.Column(db.Integer, primary_key=True)
    produto_id = db.Column(db.Integer, db.ForeignKey("produtos.id"), nullable=False, index=True)
    numero_lote = db.Column(db.String(50), nullable=False)
    data_fabricacao = db.Column(db.Date, nullable=False)
    data_validade = db.Column(db.Date, nullable=False, index=True)
    quantidade_lote = db.Column(db.Integer, nullable=False, default=0)
    observacoes = db.Column(db.Text)
    data_controle = db.Column(db.DateTime, default=datetime.now)

    produto = db.relationship("Produto")
