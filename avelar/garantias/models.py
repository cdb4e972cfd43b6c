from datetime import date, datetime

from .. import db

TIPOS_PRODUTO = [
    ("armacao", "Armação"),
    ("lente", "Lente"),
    ("servico", "Serviço"),
    ("lente_contato", "Lente de Contato"),
]

TIPOS_GARANTIA = [
    ("6_meses", "6 meses"),
    ("12_meses", "12 meses"),
    ("24_meses", "24 meses"),
    ("vitalicia", "Vitalícia"),
    ("30_dias", "30 dias"),
    ("90_dias", "90 dias"),
    ("fabricante", "Garantia do fabricante"),
]

STATUS = [
    ("ativa", "Ativa"),
    ("vencida", "Vencida"),
    ("utilizada", "Utilizada"),
    ("cancelada", "Cancelada"),
]

TIPOS_OCORRENCIA = [
    ("reparo", "Reparo"),
    ("troca", "Troca"),
    ("ajuste", "Ajuste"),
    ("reclamacao", "Reclamação"),
]


class Garantia(db.Model):
    __tablename__ = "garantias"
    id = db.Column(db.Integer, primary_key=True)
    venda_id = db.Column(db.Integer, db.ForeignKey("vendas.id"), index=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), nullable=False, index=True)
    produto_id = db.Column(db.Integer, db.ForeignKey("produtos.id"))
    tipo_produto = db.Column(db.String(20), nullable=False)
    tipo_garantia = db.Column(db.String(20), nullable=False)
    duracao_meses = db.Column(db.Integer)
    data_inicio = db.Column(db.Date, nullable=False, default=date.today)
    data_fim = db.Column(db.Date)
    termos = db.Column(db.Text)
    cobre_quebras = db.Column(db.Boolean, nullable=False, default=False)
    cobre_riscos = db.Column(db.Boolean, nullable=False, default=False)
    cobre_defeitos = db.Column(db.Boolean, nullable=False, default=True)
    cobre_ajustes = db.Column(db.Boolean, nullable=False, default=True)
    observacoes = db.Column(db.Text)
    status = db.Column(db.String(15), nullable=False, default="ativa", index=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    cliente = db.relationship("Cliente")
    produto = db.relationship("Produto")
    venda = db.relationship("Venda")
    ocorrencias = db.relationship(
        "OcorrenciaGarantia",
        backref="garantia",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="OcorrenciaGarantia.data.desc()",
    )

    def status_efetivo(self, hoje: date | None = None) -> str:
        """Garantia ativa com data_fim no passado conta como vencida."""
        hoje = hoje or date.today()
        if self.status == "ativa" and self.data_fim and self.data_fim < hoje:
            return "vencida"
        return self.status

    @property
    def status_label(self) -> str:
        return dict(STATUS).get(self.status_efetivo(), self.status)

    @property
    def tipo_garantia_label(self) -> str:
        return dict(TIPOS_GARANTIA).get(self.tipo_garantia, self.tipo_garantia)

    @property
    def tipo_produto_label(self) -> str:
        return dict(TIPOS_PRODUTO).get(self.tipo_produto, self.tipo_produto)


class OcorrenciaGarantia(db.Model):
    __tablename__ = "ocorrencias_garantia"
    id = db.Column(db.Integer, primary_key=True)
    garantia_id = db.Column(db.Integer, db.ForeignKey("garantias.id"), nullable=False, index=True)
    data = db.Column(db.Date, nullable=False, default=date.today)
    tipo = db.Column(db.String(20), nullable=False)
    descricao = db.Column(db.Text, nullable=False)
    resolucao = db.Column(db.Text)

    @property
    def tipo_label(self) -> str:
        return dict(TIPOS_OCORRENCIA).get(self.tipo, self.tipo)
