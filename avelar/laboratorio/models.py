from datetime import date, datetime

from .. import db

ETAPAS = [
    ("recebimento", "Recebida"),
    ("analise", "Em Análise"),
    ("desmontagem", "Desmontagem"),
    ("surfassagem", "Surfassagem"),
    ("montagem", "Montagem"),
    ("polimento", "Polimento"),
    ("limpeza", "Limpeza"),
    ("controle_qualidade", "Controle Qualidade"),
    ("pronto", "Pronta"),
]

ICONES_ETAPA = {
    "recebimento": "fa-inbox",
    "analise": "fa-search",
    "desmontagem": "fa-tools",
    "surfassagem": "fa-cog",
    "montagem": "fa-wrench",
    "polimento": "fa-star",
    "limpeza": "fa-spray-can",
    "controle_qualidade": "fa-check-circle",
    "pronto": "fa-flag-checkered",
}

TIPOS_SERVICO = [
    ("montagem_armacao", "Montagem de Armação"),
    ("troca_lentes", "Troca de Lentes"),
    ("ajuste_armacao", "Ajuste de Armação"),
    ("reparo", "Reparo"),
    ("limpeza_profunda", "Limpeza Profunda"),
]

URGENCIAS = [("normal", "Normal"), ("urgente", "Urgente"), ("prioritario", "Prioritário")]


class OrdemServico(db.Model):
    __tablename__ = "ordens_servico"
    id = db.Column(db.Integer, primary_key=True)
    numero_os = db.Column(db.String(10), unique=True, nullable=False)
    venda_id = db.Column(db.Integer, db.ForeignKey("vendas.id"))
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), nullable=False, index=True)
    receita_id = db.Column(db.Integer, db.ForeignKey("receitas.id"))
    tipo_servico = db.Column(db.String(30), nullable=False)
    urgencia = db.Column(db.String(15), default="normal")
    armacao = db.Column(db.String(200))
    lentes = db.Column(db.String(200))
    observacoes_tecnicas = db.Column(db.Text)
    prazo_entrega = db.Column(db.Date)
    tecnico_responsavel = db.Column(db.String(100))
    custo_servico = db.Column(db.Float, default=0.0)
    valor_servico = db.Column(db.Float, default=0.0)
    status = db.Column(db.String(30), nullable=False, default="recebimento", index=True)
    data_ultima_atualizacao = db.Column(db.DateTime, default=datetime.now)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)

    cliente = db.relationship("Cliente")
    receita = db.relationship("Receita")
    venda = db.relationship("Venda")

    @property
    def status_label(self) -> str:
        return dict(ETAPAS).get(self.status, self.status)

    @property
    def tipo_servico_label(self) -> str:
        return dict(TIPOS_SERVICO).get(self.tipo_servico, self.tipo_servico)

    @property
    def urgencia_label(self) -> str:
        return dict(URGENCIAS).get(self.urgencia, self.urgencia or "-")

    def atrasada(self, hoje: date | None = None) -> bool:
        hoje = hoje or date.today()
        return bool(self.prazo_entrega and self.prazo_entrega < hoje and self.status != "pronto")

    @property
    def lucro(self) -> float:
        return round(float(self.valor_servico or 0) - float(self.custo_servico or 0), 2)

    def __repr__(self):  # pragma: no cover
        return f"<OS {self.numero_os}>"
