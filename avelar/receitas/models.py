from datetime import date, datetime

from .. import db

TIPOS_LENTE = [
    ("", "-"),
    ("monofocal", "Monofocal"),
    ("bifocal", "Bifocal"),
    ("multifocal", "Multifocal"),
    ("ocupacional", "Ocupacional"),
]

TRATAMENTOS = [
    ("", "-"),
    ("anti_reflexo", "Anti-Reflexo"),
    ("antirrisco", "Antirrisco"),
    ("fotossensivel", "Fotossensível"),
    ("filtro_azul", "Filtro Azul"),
]


class Receita(db.Model):
    """Receita oftalmológica (OD = olho direito, OE = olho esquerdo).

    Graus em dioptrias; eixo em graus (0-180); DP/DNP/altura em mm.
    """

    __tablename__ = "receitas"
    id = db.Column(db.Integer, primary_key=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), nullable=False, index=True)
    medico_nome = db.Column(db.String(150))
    medico_crm = db.Column(db.String(30))
    data_receita = db.Column(db.Date, nullable=False, default=date.today)
    data_validade = db.Column(db.Date)
    # Olho direito
    od_esferico = db.Column(db.Float)
    od_cilindrico = db.Column(db.Float)
    od_eixo = db.Column(db.Integer)
    od_adicao = db.Column(db.Float)
    od_dp = db.Column(db.Float)
    od_dnp = db.Column(db.Float)
    od_altura = db.Column(db.Float)
    od_prisma = db.Column(db.Float)
    od_base = db.Column(db.String(10))
    # Olho esquerdo
    oe_esferico = db.Column(db.Float)
    oe_cilindrico = db.Column(db.Float)
    oe_eixo = db.Column(db.Integer)
    oe_adicao = db.Column(db.Float)
    oe_dp = db.Column(db.Float)
    oe_dnp = db.Column(db.Float)
    oe_altura = db.Column(db.Float)
    oe_prisma = db.Column(db.Float)
    oe_base = db.Column(db.String(10))
    # Ceratometria
    curva_corneana_od = db.Column(db.String(30))
    curva_corneana_oe = db.Column(db.String(30))
    # Dados do paciente no momento da receita
    idade = db.Column(db.Integer)
    ocupacao = db.Column(db.String(100))
    uso_previo = db.Column(db.String(100))
    historico_ocular = db.Column(db.Text)
    # Lentes indicadas
    tipo_lente = db.Column(db.String(20))
    tratamento = db.Column(db.String(20))
    material_lente = db.Column(db.String(60))
    observacoes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)

    @property
    def vencida(self) -> bool:
        return bool(self.data_validade and self.data_validade < date.today())

    @property
    def tipo_lente_label(self) -> str:
        return dict(TIPOS_LENTE).get(self.tipo_lente or "", self.tipo_lente or "-")

    @property
    def tratamento_label(self) -> str:
        return dict(TRATAMENTOS).get(self.tratamento or "", self.tratamento or "-")

    def __repr__(self):  # pragma: no cover
        return f"<Receita {self.id} cliente={self.cliente_id}>"
