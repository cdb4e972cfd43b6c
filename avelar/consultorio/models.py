from datetime import date, datetime

from .. import db

TIPOS_CONSULTA = [
    ("consulta_oftalmologica", "Consulta Oftalmológica"),
    ("exame_precoce", "Exame de Precoce"),
    ("adaptacao_lente_contato", "Adaptação Lente de Contato"),
    ("controle_pos_operatorio", "Controle Pós-Operatório"),
    ("teste_visao", "Teste de Visão"),
    ("consulta_retorno", "Consulta de Retorno"),
    ("emergencia", "Emergência"),
]

RECURSOS = [
    ("consultorio_1", "Consultório 1"),
    ("consultorio_2", "Consultório 2"),
    ("aparelho_tonometria", "Aparelho de Tonometria"),
    ("aparelho_campo_visual", "Aparelho de Campo Visual"),
]

STATUS_AGENDAMENTO = [
    ("agendado", "Agendado"),
    ("confirmado", "Confirmado"),
    ("realizado", "Realizado"),
    ("cancelado", "Cancelado"),
    ("faltou", "Faltou"),
]


class Profissional(db.Model):
    __tablename__ = "profissionais"
    id = db.Column(db.Integer, primary_key=True)
    nome = db.Column(db.String(150), nullable=False)
    especialidade = db.Column(db.String(100))
    registro_profissional = db.Column(db.String(30))
    ativo = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    def __repr__(self):  # pragma: no cover
        return f"<Profissional {self.nome}>"


class Agendamento(db.Model):
    __tablename__ = "agendamentos"
    id = db.Column(db.Integer, primary_key=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey("clientes.id"), nullable=False, index=True)
    profissional_id = db.Column(db.Integer, db.ForeignKey("profissionais.id"), nullable=False, index=True)
    data = db.Column(db.Date, nullable=False, index=True)
    hora = db.Column(db.String(5), nullable=False)  # HH:MM
    tipo_consulta = db.Column(db.String(40), nullable=False)
    duracao = db.Column(db.Integer, nullable=False, default=30)
    recurso = db.Column(db.String(40))
    telefone_contato = db.Column(db.String(20))
    observacoes = db.Column(db.Text)
    status = db.Column(db.String(15), nullable=False, default="agendado", index=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    cliente = db.relationship("Cliente")
    profissional = db.relationship("Profissional", backref=db.backref("agendamentos", lazy="dynamic"))

    @property
    def tipo_consulta_label(self) -> str:
        return dict(TIPOS_CONSULTA).get(self.tipo_consulta, self.tipo_consulta)

    @property
    def recurso_label(self) -> str:
        return dict(RECURSOS).get(self.recurso, self.recurso or "-")

    @property
    def status_label(self) -> str:
        return dict(STATUS_AGENDAMENTO).get(self.status, self.status)

    @property
    def passado(self) -> bool:
        return self.data < date.today()
