from datetime import date, datetime

from .. import db

CATEGORIAS = [
    ("fabricante_armacoes", "Fabricante de Armações"),
    ("laboratorio_lentes", "Laboratório de Lentes"),
    ("distribuidor_lentes_contato", "Distribuidor Lentes Contato"),
    ("equipamentos_oftalmicos", "Equipamentos Oftálmicos"),
    ("produtos_limpeza", "Produtos de Limpeza"),
    ("acessorios", "Acessórios"),
    ("solucoes_lentes_contato", "Soluções Lentes Contato"),
    ("servicos_terceirizados", "Serviços Terceirizados"),
]

ESTADOS = [
    ("AC", "Acre"), ("AL", "Alagoas"), ("AP", "Amapá"), ("AM", "Amazonas"),
    ("BA", "Bahia"), ("CE", "Ceará"), ("DF", "Distrito Federal"), ("ES", "Espírito Santo"),
    ("GO", "Goiás"), ("MA", "Maranhão"), ("MT", "Mato Grosso"), ("MS", "Mato Grosso do Sul"),
    ("MG", "Minas Gerais"), ("PA", "Pará"), ("PB", "Paraíba"), ("PR", "Paraná"),
    ("PE", "Pernambuco"), ("PI", "Piauí"), ("RJ", "Rio de Janeiro"), ("RN", "Rio Grande do Norte"),
    ("RS", "Rio Grande do Sul"), ("RO", "Rondônia"), ("RR", "Roraima"), ("SC", "Santa Catarina"),
    ("SP", "São Paulo"), ("SE", "Sergipe"), ("TO", "Tocantins"),
]


class Fornecedor(db.Model):
    __tablename__ = "fornecedores"
    id = db.Column(db.Integer, primary_key=True)
    nome = db.Column(db.String(150), nullable=False, index=True)
    categoria = db.Column(db.String(40), nullable=False, index=True)
    cnpj = db.Column(db.String(18), unique=True)
    inscricao_estadual = db.Column(db.String(30))
    contato_nome = db.Column(db.String(100))
    telefone = db.Column(db.String(20))
    email = db.Column(db.String(120))
    site = db.Column(db.String(200))
    cep = db.Column(db.String(9))
    endereco = db.Column(db.String(200))
    cidade = db.Column(db.String(100))
    estado = db.Column(db.String(2))
    prazo_entrega_medio = db.Column(db.Integer)
    condicao_pagamento = db.Column(db.String(100))
    politica_frete = db.Column(db.String(100))
    valor_minimo_pedido = db.Column(db.Float)
    observacoes = db.Column(db.Text)
    ativo = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    avaliacoes = db.relationship(
        "AvaliacaoFornecedor",
        backref="fornecedor",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="AvaliacaoFornecedor.data_avaliacao.desc()",
    )

    @property
    def categoria_label(self) -> str:
        return dict(CATEGORIAS).get(self.categoria, self.categoria)

    @property
    def media_avaliacao(self) -> float:
        if not self.avaliacoes:
            return 0.0
        return sum(a.nota for a in self.avaliacoes) / len(self.avaliacoes)

    def __repr__(self):  # pragma: no cover
        return f"<Fornecedor {self.nome}>"


class AvaliacaoFornecedor(db.Model):
    __tablename__ = "avaliacoes_fornecedor"
    __table_args__ = (db.CheckConstraint("nota BETWEEN 1 AND 5", name="ck_avaliacao_nota"),)
    id = db.Column(db.Integer, primary_key=True)
    fornecedor_id = db.Column(db.Integer, db.ForeignKey("fornecedores.id"), nullable=False, index=True)
    nota = db.Column(db.Integer, nullable=False)
    criterio_qualidade = db.Column(db.Integer)
    criterio_entrega = db.Column(db.Integer)
    criterio_atendimento = db.Column(db.Integer)
    comentario = db.Column(db.Text)
    data_avaliacao = db.Column(db.Date, nullable=False, default=date.today)
