from datetime import datetime

from .. import db

CATEGORIAS = [
    ("armacao", "Armação"),
    ("lente", "Lente"),
    ("lente_contato", "Lente de Contato"),
    ("acessorio", "Acessório"),
    ("solucao", "Solução"),
]


class Produto(db.Model):
    """Produto do catálogo/estoque.

    Além dos campos comuns, cada categoria usa um subconjunto dos campos
    técnicos (ver services.CAMPOS_ESPECIFICOS); os demais ficam nulos.
    """

    __tablename__ = "produtos"
    id = db.Column(db.Integer, primary_key=True)
    sku = db.Column(db.String(50), unique=True, nullable=False)
    nome = db.Column(db.String(150), nullable=False)
    categoria = db.Column(db.String(30), nullable=False, default="armacao", index=True)
    marca = db.Column(db.String(80))
    cor = db.Column(db.String(50))
    material = db.Column(db.String(80))
    preco_custo = db.Column(db.Float, default=0.0)
    preco_venda = db.Column(db.Float, nullable=False, default=0.0)
    estoque_atual = db.Column(db.Integer, nullable=False, default=0)
    estoque_minimo = db.Column(db.Integer, nullable=False, default=0)
    ativo = db.Column(db.Boolean, default=True)
    observacoes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.now)
    # Armação
    ponte = db.Column(db.String(20))
    aro = db.Column(db.String(20))
    haste = db.Column(db.String(20))
    calibre = db.Column(db.String(20))
    dm = db.Column(db.String(20))
    genero = db.Column(db.String(20))
    faixa_etaria = db.Column(db.String(20))
    # Lente oftálmica
    tipo_lente = db.Column(db.String(40))
    tratamento = db.Column(db.String(60))
    fotossensivel = db.Column(db.String(10))
    filtro_azul = db.Column(db.String(10))
    indice_refracao = db.Column(db.String(10))
    design = db.Column(db.String(40))
    protecao_uv = db.Column(db.String(10))
    # Lente de contato
    curva_base = db.Column(db.String(20))
    diametro = db.Column(db.String(20))
    raio = db.Column(db.String(20))
    tipo_substituicao = db.Column(db.String(30))
    conteudo_agua = db.Column(db.String(20))
    transmissibilidade = db.Column(db.String(20))
    grau_minimo = db.Column(db.Float)
    grau_maximo = db.Column(db.Float)
    cilindro_minimo = db.Column(db.Float)
    cilindro_maximo = db.Column(db.Float)
    validade_meses = db.Column(db.Integer)
    # Acessório / solução
    tipo_acessorio = db.Column(db.String(40))
    compatibilidade = db.Column(db.String(120))
    funcao = db.Column(db.String(120))
    tipo_solucao = db.Column(db.String(40))
    composicao = db.Column(db.String(200))
    volume = db.Column(db.String(20))
    indicacao = db.Column(db.String(200))

    movimentacoes = db.relationship("EstoqueMovimentacao", backref="produto", lazy="dynamic")

    @property
    def categoria_label(self) -> str:
        return dict(CATEGORIAS).get(self.categoria, self.categoria or "-")

    @property
    def estoque_baixo(self) -> bool:
        return (self.estoque_atual or 0) < (self.estoque_minimo or 0)

    def __repr__(self):  # pragma: no cover
        return f"<Produto {self.sku}>"
