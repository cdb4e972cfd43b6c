from flask_wtf import FlaskForm
from wtforms import BooleanField, FloatField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from .models import CATEGORIAS

SIM_NAO = [("", "-"), ("sim", "Sim"), ("nao", "Não")]

TIPOS_SUBSTITUICAO = [
    ("", "-"),
    ("descarte_diario", "Descarte Diário"),
    ("quinzenal", "Quinzenal"),
    ("mensal", "Mensal"),
    ("trimestral", "Trimestral"),
    ("anual", "Anual"),
]


def _texto(label, placeholder=None, max_len=40):
    return StringField(
        label,
        validators=[Optional(), Length(max=max_len)],
        render_kw={"placeholder": placeholder} if placeholder else None,
    )


class ProdutoForm(FlaskForm):
    sku = StringField("SKU", validators=[DataRequired(), Length(max=50)])
    nome = StringField("Nome", validators=[DataRequired(), Length(max=150)])
    categoria = SelectField("Categoria", choices=CATEGORIAS)
    marca = StringField("Marca", validators=[Optional(), Length(max=80)])
    cor = StringField("Cor", validators=[Optional(), Length(max=50)])
    material = StringField("Material", validators=[Optional(), Length(max=80)])
    preco_custo = FloatField("Preço de Custo", validators=[Optional(), NumberRange(min=0)])
    preco_venda = FloatField("Preço de Venda", validators=[DataRequired(), NumberRange(min=0)])
    estoque_atual = IntegerField("Estoque Inicial", validators=[Optional(), NumberRange(min=0)], default=0)
    estoque_minimo = IntegerField("Estoque Mínimo", validators=[Optional(), NumberRange(min=0)], default=0)
    ativo = BooleanField("Ativo", default=True)
    observacoes = TextAreaField("Observações", validators=[Optional()])
    # Armação
    ponte = _texto("Ponte", "Ex: 18mm")
    aro = _texto("Aro", "Ex: 52mm")
    haste = _texto("Haste", "Ex: 140mm")
    calibre = _texto("Calibre", "Ex: 52")
    dm = _texto("DM", "Diâmetro maior")
    genero = SelectField(
        "Gênero",
        choices=[("", "-"), ("masculino", "Masculino"), ("feminino", "Feminino"), ("unissex", "Unissex")],
        validators=[Optional()],
    )
    faixa_etaria = SelectField(
        "Faixa Etária",
        choices=[("", "-"), ("adulto", "Adulto"), ("juvenil", "Juvenil"), ("infantil", "Infantil")],
        validators=[Optional()],
    )
    # Lentes
    tipo_lente = _texto("Tipo de Lente", "Ex: monofocal, gelatinosa")
    tratamento = _texto("Tratamento", "Ex: antirreflexo", 60)
    fotossensivel = SelectField("Fotossensível", choices=SIM_NAO, validators=[Optional()])
    filtro_azul = SelectField("Filtro Azul", choices=SIM_NAO, validators=[Optional()])
    indice_refracao = _texto("Índice de Refração", "Ex: 1.67", 10)
    design = _texto("Design", "Ex: free-form")
    protecao_uv = SelectField("Proteção UV", choices=SIM_NAO, validators=[Optional()])
    # Lentes de contato
    curva_base = _texto("Curva Base", "Ex: 8.6", 20)
    diametro = _texto("Diâmetro", "Ex: 14.2", 20)
    raio = _texto("Raio", None, 20)
    tipo_substituicao = SelectField("Tipo de Substituição", choices=TIPOS_SUBSTITUICAO, validators=[Optional()])
    conteudo_agua = _texto("Conteúdo de Água", "Ex: 38%", 20)
    transmissibilidade = _texto("Transmissibilidade", "Dk/t", 20)
    grau_minimo = FloatField("Grau Mínimo", validators=[Optional()])
    grau_maximo = FloatField("Grau Máximo", validators=[Optional()])
    cilindro_minimo = FloatField("Cilindro Mínimo", validators=[Optional()])
    cilindro_maximo = FloatField("Cilindro Máximo", validators=[Optional()])
    validade_meses = IntegerField("Validade (meses)", validators=[Optional(), NumberRange(min=1)], default=24)
    # Acessórios / soluções
    tipo_acessorio = _texto("Tipo de Acessório", "Ex: estojo, cordão")
    compatibilidade = _texto("Compatibilidade", None, 120)
    funcao = _texto("Função", None, 120)
    tipo_solucao = _texto("Tipo de Solução", "Ex: multiuso")
    composicao = _texto("Composição", None, 200)
    volume = _texto("Volume", "Ex: 360ml", 20)
    indicacao = _texto("Indicação", None, 200)
    submit = SubmitField("Salvar")

    CAMPOS_BASICOS = (
        "sku",
        "nome",
        "categoria",
        "marca",
        "cor",
        "material",
        "preco_custo",
        "preco_venda",
        "estoque_atual",
        "estoque_minimo",
        "ativo",
        "observacoes",
    )
