from flask_wtf import FlaskForm
from wtforms import DateField, FloatField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from .models import TIPOS_LENTE, TRATAMENTOS


def _grau(label):
    return FloatField(label, validators=[Optional(), NumberRange(min=-30, max=30)], render_kw={"step": "0.25"})


def _mm(label):
    return FloatField(label, validators=[Optional(), NumberRange(min=0, max=99)])


def _eixo(label):
    return IntegerField(label, validators=[Optional(), NumberRange(min=0, max=180, message="Eixo entre 0 e 180")])


class ReceitaForm(FlaskForm):
    cliente_id = SelectField("Cliente", coerce=int, validators=[DataRequired(message="Selecione o cliente")])
    medico_nome = StringField("Médico", validators=[Optional(), Length(max=150)])
    medico_crm = StringField("CRM", validators=[Optional(), Length(max=30)])
    data_receita = DateField("Data da Receita", validators=[DataRequired()])
    data_validade = DateField("Validade", validators=[Optional()])

    od_esferico = _grau("OD Esférico")
    od_cilindrico = _grau("OD Cilíndrico")
    od_eixo = _eixo("OD Eixo")
    od_adicao = _grau("OD Adição")
    od_dp = _mm("OD DP")
    od_dnp = _mm("OD DNP")
    od_altura = _mm("OD Altura")
    od_prisma = FloatField("OD Prisma", validators=[Optional()])
    od_base = StringField("OD Base", validators=[Optional(), Length(max=10)])

    oe_esferico = _grau("OE Esférico")
    oe_cilindrico = _grau("OE Cilíndrico")
    oe_eixo = _eixo("OE Eixo")
    oe_adicao = _grau("OE Adição")
    oe_dp = _mm("OE DP")
    oe_dnp = _mm("OE DNP")
    oe_altura = _mm("OE Altura")
    oe_prisma = FloatField("OE Prisma", validators=[Optional()])
    oe_base = StringField("OE Base", validators=[Optional(), Length(max=10)])

    curva_corneana_od = StringField("Curva Corneana OD", validators=[Optional(), Length(max=30)])
    curva_corneana_oe = StringField("Curva Corneana OE", validators=[Optional(), Length(max=30)])

    idade = IntegerField("Idade", validators=[Optional(), NumberRange(min=0, max=130)])
    ocupacao = StringField("Ocupação", validators=[Optional(), Length(max=100)])
    uso_previo = StringField("Uso Prévio de Óculos/Lentes", validators=[Optional(), Length(max=100)])
    historico_ocular = TextAreaField("Histórico Ocular", validators=[Optional()])
    tipo_lente = SelectField("Tipo de Lente", choices=TIPOS_LENTE, validators=[Optional()])
    tratamento = SelectField("Tratamento", choices=TRATAMENTOS, validators=[Optional()])
    material_lente = StringField("Material da Lente", validators=[Optional(), Length(max=60)])
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Salvar")

    SECOES = (
        ("Receita", ("cliente_id", "medico_nome", "medico_crm", "data_receita", "data_validade")),
        (
            "Olho Direito (OD)",
            ("od_esferico", "od_cilindrico", "od_eixo", "od_adicao", "od_dp", "od_dnp", "od_altura", "od_prisma", "od_base"),
        ),
        (
            "Olho Esquerdo (OE)",
            ("oe_esferico", "oe_cilindrico", "oe_eixo", "oe_adicao", "oe_dp", "oe_dnp", "oe_altura", "oe_prisma", "oe_base"),
        ),
        (
            "Paciente e Lentes",
            (
                "idade",
                "ocupacao",
                "uso_previo",
                "curva_corneana_od",
                "curva_corneana_oe",
                "tipo_lente",
                "tratamento",
                "material_lente",
                "historico_ocular",
                "observacoes",
            ),
        ),
    )
