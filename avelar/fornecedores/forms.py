from flask_wtf import FlaskForm
from wtforms import BooleanField, FloatField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, NumberRange, Optional

from .models import CATEGORIAS, ESTADOS

NOTAS = [(0, "-")] + [(n, str(n)) for n in range(1, 6)]


class FornecedorForm(FlaskForm):
    nome = StringField("Nome", validators=[DataRequired(), Length(max=150)])
    categoria = SelectField("Categoria", choices=CATEGORIAS, validators=[DataRequired()])
    cnpj = StringField("CNPJ", validators=[Optional(), Length(max=18)])
    inscricao_estadual = StringField("Inscrição Estadual", validators=[Optional(), Length(max=30)])
    contato_nome = StringField("Contato", validators=[Optional(), Length(max=100)])
    telefone = StringField("Telefone", validators=[Optional(), Length(max=20)])
    email = StringField("Email", validators=[Optional(), Email(), Length(max=120)])
    site = StringField("Site", validators=[Optional(), Length(max=200)])
    cep = StringField("CEP", validators=[Optional(), Length(max=9)])
    endereco = StringField("Endereço", validators=[Optional(), Length(max=200)])
    cidade = StringField("Cidade", validators=[Optional(), Length(max=100)])
    estado = SelectField("Estado", choices=[("", "UF")] + ESTADOS, validators=[Optional()])
    prazo_entrega_medio = IntegerField("Prazo Médio de Entrega (dias)", validators=[Optional(), NumberRange(min=0)])
    condicao_pagamento = StringField("Condição de Pagamento", validators=[Optional(), Length(max=100)])
    politica_frete = StringField("Política de Frete", validators=[Optional(), Length(max=100)])
    valor_minimo_pedido = FloatField("Pedido Mínimo", validators=[Optional(), NumberRange(min=0)])
    observacoes = TextAreaField("Observações", validators=[Optional()])
    ativo = BooleanField("Ativo", default=True)
    submit = SubmitField("Salvar")


class AvaliacaoForm(FlaskForm):
    # nota 0 = não selecionada; a mensagem vem do serviço
    nota = SelectField("Avaliação Geral", choices=NOTAS, coerce=int, default=0)
    criterio_qualidade = SelectField("Qualidade", choices=NOTAS, coerce=int, default=0)
    criterio_entrega = SelectField("Entrega", choices=NOTAS, coerce=int, default=0)
    criterio_atendimento = SelectField("Atendimento", choices=NOTAS, coerce=int, default=0)
    comentario = TextAreaField("Comentário", validators=[Optional()])
    submit = SubmitField("Avaliar")
