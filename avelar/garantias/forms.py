from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, IntegerField, SelectField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, NumberRange, Optional

from .models import TIPOS_GARANTIA, TIPOS_OCORRENCIA, TIPOS_PRODUTO


class GarantiaForm(FlaskForm):
    cliente_id = SelectField("Cliente", coerce=int, validators=[DataRequired(message="Selecione o cliente")])
    produto_id = SelectField("Produto", coerce=int, validators=[Optional()])
    tipo_produto = SelectField("Tipo de Produto", choices=TIPOS_PRODUTO, validators=[DataRequired()])
    tipo_garantia = SelectField("Tipo de Garantia", choices=TIPOS_GARANTIA, validators=[DataRequired()])
    duracao_meses = IntegerField("Duração (meses)", validators=[Optional(), NumberRange(min=1, max=120)])
    data_inicio = DateField("Data de Início", validators=[DataRequired()])
    termos = TextAreaField("Termos da Garantia", validators=[Optional()])
    cobre_quebras = BooleanField("Cobre quebras")
    cobre_riscos = BooleanField("Cobre riscos")
    cobre_defeitos = BooleanField("Cobre defeitos", default=True)
    cobre_ajustes = BooleanField("Cobre ajustes", default=True)
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Salvar")


class OcorrenciaForm(FlaskForm):
    tipo = SelectField("Tipo", choices=TIPOS_OCORRENCIA)
    descricao = TextAreaField("Descrição", validators=[DataRequired(message="Descreva a ocorrência")])
    resolucao = TextAreaField("Resolução", validators=[Optional()])
    submit = SubmitField("Registrar")
