from flask_wtf import FlaskForm
from wtforms import DateField, FloatField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from .models import TIPOS_SERVICO, URGENCIAS


class OrdemServicoForm(FlaskForm):
    cliente_id = SelectField("Cliente", coerce=int, validators=[DataRequired(message="Selecione o cliente")])
    receita_id = SelectField("Receita", coerce=int, validators=[Optional()])
    tipo_servico = SelectField("Tipo de Serviço", choices=TIPOS_SERVICO, validators=[DataRequired()])
    urgencia = SelectField("Urgência", choices=URGENCIAS, default="normal")
    armacao = StringField("Armação", validators=[Optional(), Length(max=200)])
    lentes = StringField("Lentes", validators=[Optional(), Length(max=200)])
    prazo_entrega = DateField("Prazo de Entrega", validators=[Optional()])
    tecnico_responsavel = StringField("Técnico Responsável", validators=[Optional(), Length(max=100)])
    custo_servico = FloatField("Custo", default=0.0, validators=[Optional(), NumberRange(min=0)])
    valor_servico = FloatField("Valor Cobrado", default=0.0, validators=[Optional(), NumberRange(min=0)])
    observacoes_tecnicas = TextAreaField("Observações Técnicas", validators=[Optional()])
    submit = SubmitField("Salvar")
