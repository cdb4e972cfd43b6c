from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from .models import FREQUENCIAS_USO, STATUS_CONTROLE


class ControleForm(FlaskForm):
    cliente_id = SelectField("Cliente", coerce=int, validators=[DataRequired(message="Selecione o cliente")])
    produto_id = SelectField("Lente", coerce=int, validators=[Optional()])
    data_ultima_compra = DateField("Última Compra", validators=[Optional()])
    data_proximo_controle = DateField("Próximo Controle", validators=[DataRequired()])
    frequencia_uso = SelectField("Frequência de Uso", choices=[("", "-")] + FREQUENCIAS_USO, validators=[Optional()])
    horas_uso_diario = IntegerField("Horas de Uso por Dia", validators=[Optional(), NumberRange(min=0, max=24)])
    solucao_limpeza = StringField("Solução de Limpeza", validators=[Optional(), Length(max=100)])
    status = SelectField("Status", choices=STATUS_CONTROLE, default="agendado")
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Salvar")


class LoteForm(FlaskForm):
    produto_id = SelectField("Lente", coerce=int, validators=[DataRequired(message="Selecione a lente")])
    numero_lote = StringField("Número do Lote", validators=[DataRequired(), Length(max=50)])
    data_fabricacao = DateField("Data de Fabricação", validators=[DataRequired()])
    quantidade_lote = IntegerField("Quantidade", default=0, validators=[Optional(), NumberRange(min=0)])
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Registrar")
