from flask_wtf import FlaskForm
from wtforms import DateField, FloatField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from .models import CATEGORIAS, TIPOS


class LancamentoForm(FlaskForm):
    tipo = SelectField("Tipo", choices=TIPOS)
    categoria = SelectField("Categoria", choices=CATEGORIAS)
    descricao = StringField("Descrição", validators=[DataRequired(), Length(max=200)])
    valor = FloatField("Valor", validators=[DataRequired(), NumberRange(min=0.01)])
    data_vencimento = DateField("Vencimento", validators=[DataRequired()])
    cliente_id = SelectField("Cliente", coerce=int, validators=[Optional()])
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Salvar")
