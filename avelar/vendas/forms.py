from flask_wtf import FlaskForm
from wtforms import FloatField, SelectField, SubmitField, TextAreaField
from wtforms.validators import NumberRange, Optional

from .models import FORMAS_PAGAMENTO


class FinalizarVendaForm(FlaskForm):
    desconto = FloatField("Desconto (R$)", validators=[Optional(), NumberRange(min=0)], default=0)
    forma_pagamento = SelectField("Forma de Pagamento", choices=FORMAS_PAGAMENTO, default="dinheiro")
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Finalizar Venda")
