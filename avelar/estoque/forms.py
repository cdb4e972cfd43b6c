from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField, SubmitField, TextAreaField
from wtforms.validators import Optional

TIPOS = [("entrada", "Entrada"), ("saida", "Saída"), ("ajuste", "Ajuste (define saldo)")]

MOTIVOS_AJUSTE = [
    ("inventario", "Inventário"),
    ("ajuste", "Ajuste"),
    ("devolucao", "Devolução"),
    ("perda", "Perda"),
    ("outro", "Outro"),
]


class AjusteEstoqueForm(FlaskForm):
    produto_id = SelectField("Produto", coerce=int)
    tipo = SelectField("Tipo", choices=TIPOS)
    # validada no serviço para manter a mensagem única de quantidade inválida
    quantidade = IntegerField("Quantidade", validators=[Optional()])
    motivo = SelectField("Motivo", choices=MOTIVOS_AJUSTE)
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Salvar")
