from flask_wtf import FlaskForm
from wtforms import DateField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Optional


class ClienteForm(FlaskForm):
    nome = StringField("Nome", validators=[DataRequired(), Length(max=150)])
    cpf = StringField("CPF", validators=[Optional(), Length(max=14)])
    email = StringField("Email", validators=[Optional(), Email(), Length(max=120)])
    telefone = StringField("Telefone", validators=[Optional(), Length(max=20)])
    data_nascimento = DateField("Data de Nascimento", validators=[Optional()])
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Salvar")
