from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from .models import RECURSOS, TIPOS_CONSULTA
from .services import HORARIOS


class AgendamentoForm(FlaskForm):
    cliente_id = SelectField("Cliente", coerce=int, validators=[DataRequired(message="Selecione o cliente")])
    profissional_id = SelectField("Profissional", coerce=int, validators=[DataRequired(message="Selecione o profissional")])
    data = DateField("Data", validators=[DataRequired()])
    hora = SelectField("Horário", choices=[(h, h) for h in HORARIOS], validators=[DataRequired()])
    tipo_consulta = SelectField("Tipo de Consulta", choices=TIPOS_CONSULTA, validators=[DataRequired()])
    duracao = IntegerField("Duração (min)", default=30, validators=[Optional(), NumberRange(min=10, max=240)])
    recurso = SelectField("Recurso", choices=[("", "-")] + RECURSOS, validators=[Optional()])
    telefone_contato = StringField("Telefone de Contato", validators=[Optional(), Length(max=20)])
    observacoes = TextAreaField("Observações", validators=[Optional()])
    submit = SubmitField("Agendar")


class ProfissionalForm(FlaskForm):
    nome = StringField("Nome", validators=[DataRequired(), Length(max=150)])
    especialidade = StringField("Especialidade", validators=[Optional(), Length(max=100)])
    registro_profissional = StringField("Registro Profissional", validators=[Optional(), Length(max=30)])
    ativo = BooleanField("Ativo", default=True)
    submit = SubmitField("Salvar")
