from datetime import date

from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.models import Cliente
from ..clientes.services import opcoes_clientes
from ..utils_datas import parse_data
from ..utils_db import ErroOperacao, get_or_404, transactional
from .forms import AgendamentoForm, ProfissionalForm
from .models import Agendamento, Profissional
from .services import (
    calendario_mes,
    cancelar,
    confirmar,
    proximos_agendamentos,
    registrar_comparecimento,
    validar_agendamento,
)

consultorio_bp = Blueprint("consultorio", __name__, template_folder=".")

MESES = (
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
)


def _preparar_form(form: AgendamentoForm) -> AgendamentoForm:
    form.cliente_id.choices = opcoes_clientes()
    profissionais = Profissional.query.filter_by(ativo=True).order_by(Profissional.nome).all()
    form.profissional_id.choices = [(0, "Selecione...")] + [
        (p.id, f"{p.nome} - {p.especialidade}" if p.especialidade else p.nome) for p in profissionais
    ]
    return form


def _aplicar_form(agendamento: Agendamento, form: AgendamentoForm) -> None:
    agendamento.cliente_id = form.cliente_id.data
    agendamento.profissional_id = form.profissional_id.data
    agendamento.data = form.data.data
    agendamento.hora = form.hora.data
    agendamento.tipo_consulta = form.tipo_consulta.data
    agendamento.duracao = form.duracao.data or 30
    agendamento.recurso = form.recurso.data or None
    agendamento.telefone_contato = form.telefone_contato.data or None
    agendamento.observacoes = form.observacoes.data or None


def _mudar_status(agendamento_id: int, acao, mensagem: str, descricao: str):
    agendamento = get_or_404(Agendamento, agendamento_id)
    try:
        with transactional(descricao):
            acao(agendamento)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
    else:
        flash(mensagem, "success")
    return redirect(request.referrer or url_for("consultorio.listar"))


@consultorio_bp.route("/")
@require_roles("clinico", "vendas")
def listar():
    try:
        data = parse_data(request.args.get("data"))
    except ValueError as exc:
        flash(str(exc), "warning")
        data = None
    return render_template(
        "consultorio/lista.html",
        agendamentos=proximos_agendamentos(data),
        data=data,
        hoje=date.today(),
    )


@consultorio_bp.route("/novo", methods=["GET", "POST"])
@require_roles("clinico", "vendas")
def novo():
    form = _preparar_form(AgendamentoForm())
    if request.method == "GET":
        try:
            form.data.data = parse_data(request.args.get("data")) or date.today()
        except ValueError:
            form.data.data = date.today()
        cliente_id = request.args.get("cliente_id", 0, type=int)
        form.cliente_id.data = cliente_id
        cliente = db.session.get(Cliente, cliente_id) if cliente_id else None
        if cliente is not None:
            form.telefone_contato.data = cliente.telefone
    if form.validate_on_submit():
        agendamento = Agendamento(status="agendado")
        _aplicar_form(agendamento, form)
        try:
            validar_agendamento(agendamento)
            with transactional("salvar agendamento"):
                db.session.add(agendamento)
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("consultorio/form.html", form=form, titulo="Novo Agendamento")
        flash("Agendamento salvo com sucesso!", "success")
        return redirect(url_for("consultorio.listar"))
    return render_template("consultorio/form.html", form=form, titulo="Novo Agendamento")


@consultorio_bp.route("/<int:agendamento_id>/editar", methods=["GET", "POST"])
@require_roles("clinico", "vendas")
def editar(agendamento_id: int):
    agendamento = get_or_404(Agendamento, agendamento_id)
    form = _preparar_form(AgendamentoForm(obj=agendamento))
    if request.method == "GET":
        form.recurso.data = agendamento.recurso or ""
    if form.validate_on_submit():
        try:
            with transactional("atualizar agendamento"), db.session.no_autoflush:
                _aplicar_form(agendamento, form)
                validar_agendamento(agendamento)
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("consultorio/form.html", form=form, titulo="Editar Agendamento")
        flash("Agendamento atualizado com sucesso!", "success")
        return redirect(url_for("consultorio.listar"))
    return render_template("consultorio/form.html", form=form, titulo="Editar Agendamento")


@consultorio_bp.route("/<int:agendamento_id>/confirmar", methods=["POST"])
@require_roles("clinico", "vendas")
def confirmar_agendamento(agendamento_id: int):
    return _mudar_status(agendamento_id, confirmar, "Agendamento confirmado!", "confirmar agendamento")


@consultorio_bp.route("/<int:agendamento_id>/cancelar", methods=["POST"])
@require_roles("clinico", "vendas")
def cancelar_agendamento(agendamento_id: int):
    return _mudar_status(agendamento_id, cancelar, "Agendamento cancelado", "cancelar agendamento")


@consultorio_bp.route("/<int:agendamento_id>/realizado", methods=["POST"])
@require_roles("clinico")
def realizado(agendamento_id: int):
    return _mudar_status(
        agendamento_id,
        lambda a: registrar_comparecimento(a, True),
        "Consulta marcada como realizada",
        "registrar consulta",
    )


@consultorio_bp.route("/<int:agendamento_id>/faltou", methods=["POST"])
@require_roles("clinico", "vendas")
def faltou(agendamento_id: int):
    return _mudar_status(
        agendamento_id,
        lambda a: registrar_comparecimento(a, False),
        "Falta registrada",
        "registrar falta",
    )


@consultorio_bp.route("/calendario")
@require_roles("clinico", "vendas")
def calendario():
    hoje = date.today()
    ano = request.args.get("ano", hoje.year, type=int)
    mes = request.args.get("mes", hoje.month, type=int)
    if not 1 <= mes <= 12:
        mes = hoje.month
    anterior = (ano - 1, 12) if mes == 1 else (ano, mes - 1)
    seguinte = (ano + 1, 1) if mes == 12 else (ano, mes + 1)
    return render_template(
        "consultorio/calendario.html",
        semanas=calendario_mes(ano, mes),
        titulo_mes=f"{MESES[mes - 1]} de {ano}",
        anterior=anterior,
        seguinte=seguinte,
        hoje=hoje,
    )


@consultorio_bp.route("/profissionais")
@require_roles("clinico")
def profissionais():
    return render_template(
        "consultorio/profissionais.html",
        profissionais=Profissional.query.order_by(Profissional.nome).all(),
    )


@consultorio_bp.route("/profissionais/novo", methods=["GET", "POST"])
@require_roles("gerente", "admin")
def novo_profissional():
    form = ProfissionalForm()
    if form.validate_on_submit():
        profissional = Profissional()
        form.populate_obj(profissional)
        try:
            with transactional("salvar profissional"):
                db.session.add(profissional)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("consultorio/form.html", form=form, titulo="Novo Profissional")
        flash("Profissional cadastrado!", "success")
        return redirect(url_for("consultorio.profissionais"))
    return render_template("consultorio/form.html", form=form, titulo="Novo Profissional")


@consultorio_bp.route("/profissionais/<int:profissional_id>/editar", methods=["GET", "POST"])
@require_roles("gerente", "admin")
def editar_profissional(profissional_id: int):
    profissional = get_or_404(Profissional, profissional_id)
    form = ProfissionalForm(obj=profissional)
    if form.validate_on_submit():
        try:
            with transactional("atualizar profissional"):
                form.populate_obj(profissional)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("consultorio/form.html", form=form, titulo="Editar Profissional")
        flash("Profissional atualizado!", "success")
        return redirect(url_for("consultorio.profissionais"))
    return render_template("consultorio/form.html", form=form, titulo="Editar Profissional")
