from datetime import date

from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.models import Cliente
from ..clientes.services import opcoes_clientes
from ..utils_db import ErroOperacao, get_or_404, transactional
from .forms import ReceitaForm
from .models import Receita
from .services import (
    APARELHOS,
    calcular_nova_validade,
    dados_importados,
    dados_renovacao,
    formatar_cilindrico,
    formatar_grau,
    listar_receitas,
)

receitas_bp = Blueprint("receitas", __name__, template_folder=".")


def init_receitas(app):
    """Filtros de template usados nas telas de receita e no PDV."""
    app.add_template_filter(formatar_grau, "grau")
    app.add_template_filter(formatar_cilindrico, "cilindrico")


def _novo_form(**dados) -> ReceitaForm:
    # formdata=None: dados pré-preenchidos não são sobrescritos pelo POST atual
    form = ReceitaForm(formdata=None, data=dados) if dados else ReceitaForm()
    form.cliente_id.choices = opcoes_clientes()
    return form


def _aplicar_form(receita: Receita, form: ReceitaForm) -> None:
    form.populate_obj(receita)
    for campo in ("medico_nome", "medico_crm", "od_base", "oe_base", "tipo_lente", "tratamento"):
        if getattr(receita, campo) == "":
            setattr(receita, campo, None)


def _render_form(form, titulo, receita=None):
    return render_template("receitas/form.html", form=form, titulo=titulo, receita=receita)


@receitas_bp.route("/")
def listar():
    cliente_id = request.args.get("cliente_id", type=int)
    cliente = db.session.get(Cliente, cliente_id) if cliente_id else None
    return render_template(
        "receitas/lista.html",
        receitas=listar_receitas(cliente_id),
        cliente=cliente,
        clientes=Cliente.query.order_by(Cliente.nome).all(),
    )


@receitas_bp.route("/nova", methods=["GET", "POST"])
@require_roles("clinico", "vendas")
def nova():
    if request.method == "GET":
        form = _novo_form(
            cliente_id=request.args.get("cliente_id", 0, type=int),
            data_receita=date.today(),
            data_validade=calcular_nova_validade(),
        )
    else:
        form = _novo_form()
    if form.validate_on_submit():
        receita = Receita()
        _aplicar_form(receita, form)
        try:
            with transactional("salvar receita"):
                db.session.add(receita)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return _render_form(form, "Nova Receita")
        flash("Receita salva com sucesso!", "success")
        return redirect(url_for("receitas.visualizar", receita_id=receita.id))
    return _render_form(form, "Nova Receita")


@receitas_bp.route("/<int:receita_id>/editar", methods=["GET", "POST"])
@require_roles("clinico", "vendas")
def editar(receita_id: int):
    receita = get_or_404(Receita, receita_id)
    form = ReceitaForm(obj=receita)
    form.cliente_id.choices = opcoes_clientes()
    if form.validate_on_submit():
        try:
            with transactional("atualizar receita"):
                _aplicar_form(receita, form)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return _render_form(form, "Editar Receita", receita)
        flash("Receita atualizada com sucesso!", "success")
        return redirect(url_for("receitas.visualizar", receita_id=receita.id))
    return _render_form(form, "Editar Receita", receita)


@receitas_bp.route("/<int:receita_id>")
def visualizar(receita_id: int):
    receita = get_or_404(Receita, receita_id)
    return render_template("receitas/visualizar.html", receita=receita)


@receitas_bp.route("/<int:receita_id>/renovar")
@require_roles("clinico", "vendas")
def renovar(receita_id: int):
    original = get_or_404(Receita, receita_id)
    form = _novo_form(**dados_renovacao(original))
    return render_template(
        "receitas/form.html",
        form=form,
        titulo="Renovar Receita",
        action=url_for("receitas.nova"),
    )


@receitas_bp.route("/importar", methods=["GET", "POST"])
@require_roles("clinico", "vendas")
def importar():
    tipo = request.values.get("tipo_aparelho", "")
    if request.method == "POST":
        try:
            dados = dados_importados(tipo, request.form)
        except ValueError as exc:
            flash(str(exc), "danger")
            return render_template(
                "receitas/importar.html",
                aparelhos=APARELHOS,
                tipo=tipo,
                clientes=Cliente.query.order_by(Cliente.nome).all(),
            )
        dados.setdefault("data_receita", date.today())
        dados.setdefault("data_validade", calcular_nova_validade())
        cliente_id = request.form.get("cliente_id", 0, type=int)
        if cliente_id:
            dados["cliente_id"] = cliente_id
        flash("Dados importados com sucesso!", "success")
        return render_template(
            "receitas/form.html",
            form=_novo_form(**dados),
            titulo="Nova Receita (importada)",
            action=url_for("receitas.nova"),
        )
    return render_template(
        "receitas/importar.html",
        aparelhos=APARELHOS,
        tipo=tipo,
        clientes=Cliente.query.order_by(Cliente.nome).all(),
    )
