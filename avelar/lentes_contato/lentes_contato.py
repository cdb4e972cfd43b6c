from datetime import date

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.services import opcoes_clientes
from ..produtos.models import Produto
from ..utils_datas import somar_meses
from ..utils_db import ErroOperacao, get_or_404, transactional
from .forms import ControleForm, LoteForm
from .models import ControleLenteContato
from .services import (
    alerta_validade,
    gerar_relatorio,
    listar_controles,
    listar_lentes,
    listar_lotes,
    realizar_controle,
    registrar_lote,
)

lentes_contato_bp = Blueprint("lentes_contato", __name__, template_folder=".")

CONTROLE_PADRAO_MESES = 6


def _opcoes_lentes(vazio: str | None = "Não informada"):
    opcoes = [(p.id, p.nome) for p in listar_lentes()]
    return ([(0, vazio)] + opcoes) if vazio else opcoes


def _aplicar_form(controle: ControleLenteContato, form: ControleForm) -> None:
    form.populate_obj(controle)
    controle.produto_id = form.produto_id.data or None
    controle.frequencia_uso = form.frequencia_uso.data or None
    controle.solucao_limpeza = form.solucao_limpeza.data or None
    controle.observacoes = form.observacoes.data or None


@lentes_contato_bp.route("/")
@require_roles("vendas", "clinico")
def listar():
    hoje = date.today()
    dias_alerta = current_app.config.get("CONTROLE_LC_DIAS_ALERTA", 30)
    lotes = [(lote, *alerta_validade(lote.data_validade, hoje=hoje, dias_alerta=dias_alerta)) for lote in listar_lotes()]
    return render_template(
        "lentes_contato/lista.html",
        lentes=listar_lentes(),
        controles=listar_controles(),
        lotes=lotes,
        hoje=hoje,
    )


@lentes_contato_bp.route("/controles/novo", methods=["GET", "POST"])
@require_roles("vendas", "clinico")
def novo_controle():
    form = ControleForm()
    form.cliente_id.choices = opcoes_clientes()
    form.produto_id.choices = _opcoes_lentes()
    if request.method == "GET":
        form.cliente_id.data = request.args.get("cliente_id", 0, type=int)
        form.data_ultima_compra.data = date.today()
        form.data_proximo_controle.data = somar_meses(date.today(), CONTROLE_PADRAO_MESES)
    if form.validate_on_submit():
        controle = ControleLenteContato()
        _aplicar_form(controle, form)
        try:
            with transactional("salvar controle"):
                db.session.add(controle)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("lentes_contato/form.html", form=form, titulo="Novo Controle")
        flash("Controle agendado com sucesso!", "success")
        return redirect(url_for("lentes_contato.listar"))
    return render_template("lentes_contato/form.html", form=form, titulo="Novo Controle")


@lentes_contato_bp.route("/controles/<int:controle_id>/editar", methods=["GET", "POST"])
@require_roles("vendas", "clinico")
def editar_controle(controle_id: int):
    controle = get_or_404(ControleLenteContato, controle_id)
    form = ControleForm(obj=controle)
    form.cliente_id.choices = opcoes_clientes()
    form.produto_id.choices = _opcoes_lentes()
    if request.method == "GET":
        form.produto_id.data = controle.produto_id or 0
        form.frequencia_uso.data = controle.frequencia_uso or ""
    if form.validate_on_submit():
        try:
            with transactional("atualizar controle"):
                _aplicar_form(controle, form)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("lentes_contato/form.html", form=form, titulo="Editar Controle")
        flash("Controle atualizado com sucesso!", "success")
        return redirect(url_for("lentes_contato.listar"))
    return render_template("lentes_contato/form.html", form=form, titulo="Editar Controle")


@lentes_contato_bp.route("/controles/<int:controle_id>/realizar", methods=["POST"])
@require_roles("vendas", "clinico")
def realizar(controle_id: int):
    controle = get_or_404(ControleLenteContato, controle_id)
    try:
        with transactional("registrar controle"):
            realizar_controle(controle)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("lentes_contato.listar"))
    flash("Controle marcado como realizado!", "success")
    return redirect(url_for("lentes_contato.listar"))


@lentes_contato_bp.route("/lotes/novo", methods=["GET", "POST"])
@require_roles("vendas")
def novo_lote():
    form = LoteForm()
    form.produto_id.choices = _opcoes_lentes(vazio=None)
    if request.method == "GET" and request.args.get("produto_id"):
        form.produto_id.data = request.args.get("produto_id", type=int)
    if form.validate_on_submit():
        produto = get_or_404(Produto, form.produto_id.data)
        try:
            with transactional("registrar lote"):
                lote = registrar_lote(
                    produto,
                    numero_lote=form.numero_lote.data,
                    data_fabricacao=form.data_fabricacao.data,
                    quantidade_lote=form.quantidade_lote.data,
                    observacoes=form.observacoes.data,
                )
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("lentes_contato/form.html", form=form, titulo="Controle de Validade")
        flash(f"Lote registrado! Validade: {lote.data_validade.strftime('%d/%m/%Y')}", "success")
        return redirect(url_for("lentes_contato.listar"))
    return render_template("lentes_contato/form.html", form=form, titulo="Controle de Validade")


@lentes_contato_bp.route("/relatorio")
@require_roles("vendas", "clinico")
def relatorio():
    return render_template("lentes_contato/relatorio.html", rel=gerar_relatorio())
