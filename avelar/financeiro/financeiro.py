from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.services import opcoes_clientes
from ..utils_db import ErroOperacao, get_or_404, transactional
from .forms import LancamentoForm
from .models import STATUS, TIPOS, Lancamento
from .services import listar_lancamentos, marcar_como_pago, resumo_do_mes

financeiro_bp = Blueprint("financeiro", __name__, template_folder=".")


def _aplicar_form(lanc: Lancamento, form: LancamentoForm) -> None:
    lanc.tipo = form.tipo.data
    lanc.categoria = form.categoria.data
    lanc.descricao = form.descricao.data.strip()
    lanc.valor = round(form.valor.data, 2)
    lanc.data_vencimento = form.data_vencimento.data
    lanc.cliente_id = form.cliente_id.data or None
    lanc.observacoes = form.observacoes.data or None


@financeiro_bp.route("/")
@require_roles("financeiro_all")
def listar():
    tipo = request.args.get("tipo") or None
    status = request.args.get("status") or None
    return render_template(
        "financeiro/lista.html",
        lancamentos=listar_lancamentos(tipo=tipo, status=status),
        resumo=resumo_do_mes(),
        tipo=tipo,
        status=status,
        tipos=TIPOS,
        status_opcoes=STATUS,
    )


@financeiro_bp.route("/novo", methods=["GET", "POST"])
@require_roles("financeiro_all")
def novo():
    form = LancamentoForm()
    form.cliente_id.choices = opcoes_clientes()
    if form.validate_on_submit():
        lanc = Lancamento()
        _aplicar_form(lanc, form)
        lanc.status = "pendente"
        try:
            with transactional("salvar movimentação"):
                db.session.add(lanc)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("financeiro/form.html", form=form, titulo="Nova Movimentação")
        flash("Movimentação salva com sucesso!", "success")
        return redirect(url_for("financeiro.listar"))
    return render_template("financeiro/form.html", form=form, titulo="Nova Movimentação")


@financeiro_bp.route("/<int:lancamento_id>/editar", methods=["GET", "POST"])
@require_roles("financeiro_all")
def editar(lancamento_id: int):
    lanc = get_or_404(Lancamento, lancamento_id)
    form = LancamentoForm(obj=lanc)
    form.cliente_id.choices = opcoes_clientes()
    if request.method == "GET" and lanc.cliente_id is None:
        form.cliente_id.data = 0
    if form.validate_on_submit():
        try:
            with transactional("atualizar movimentação"):
                _aplicar_form(lanc, form)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("financeiro/form.html", form=form, titulo="Editar Movimentação")
        flash("Movimentação atualizada com sucesso!", "success")
        return redirect(url_for("financeiro.listar"))
    return render_template("financeiro/form.html", form=form, titulo="Editar Movimentação")


@financeiro_bp.route("/<int:lancamento_id>/pagar", methods=["POST"])
@require_roles("financeiro_all")
def pagar(lancamento_id: int):
    lanc = get_or_404(Lancamento, lancamento_id)
    try:
        with transactional("marcar como pago"):
            marcar_como_pago(lanc)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("financeiro.listar"))
    flash("Movimentação marcada como paga!", "success")
    return redirect(url_for("financeiro.listar"))
