from datetime import date

from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.services import opcoes_clientes
from ..produtos.models import Produto
from ..utils_db import ErroOperacao, get_or_404, transactional
from ..vendas.models import Venda
from .forms import GarantiaForm, OcorrenciaForm
from .models import STATUS, Garantia
from .services import (
    GARANTIAS_POR_PRODUTO,
    TERMOS_PADRAO,
    calcular_data_fim,
    cancelar_garantia,
    estatisticas,
    estender_garantia,
    listar_garantias,
    registrar_ocorrencia,
    validar_tipo,
)

garantias_bp = Blueprint("garantias", __name__, template_folder=".")


def _preparar_form(form: GarantiaForm, venda: Venda | None = None) -> GarantiaForm:
    form.cliente_id.choices = opcoes_clientes()
    if venda is not None:
        produtos = [item.produto for item in venda.itens]
    else:
        produtos = Produto.query.filter_by(ativo=True).order_by(Produto.nome).all()
    form.produto_id.choices = [(0, "Não informado")] + [(p.id, p.nome) for p in produtos]
    return form


def _aplicar_form(garantia: Garantia, form: GarantiaForm) -> None:
    validar_tipo(form.tipo_produto.data, form.tipo_garantia.data)
    garantia.cliente_id = form.cliente_id.data
    garantia.produto_id = form.produto_id.data or None
    garantia.tipo_produto = form.tipo_produto.data
    garantia.tipo_garantia = form.tipo_garantia.data
    garantia.data_inicio = form.data_inicio.data
    garantia.data_fim = calcular_data_fim(
        form.data_inicio.data, form.tipo_garantia.data, form.duracao_meses.data
    )
    garantia.duracao_meses = form.duracao_meses.data or None
    garantia.termos = form.termos.data or TERMOS_PADRAO
    garantia.cobre_quebras = form.cobre_quebras.data
    garantia.cobre_riscos = form.cobre_riscos.data
    garantia.cobre_defeitos = form.cobre_defeitos.data
    garantia.cobre_ajustes = form.cobre_ajustes.data
    garantia.observacoes = form.observacoes.data or None


def _render_form(form, titulo, venda=None):
    return render_template(
        "garantias/form.html",
        form=form,
        titulo=titulo,
        venda=venda,
        por_produto=GARANTIAS_POR_PRODUTO,
    )


@garantias_bp.route("/")
@require_roles("vendas")
def listar():
    status = request.args.get("status") or None
    return render_template(
        "garantias/lista.html",
        garantias=listar_garantias(status),
        stats=estatisticas(),
        status=status,
        status_opcoes=STATUS,
    )


@garantias_bp.route("/nova", methods=["GET", "POST"])
@require_roles("vendas")
def nova():
    venda_id = request.values.get("venda_id", type=int)
    venda = db.session.get(Venda, venda_id) if venda_id else None
    form = _preparar_form(GarantiaForm(), venda)
    if request.method == "GET":
        form.data_inicio.data = date.today()
        form.termos.data = TERMOS_PADRAO
        if venda is not None:
            form.cliente_id.data = venda.cliente_id or 0
    if form.validate_on_submit():
        garantia = Garantia(status="ativa", venda_id=venda.id if venda else None)
        try:
            _aplicar_form(garantia, form)
            with transactional("salvar garantia"):
                db.session.add(garantia)
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return _render_form(form, "Nova Garantia", venda)
        flash("Garantia registrada com sucesso!", "success")
        return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
    return _render_form(form, "Nova Garantia", venda)


@garantias_bp.route("/<int:garantia_id>/editar", methods=["GET", "POST"])
@require_roles("vendas")
def editar(garantia_id: int):
    garantia = get_or_404(Garantia, garantia_id)
    form = _preparar_form(GarantiaForm(obj=garantia), garantia.venda)
    if request.method == "GET" and garantia.produto_id is None:
        form.produto_id.data = 0
    if form.validate_on_submit():
        try:
            with transactional("atualizar garantia"):
                _aplicar_form(garantia, form)
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return _render_form(form, "Editar Garantia", garantia.venda)
        flash("Garantia atualizada com sucesso!", "success")
        return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
    return _render_form(form, "Editar Garantia", garantia.venda)


@garantias_bp.route("/<int:garantia_id>")
@require_roles("vendas")
def visualizar(garantia_id: int):
    garantia = get_or_404(Garantia, garantia_id)
    return render_template("garantias/visualizar.html", garantia=garantia, form=OcorrenciaForm())


@garantias_bp.route("/<int:garantia_id>/estender", methods=["POST"])
@require_roles("vendas")
def estender(garantia_id: int):
    garantia = get_or_404(Garantia, garantia_id)
    meses = request.form.get("meses", 0, type=int)
    try:
        with transactional("estender garantia"):
            nova_data = estender_garantia(garantia, meses)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
    flash(f"Garantia estendida até {nova_data.strftime('%d/%m/%Y')}", "success")
    return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))


@garantias_bp.route("/<int:garantia_id>/cancelar", methods=["POST"])
@require_roles("vendas")
def cancelar(garantia_id: int):
    garantia = get_or_404(Garantia, garantia_id)
    try:
        with transactional("cancelar garantia"):
            cancelar_garantia(garantia)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
    flash("Garantia cancelada", "info")
    return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))


@garantias_bp.route("/<int:garantia_id>/ocorrencias", methods=["POST"])
@require_roles("vendas")
def ocorrencia(garantia_id: int):
    garantia = get_or_404(Garantia, garantia_id)
    form = OcorrenciaForm()
    if not form.validate_on_submit():
        flash("Descreva a ocorrência", "danger")
        return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
    try:
        with transactional("registrar ocorrência"):
            registrar_ocorrencia(
                garantia,
                tipo=form.tipo.data,
                descricao=form.descricao.data,
                resolucao=form.resolucao.data,
            )
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
    flash("Ocorrência registrada", "success")
    return redirect(url_for("garantias.visualizar", garantia_id=garantia.id))
