from datetime import date, timedelta

from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.services import opcoes_clientes
from ..receitas.models import Receita
from ..utils_db import ErroOperacao, get_or_404, transactional
from ..vendas.models import Venda
from .forms import OrdemServicoForm
from .models import ETAPAS, ICONES_ETAPA, OrdemServico
from .services import (
    avancar_etapa,
    calcular_produtividade,
    listar_ordens,
    ordens_do_mes,
    progresso,
    proximo_numero_os,
    status_etapas,
)

laboratorio_bp = Blueprint("laboratorio", __name__, template_folder=".")

PRAZO_PADRAO_DIAS = 7


def _opcoes_receitas():
    receitas = Receita.query.order_by(Receita.data_receita.desc()).limit(200).all()
    return [(0, "Sem receita")] + [
        (r.id, f"{r.cliente.nome} - {r.data_receita.strftime('%d/%m/%Y')}") for r in receitas
    ]


def _preparar_form(form: OrdemServicoForm) -> OrdemServicoForm:
    form.cliente_id.choices = opcoes_clientes()
    form.receita_id.choices = _opcoes_receitas()
    return form


def _aplicar_form(ordem: OrdemServico, form: OrdemServicoForm) -> None:
    ordem.cliente_id = form.cliente_id.data
    ordem.receita_id = form.receita_id.data or None
    ordem.tipo_servico = form.tipo_servico.data
    ordem.urgencia = form.urgencia.data
    ordem.armacao = form.armacao.data or None
    ordem.lentes = form.lentes.data or None
    ordem.prazo_entrega = form.prazo_entrega.data
    ordem.tecnico_responsavel = form.tecnico_responsavel.data or None
    ordem.custo_servico = round(form.custo_servico.data or 0, 2)
    ordem.valor_servico = round(form.valor_servico.data or 0, 2)
    ordem.observacoes_tecnicas = form.observacoes_tecnicas.data or None


@laboratorio_bp.route("/")
@require_roles("laboratorio_all", "vendas")
def listar():
    status = request.args.get("status") or None
    ordens = listar_ordens(status)
    contagem = dict(
        db.session.query(OrdemServico.status, db.func.count(OrdemServico.id))
        .group_by(OrdemServico.status)
        .all()
    )
    return render_template(
        "laboratorio/lista.html",
        ordens=ordens,
        status=status,
        etapas=ETAPAS,
        icones=ICONES_ETAPA,
        contagem=contagem,
        hoje=date.today(),
        progresso=progresso,
    )


@laboratorio_bp.route("/nova", methods=["GET", "POST"])
@require_roles("laboratorio_all", "vendas")
def nova():
    form = _preparar_form(OrdemServicoForm())
    venda_id = request.values.get("venda_id", type=int)
    venda = db.session.get(Venda, venda_id) if venda_id else None
    if request.method == "GET":
        form.prazo_entrega.data = date.today() + timedelta(days=PRAZO_PADRAO_DIAS)
        if venda is not None:
            form.cliente_id.data = venda.cliente_id or 0
            form.receita_id.data = venda.receita_id or 0
    if form.validate_on_submit():
        ordem = OrdemServico(numero_os=proximo_numero_os(), status="recebimento")
        _aplicar_form(ordem, form)
        if venda is not None:
            ordem.venda_id = venda.id
        try:
            with transactional("criar ordem de serviço"):
                db.session.add(ordem)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("laboratorio/form.html", form=form, titulo="Nova Ordem de Serviço", venda=venda)
        flash(f"OS #{ordem.numero_os} criada com sucesso!", "success")
        return redirect(url_for("laboratorio.detalhes", ordem_id=ordem.id))
    return render_template("laboratorio/form.html", form=form, titulo="Nova Ordem de Serviço", venda=venda)


@laboratorio_bp.route("/<int:ordem_id>/editar", methods=["GET", "POST"])
@require_roles("laboratorio_all")
def editar(ordem_id: int):
    ordem = get_or_404(OrdemServico, ordem_id)
    form = _preparar_form(OrdemServicoForm(obj=ordem))
    if request.method == "GET" and ordem.receita_id is None:
        form.receita_id.data = 0
    if form.validate_on_submit():
        try:
            with transactional("atualizar ordem de serviço"):
                _aplicar_form(ordem, form)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return render_template("laboratorio/form.html", form=form, titulo=f"Editar OS #{ordem.numero_os}")
        flash("Ordem de serviço atualizada!", "success")
        return redirect(url_for("laboratorio.detalhes", ordem_id=ordem.id))
    return render_template("laboratorio/form.html", form=form, titulo=f"Editar OS #{ordem.numero_os}")


@laboratorio_bp.route("/<int:ordem_id>")
@require_roles("laboratorio_all", "vendas")
def detalhes(ordem_id: int):
    ordem = get_or_404(OrdemServico, ordem_id)
    return render_template(
        "laboratorio/detalhes.html",
        ordem=ordem,
        etapas=status_etapas(ordem.status),
        icones=ICONES_ETAPA,
        progresso=progresso(ordem.status),
    )


@laboratorio_bp.route("/<int:ordem_id>/avancar", methods=["POST"])
@require_roles("laboratorio_all")
def avancar(ordem_id: int):
    ordem = get_or_404(OrdemServico, ordem_id)
    try:
        with transactional("avançar etapa"):
            avancar_etapa(ordem)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "warning")
        return redirect(request.referrer or url_for("laboratorio.detalhes", ordem_id=ordem.id))
    flash(f"OS #{ordem.numero_os} avançada para: {ordem.status_label}", "success")
    return redirect(request.referrer or url_for("laboratorio.detalhes", ordem_id=ordem.id))


@laboratorio_bp.route("/relatorio")
@require_roles("laboratorio_all")
def relatorio():
    ordens = ordens_do_mes()
    return render_template(
        "laboratorio/relatorio.html",
        rel=calcular_produtividade(ordens),
        ordens=ordens,
    )
