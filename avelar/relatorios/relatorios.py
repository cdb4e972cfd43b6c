from flask import Blueprint, flash, jsonify, render_template, request

from ..auth.auth import require_roles
from ..utils_datas import parse_data
from .services import metricas_financeiras, metricas_vendas, periodo_padrao

relatorios_bp = Blueprint("relatorios", __name__, template_folder=".")


def _periodo():
    """Período da query string (inicio/fim); padrão é o mês corrente."""
    padrao_inicio, padrao_fim = periodo_padrao()
    inicio = parse_data(request.args.get("inicio")) or padrao_inicio
    fim = parse_data(request.args.get("fim")) or padrao_fim
    return inicio, fim


@relatorios_bp.route("/")
@require_roles("gerente", "admin", "financeiro")
def index():
    try:
        inicio, fim = _periodo()
        vendas = metricas_vendas(inicio, fim)
    except ValueError as exc:
        flash(str(exc), "warning")
        vendas = metricas_vendas(*periodo_padrao())
    return render_template(
        "relatorios/index.html",
        vendas=vendas,
        financeiro=metricas_financeiras(),
    )


@relatorios_bp.route("/api/resumo")
@require_roles("gerente", "admin", "financeiro")
def api_resumo():
    try:
        inicio, fim = _periodo()
        vendas = metricas_vendas(inicio, fim)
    except ValueError as exc:
        return jsonify({"erro": str(exc)}), 400
    return jsonify({"vendas": vendas.como_dict(), "financeiro": metricas_financeiras().como_dict()})
