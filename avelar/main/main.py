from flask import Blueprint, current_app, jsonify, redirect, render_template, url_for

from .registry import MODULOS
from .services import alertas_estoque, estatisticas, vendas_recentes

main_bp = Blueprint(
    "main",
    __name__,
    template_folder=".",
)

# Atalhos da página de cadastros: (título, endpoint, ícone)
CADASTROS = (
    ("Cliente", "clientes.novo", "fa-user-plus"),
    ("Produto", "produtos.novo", "fa-glasses"),
    ("Fornecedor", "fornecedores.novo", "fa-truck"),
    ("Receita", "receitas.nova", "fa-prescription"),
    ("Ordem de Serviço", "laboratorio.nova", "fa-flask"),
    ("Agendamento", "consultorio.novo", "fa-calendar-plus"),
)


@main_bp.route("/")
def dashboard():
    limite_alerta = current_app.config.get("ESTOQUE_ALERTA_LIMITE", 5)
    return render_template(
        "main/dashboard.html",
        stats=estatisticas(limite_alerta=limite_alerta),
        recentes=vendas_recentes(),
        alertas=alertas_estoque(
            limite_alerta=limite_alerta,
            limite_critico=current_app.config.get("ESTOQUE_CRITICO_LIMITE", 2),
        ),
    )


@main_bp.route("/api/stats")
def api_stats():
    return jsonify(estatisticas(limite_alerta=current_app.config.get("ESTOQUE_ALERTA_LIMITE", 5)))


@main_bp.route("/modulo/<nome>")
def modulo(nome: str):
    """Entrada de módulo pelo menu; nome desconhecido mostra cartão de erro."""
    mod = MODULOS.get(nome)
    if mod is None or not mod.menu:
        return render_template("main/erro_modulo.html", nome=nome), 404
    return redirect(url_for(mod.endpoint))


@main_bp.route("/cadastros")
def cadastros():
    return render_template("main/cadastros.html", cadastros=CADASTROS)
