from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.models import Cliente
from ..produtos.models import Produto
from ..utils_db import ErroOperacao, get_or_404, transactional
from ..vendas.carrinho import carrinho_orcamento, carrinho_venda
from .models import STATUS_ORCAMENTO, Orcamento
from .services import aprovar, carregar_no_carrinho, listar_orcamentos, rejeitar, salvar_orcamento

orcamentos_bp = Blueprint("orcamentos", __name__, template_folder=".")


def _voltar():
    return redirect(url_for("orcamentos.novo"))


@orcamentos_bp.route("/")
@require_roles("vendas")
def novo():
    carrinho = carrinho_orcamento()
    cliente_id = request.args.get("cliente_id", type=int)
    if cliente_id and db.session.get(Cliente, cliente_id):
        carrinho.definir_cliente(cliente_id)
    return render_template(
        "orcamentos/novo.html",
        carrinho=carrinho.resumo(),
        clientes=Cliente.query.order_by(Cliente.nome).all(),
        validade_dias=current_app.config.get("ORCAMENTO_VALIDADE_DIAS", 7),
    )


@orcamentos_bp.route("/adicionar", methods=["POST"])
@require_roles("vendas")
def adicionar():
    produto = db.session.get(Produto, request.form.get("produto_id", type=int))
    if produto is None or not produto.ativo:
        flash("Produto não encontrado", "danger")
        return _voltar()
    try:
        carrinho_orcamento().adicionar(produto, request.form.get("quantidade", 1, type=int))
    except ValueError as exc:
        flash(str(exc), "danger")
    return _voltar()


@orcamentos_bp.route("/itens/<int:produto_id>/quantidade", methods=["POST"])
@require_roles("vendas")
def atualizar(produto_id: int):
    try:
        carrinho_orcamento().atualizar_quantidade(produto_id, request.form.get("quantidade", 0, type=int))
    except ValueError as exc:
        flash(str(exc), "danger")
    return _voltar()


@orcamentos_bp.route("/itens/<int:produto_id>/remover", methods=["POST"])
@require_roles("vendas")
def remover(produto_id: int):
    carrinho_orcamento().remover(produto_id)
    return _voltar()


@orcamentos_bp.route("/cliente", methods=["POST"])
@require_roles("vendas")
def selecionar_cliente():
    carrinho_orcamento().definir_cliente(request.form.get("cliente_id", type=int))
    return _voltar()


@orcamentos_bp.route("/limpar", methods=["POST"])
@require_roles("vendas")
def limpar():
    carrinho_orcamento().limpar()
    flash("Orçamento limpo", "info")
    return _voltar()


@orcamentos_bp.route("/salvar", methods=["POST"])
@require_roles("vendas")
def salvar():
    carrinho = carrinho_orcamento()
    try:
        with transactional("salvar orçamento"):
            orcamento = salvar_orcamento(
                carrinho,
                validade_dias=current_app.config.get("ORCAMENTO_VALIDADE_DIAS", 7),
                observacoes=request.form.get("observacoes"),
            )
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return _voltar()
    carrinho.limpar()
    flash(f"Orçamento #{orcamento.id} salvo com sucesso!", "success")
    return redirect(url_for("orcamentos.detalhe", orcamento_id=orcamento.id))


@orcamentos_bp.route("/lista")
@require_roles("vendas")
def listar():
    status = request.args.get("status") or None
    return render_template(
        "orcamentos/lista.html",
        orcamentos=listar_orcamentos(status),
        status=status,
        status_opcoes=STATUS_ORCAMENTO,
    )


@orcamentos_bp.route("/<int:orcamento_id>")
@require_roles("vendas")
def detalhe(orcamento_id: int):
    return render_template("orcamentos/detalhe.html", orcamento=get_or_404(Orcamento, orcamento_id))


def _alterar_status(orcamento_id: int, acao, mensagem: str, descricao: str):
    orcamento = get_or_404(Orcamento, orcamento_id)
    try:
        with transactional(descricao):
            acao(orcamento)
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
    else:
        flash(mensagem, "success")
    return redirect(url_for("orcamentos.detalhe", orcamento_id=orcamento.id))


@orcamentos_bp.route("/<int:orcamento_id>/aprovar", methods=["POST"])
@require_roles("vendas")
def aprovar_orcamento(orcamento_id: int):
    return _alterar_status(orcamento_id, aprovar, "Orçamento aprovado!", "aprovar orçamento")


@orcamentos_bp.route("/<int:orcamento_id>/rejeitar", methods=["POST"])
@require_roles("vendas")
def rejeitar_orcamento(orcamento_id: int):
    return _alterar_status(orcamento_id, rejeitar, "Orçamento rejeitado", "rejeitar orçamento")


@orcamentos_bp.route("/<int:orcamento_id>/carregar", methods=["POST"])
@require_roles("vendas")
def carregar(orcamento_id: int):
    orcamento = get_or_404(Orcamento, orcamento_id)
    try:
        carregar_no_carrinho(orcamento, carrinho_venda())
    except ValueError as exc:
        flash(str(exc), "danger")
        return redirect(url_for("orcamentos.detalhe", orcamento_id=orcamento.id))
    flash(f"Orçamento #{orcamento.id} carregado no PDV", "success")
    return redirect(url_for("vendas.pdv"))
