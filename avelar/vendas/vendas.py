from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..clientes.models import Cliente
from ..produtos.models import Produto
from ..receitas.models import Receita
from ..utils_db import ErroOperacao, get_or_404, transactional
from .carrinho import carrinho_venda
from .forms import FinalizarVendaForm
from .models import Venda
from .services import finalizar_venda, historico_vendas

vendas_bp = Blueprint("vendas", __name__, template_folder=".")


def _voltar_pdv():
    return redirect(url_for("vendas.pdv"))


@vendas_bp.route("/")
@require_roles("vendas")
def pdv():
    carrinho = carrinho_venda()
    cliente_id = request.args.get("cliente_id", type=int)
    if cliente_id and db.session.get(Cliente, cliente_id):
        carrinho.definir_cliente(cliente_id)
    receita_id = request.args.get("receita_id", type=int)
    if receita_id:
        receita = db.session.get(Receita, receita_id)
        if receita:
            carrinho.definir_cliente(receita.cliente_id)
            carrinho.definir_receita(receita.id)
    cliente = db.session.get(Cliente, carrinho.cliente_id) if carrinho.cliente_id else None
    receitas = (
        cliente.receitas.order_by(Receita.data_receita.desc()).all() if cliente is not None else []
    )
    return render_template(
        "vendas/pdv.html",
        carrinho=carrinho.resumo(),
        cliente=cliente,
        clientes=Cliente.query.order_by(Cliente.nome).all(),
        receitas=receitas,
        form=FinalizarVendaForm(),
    )


@vendas_bp.route("/adicionar", methods=["POST"])
@require_roles("vendas")
def adicionar():
    produto = db.session.get(Produto, request.form.get("produto_id", type=int))
    if produto is None or not produto.ativo:
        flash("Produto não encontrado", "danger")
        return _voltar_pdv()
    quantidade = request.form.get("quantidade", 1, type=int)
    try:
        carrinho_venda().adicionar(produto, quantidade)
    except ValueError as exc:
        flash(str(exc), "danger")
    return _voltar_pdv()


@vendas_bp.route("/itens/<int:produto_id>/quantidade", methods=["POST"])
@require_roles("vendas")
def atualizar_quantidade(produto_id: int):
    quantidade = request.form.get("quantidade", 0, type=int)
    try:
        carrinho_venda().atualizar_quantidade(produto_id, quantidade)
    except ValueError as exc:
        flash(str(exc), "danger")
    return _voltar_pdv()


@vendas_bp.route("/itens/<int:produto_id>/remover", methods=["POST"])
@require_roles("vendas")
def remover(produto_id: int):
    carrinho_venda().remover(produto_id)
    return _voltar_pdv()


@vendas_bp.route("/limpar", methods=["POST"])
@require_roles("vendas")
def limpar():
    carrinho_venda().limpar()
    flash("Carrinho limpo", "info")
    return _voltar_pdv()


@vendas_bp.route("/cliente", methods=["POST"])
@require_roles("vendas")
def selecionar_cliente():
    carrinho = carrinho_venda()
    cliente_id = request.form.get("cliente_id", type=int)
    if cliente_id != carrinho.cliente_id:
        carrinho.definir_receita(None)
    carrinho.definir_cliente(cliente_id)
    receita_id = request.form.get("receita_id", type=int)
    if receita_id:
        carrinho.definir_receita(receita_id)
    return _voltar_pdv()


@vendas_bp.route("/finalizar", methods=["POST"])
@require_roles("vendas")
def finalizar():
    carrinho = carrinho_venda()
    form = FinalizarVendaForm()
    if not form.validate_on_submit():
        flash("Dados de pagamento inválidos", "danger")
        return _voltar_pdv()
    try:
        with transactional("finalizar venda"):
            venda = finalizar_venda(
                carrinho,
                desconto=form.desconto.data,
                forma_pagamento=form.forma_pagamento.data,
                observacoes=form.observacoes.data or None,
                gerar_lancamento=current_app.config.get("VENDA_GERA_LANCAMENTO", True),
            )
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return _voltar_pdv()
    carrinho.limpar()
    flash(f"Venda #{venda.numero_venda} finalizada com sucesso!", "success")
    return redirect(url_for("vendas.detalhe", venda_id=venda.id))


@vendas_bp.route("/historico")
def historico():
    return render_template("vendas/historico.html", vendas=historico_vendas())


@vendas_bp.route("/<int:venda_id>")
def detalhe(venda_id: int):
    venda = get_or_404(Venda, venda_id)
    return render_template("vendas/detalhe.html", venda=venda)
