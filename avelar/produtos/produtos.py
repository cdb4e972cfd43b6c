from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..estoque.services import movimentar_estoque
from ..utils_db import ErroOperacao, get_or_404, transactional
from .forms import ProdutoForm
from .models import CATEGORIAS, Produto
from .services import (
    CAMPOS_ESPECIFICOS,
    TODOS_CAMPOS_ESPECIFICOS,
    buscar_produtos,
    especificacoes,
    limpar_campos_fora_da_categoria,
    margem,
    sku_em_uso,
)

produtos_bp = Blueprint("produtos", __name__, template_folder=".")


def _aplicar_form(produto: Produto, form: ProdutoForm, *, novo: bool) -> None:
    for campo in ProdutoForm.CAMPOS_BASICOS:
        if campo == "estoque_atual":
            continue
        setattr(produto, campo, getattr(form, campo).data)
    produto.sku = form.sku.data.strip()
    produto.preco_custo = form.preco_custo.data or 0.0
    produto.estoque_minimo = form.estoque_minimo.data or 0
    if novo:
        produto.estoque_atual = 0
    for campo in TODOS_CAMPOS_ESPECIFICOS:
        valor = getattr(form, campo).data
        setattr(produto, campo, None if valor == "" else valor)
    limpar_campos_fora_da_categoria(produto)


def _render_form(form, titulo, produto=None):
    return render_template(
        "produtos/form.html",
        form=form,
        titulo=titulo,
        produto=produto,
        campos_especificos=CAMPOS_ESPECIFICOS,
    )


@produtos_bp.route("/")
def listar():
    categoria = request.args.get("categoria") or None
    busca = request.args.get("busca", "").strip()
    if busca:
        produtos = buscar_produtos(busca, categoria=categoria, limite=100)
    else:
        query = Produto.query
        if categoria:
            query = query.filter_by(categoria=categoria)
        produtos = query.order_by(Produto.categoria, Produto.nome).all()
    return render_template(
        "produtos/lista.html",
        produtos=produtos,
        categoria=categoria,
        busca=busca,
        categorias=CATEGORIAS,
    )


@produtos_bp.route("/novo", methods=["GET", "POST"])
@require_roles("admin", "gerente", "vendedor")
def novo():
    form = ProdutoForm()
    if request.method == "GET" and request.args.get("categoria"):
        form.categoria.data = request.args["categoria"]
    if form.validate_on_submit():
        if sku_em_uso(form.sku.data.strip()):
            flash("SKU já cadastrado", "danger")
            return _render_form(form, "Novo Produto")
        produto = Produto()
        _aplicar_form(produto, form, novo=True)
        try:
            with transactional("salvar produto"):
                db.session.add(produto)
                db.session.flush()
                inicial = form.estoque_atual.data or 0
                if inicial:
                    movimentar_estoque(produto, inicial, motivo="estoque_inicial")
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return _render_form(form, "Novo Produto")
        flash("Produto salvo com sucesso!", "success")
        return redirect(url_for("produtos.visualizar", produto_id=produto.id))
    return _render_form(form, "Novo Produto")


@produtos_bp.route("/<int:produto_id>/editar", methods=["GET", "POST"])
@require_roles("admin", "gerente", "vendedor")
def editar(produto_id: int):
    produto = get_or_404(Produto, produto_id)
    form = ProdutoForm(obj=produto)
    if form.validate_on_submit():
        if sku_em_uso(form.sku.data.strip(), exceto_id=produto.id):
            flash("SKU já cadastrado", "danger")
            return _render_form(form, "Editar Produto", produto)
        try:
            with transactional("atualizar produto"):
                _aplicar_form(produto, form, novo=False)
        except ErroOperacao as exc:
            flash(str(exc), "danger")
            return _render_form(form, "Editar Produto", produto)
        flash("Produto atualizado com sucesso!", "success")
        return redirect(url_for("produtos.visualizar", produto_id=produto.id))
    return _render_form(form, "Editar Produto", produto)


@produtos_bp.route("/<int:produto_id>")
def visualizar(produto_id: int):
    produto = get_or_404(Produto, produto_id)
    valor_margem, pct_margem = margem(produto)
    return render_template(
        "produtos/visualizar.html",
        produto=produto,
        especificacoes=especificacoes(produto),
        margem_valor=valor_margem,
        margem_pct=pct_margem,
    )


@produtos_bp.route("/buscar")
def buscar():
    """Fragmento HTMX com resultados de busca (PDV e orçamentos)."""
    termo = request.args.get("q", "").strip()
    destino = request.args.get("destino", "vendas")
    com_estoque = destino == "vendas"
    produtos = buscar_produtos(termo, somente_com_estoque=com_estoque, limite=20 if com_estoque else 10) if termo else []
    return render_template("produtos/_resultados.html", produtos=produtos, destino=destino)
