import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..produtos.models import CATEGORIAS, Produto
from ..utils_db import ErroOperacao, transactional
from .forms import AjusteEstoqueForm
from .services import ajustar_estoque, listar_estoque, ultimas_movimentacoes

estoque_bp = Blueprint("estoque", __name__, template_folder=".")

logger = logging.getLogger(__name__)


@estoque_bp.route("/")
def listar():
    categoria = request.args.get("categoria", "todos")
    produtos = listar_estoque(categoria)
    return render_template(
        "estoque/lista.html",
        produtos=produtos,
        categoria=categoria,
        categorias=CATEGORIAS,
    )


@estoque_bp.route("/movimentacoes")
def movimentacoes():
    produto_id = request.args.get("produto_id", type=int)
    movs = ultimas_movimentacoes(produto_id)
    produto = db.session.get(Produto, produto_id) if produto_id else None
    return render_template("estoque/movimentacoes.html", movimentacoes=movs, produto=produto)


@estoque_bp.route("/ajuste", methods=["GET", "POST"])
@require_roles("admin", "gerente", "vendedor")
def ajustar():
    form = AjusteEstoqueForm()
    form.produto_id.choices = [
        (p.id, f"{p.sku} - {p.nome} (saldo {p.estoque_atual})") for p in Produto.query.order_by(Produto.nome).all()
    ]
    if request.method == "GET" and request.args.get("produto_id", type=int):
        form.produto_id.data = request.args.get("produto_id", type=int)
    if form.validate_on_submit():
        produto = db.session.get(Produto, form.produto_id.data)
        if produto is None:
            flash("Produto não encontrado", "danger")
            return render_template("estoque/ajuste.html", form=form)
        try:
            with transactional("movimentar estoque"):
                mov = ajustar_estoque(
                    produto,
                    tipo=form.tipo.data,
                    quantidade=form.quantidade.data,
                    motivo=form.motivo.data,
                    observacoes=form.observacoes.data or None,
                )
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("estoque/ajuste.html", form=form)
        logger.info("Estoque de %s: %s -> %s", produto.sku, mov.saldo_anterior, mov.saldo_atual)
        flash("Movimentação registrada com sucesso!", "success")
        return redirect(url_for("estoque.listar"))
    return render_template("estoque/ajuste.html", form=form)
