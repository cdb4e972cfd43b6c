from flask import Blueprint, flash, redirect, render_template, request, url_for
from markupsafe import Markup

from .. import db
from ..auth.auth import require_roles
from ..utils_db import ErroOperacao, get_or_404, transactional
from .forms import AvaliacaoForm, FornecedorForm
from .models import CATEGORIAS, Fornecedor
from .services import (
    cnpj_em_uso,
    estrelas_html,
    gerar_relatorio,
    listar_fornecedores,
    registrar_avaliacao,
)

fornecedores_bp = Blueprint("fornecedores", __name__, template_folder=".")


def init_fornecedores(app):
    app.add_template_filter(lambda nota: Markup(estrelas_html(nota)), "estrelas")


def _aplicar_form(fornecedor: Fornecedor, form: FornecedorForm) -> None:
    form.populate_obj(fornecedor)
    fornecedor.nome = fornecedor.nome.strip()
    for campo in (
        "cnpj",
        "inscricao_estadual",
        "contato_nome",
        "telefone",
        "email",
        "site",
        "cep",
        "endereco",
        "cidade",
        "estado",
        "condicao_pagamento",
        "politica_frete",
        "observacoes",
    ):
        if not getattr(fornecedor, campo):
            setattr(fornecedor, campo, None)


def _salvar(fornecedor: Fornecedor, form: FornecedorForm, descricao: str) -> None:
    if cnpj_em_uso(form.cnpj.data or None, ignorar_id=fornecedor.id):
        raise ValueError("CNPJ já cadastrado")
    with transactional(descricao):
        _aplicar_form(fornecedor, form)
        db.session.add(fornecedor)


@fornecedores_bp.route("/")
@require_roles("gerente", "admin", "financeiro")
def listar():
    categoria = request.args.get("categoria") or None
    return render_template(
        "fornecedores/lista.html",
        fornecedores=listar_fornecedores(categoria),
        categoria=categoria,
        categorias=CATEGORIAS,
    )


@fornecedores_bp.route("/novo", methods=["GET", "POST"])
@require_roles("gerente", "admin")
def novo():
    form = FornecedorForm()
    if form.validate_on_submit():
        fornecedor = Fornecedor()
        try:
            _salvar(fornecedor, form, "salvar fornecedor")
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("fornecedores/form.html", form=form, titulo="Novo Fornecedor")
        flash("Fornecedor salvo com sucesso!", "success")
        return redirect(url_for("fornecedores.listar"))
    return render_template("fornecedores/form.html", form=form, titulo="Novo Fornecedor")


@fornecedores_bp.route("/<int:fornecedor_id>/editar", methods=["GET", "POST"])
@require_roles("gerente", "admin")
def editar(fornecedor_id: int):
    fornecedor = get_or_404(Fornecedor, fornecedor_id)
    form = FornecedorForm(obj=fornecedor)
    if form.validate_on_submit():
        try:
            _salvar(fornecedor, form, "atualizar fornecedor")
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("fornecedores/form.html", form=form, titulo="Editar Fornecedor")
        flash("Fornecedor atualizado com sucesso!", "success")
        return redirect(url_for("fornecedores.visualizar", fornecedor_id=fornecedor.id))
    return render_template("fornecedores/form.html", form=form, titulo="Editar Fornecedor")


@fornecedores_bp.route("/<int:fornecedor_id>")
@require_roles("gerente", "admin", "financeiro")
def visualizar(fornecedor_id: int):
    fornecedor = get_or_404(Fornecedor, fornecedor_id)
    return render_template(
        "fornecedores/visualizar.html",
        fornecedor=fornecedor,
        form=AvaliacaoForm(),
    )


@fornecedores_bp.route("/<int:fornecedor_id>/avaliar", methods=["POST"])
@require_roles("gerente", "admin")
def avaliar(fornecedor_id: int):
    fornecedor = get_or_404(Fornecedor, fornecedor_id)
    form = AvaliacaoForm()
    if not form.validate_on_submit():
        flash("Dados de avaliação inválidos", "danger")
        return redirect(url_for("fornecedores.visualizar", fornecedor_id=fornecedor.id))
    try:
        with transactional("salvar avaliação"):
            registrar_avaliacao(
                fornecedor,
                nota=form.nota.data,
                criterio_qualidade=form.criterio_qualidade.data,
                criterio_entrega=form.criterio_entrega.data,
                criterio_atendimento=form.criterio_atendimento.data,
                comentario=form.comentario.data,
            )
    except (ValueError, ErroOperacao) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("fornecedores.visualizar", fornecedor_id=fornecedor.id))
    flash("Avaliação registrada com sucesso!", "success")
    return redirect(url_for("fornecedores.visualizar", fornecedor_id=fornecedor.id))


@fornecedores_bp.route("/relatorio")
@require_roles("gerente", "admin", "financeiro")
def relatorio():
    return render_template(
        "fornecedores/relatorio.html",
        rel=gerar_relatorio(Fornecedor.query.all()),
    )
