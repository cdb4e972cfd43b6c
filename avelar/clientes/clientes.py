from flask import Blueprint, flash, redirect, render_template, request, url_for

from .. import db
from ..auth.auth import require_roles
from ..receitas.models import Receita
from ..utils_db import ErroOperacao, get_or_404, transactional
from ..vendas.models import Venda
from .forms import ClienteForm
from .models import Cliente
from .services import cpf_em_uso, listar_clientes, normalizar_cpf

clientes_bp = Blueprint("clientes", __name__, template_folder=".")


def _aplicar_form(cliente: Cliente, form: ClienteForm) -> None:
    cliente.nome = form.nome.data.strip()
    cliente.email = form.email.data or None
    cliente.telefone = form.telefone.data or None
    cliente.data_nascimento = form.data_nascimento.data
    cliente.observacoes = form.observacoes.data or None


@clientes_bp.route("/")
def listar():
    busca = request.args.get("busca", "").strip()
    clientes = listar_clientes(busca)
    template = "clientes/_tabela.html" if request.headers.get("HX-Request") else "clientes/lista.html"
    return render_template(template, clientes=clientes, busca=busca)


@clientes_bp.route("/novo", methods=["GET", "POST"])
@require_roles("vendas", "clinico")
def novo():
    form = ClienteForm()
    if form.validate_on_submit():
        cliente = Cliente()
        try:
            cpf = normalizar_cpf(form.cpf.data, validar=True)
            if cpf and cpf_em_uso(cpf):
                raise ValueError("CPF já cadastrado")
            cliente.cpf = cpf
            _aplicar_form(cliente, form)
            with transactional("salvar cliente"):
                db.session.add(cliente)
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("clientes/form.html", form=form, titulo="Novo Cliente")
        flash("Cliente salvo com sucesso!", "success")
        return redirect(url_for("clientes.listar"))
    return render_template("clientes/form.html", form=form, titulo="Novo Cliente")


@clientes_bp.route("/<int:cliente_id>/editar", methods=["GET", "POST"])
@require_roles("vendas", "clinico")
def editar(cliente_id: int):
    cliente = get_or_404(Cliente, cliente_id)
    form = ClienteForm(obj=cliente)
    if form.validate_on_submit():
        try:
            cpf = normalizar_cpf(form.cpf.data, validar=True)
            if cpf and cpf_em_uso(cpf, exceto_id=cliente.id):
                raise ValueError("CPF já cadastrado")
            with transactional("atualizar cliente"):
                cliente.cpf = cpf
                _aplicar_form(cliente, form)
        except (ValueError, ErroOperacao) as exc:
            flash(str(exc), "danger")
            return render_template("clientes/form.html", form=form, titulo="Editar Cliente", cliente=cliente)
        flash("Cliente atualizado com sucesso!", "success")
        return redirect(url_for("clientes.listar"))
    return render_template("clientes/form.html", form=form, titulo="Editar Cliente", cliente=cliente)


@clientes_bp.route("/<int:cliente_id>")
def visualizar(cliente_id: int):
    cliente = get_or_404(Cliente, cliente_id)
    vendas = cliente.vendas.order_by(Venda.created_at.desc()).limit(10).all()
    receitas = cliente.receitas.order_by(Receita.created_at.desc()).limit(10).all()
    return render_template("clientes/visualizar.html", cliente=cliente, vendas=vendas, receitas=receitas)
