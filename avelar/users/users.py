from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, url_for
from flask_wtf import FlaskForm
from wtforms import PasswordField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, Email, EqualTo, Length, Optional

from .. import db
from ..auth.auth import require_roles
from ..auth.models import CARGOS, User
from ..utils_db import get_or_404

users_bp = Blueprint("users", __name__, template_folder=".")


class UserForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email(), Length(max=120)])
    nome = StringField("Nome", validators=[DataRequired(), Length(max=128)])
    cargo = SelectField("Cargo", choices=CARGOS)
    password = PasswordField("Senha", validators=[Optional(), Length(min=4)])
    confirm = PasswordField(
        "Confirmar",
        validators=[EqualTo("password", message="Senhas divergentes")],
    )
    submit = SubmitField("Salvar")


def _email_em_uso(email: str, exceto_id: int | None = None) -> bool:
    existente = User.query.filter_by(email=email).first()
    return existente is not None and existente.id != exceto_id


@users_bp.route("/")
@require_roles("admin")
def listar():
    usuarios = User.query.order_by(User.nome).all()
    return render_template("users/lista.html", usuarios=usuarios)


@users_bp.route("/novo", methods=["GET", "POST"])
@require_roles("admin")
def novo():
    form = UserForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        if _email_em_uso(email):
            flash("Email já cadastrado", "danger")
            return render_template("users/form.html", form=form, titulo="Novo Usuário")
        if not form.password.data:
            flash("Informe uma senha", "danger")
            return render_template("users/form.html", form=form, titulo="Novo Usuário")
        u = User()
        u.email = email
        u.nome = form.nome.data
        u.cargo = form.cargo.data
        try:
            u.set_password(form.password.data)
        except ValueError as exc:
            flash(str(exc), "danger")
            return render_template("users/form.html", form=form, titulo="Novo Usuário")
        db.session.add(u)
        db.session.commit()
        flash("Usuário criado", "success")
        return redirect(url_for("users.listar"))
    return render_template("users/form.html", form=form, titulo="Novo Usuário")


@users_bp.route("/<int:uid>/editar", methods=["GET", "POST"])
@require_roles("admin")
def editar(uid: int):
    user = get_or_404(User, uid)
    form = UserForm(obj=user)
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        if _email_em_uso(email, exceto_id=user.id):
            flash("Email já cadastrado", "danger")
            return render_template("users/form.html", form=form, titulo="Editar Usuário")
        user.email = email
        user.nome = form.nome.data
        user.cargo = form.cargo.data
        if form.password.data:
            try:
                user.set_password(form.password.data)
            except ValueError as exc:
                flash(str(exc), "danger")
                return render_template("users/form.html", form=form, titulo="Editar Usuário")
        db.session.commit()
        flash("Usuário atualizado", "success")
        return redirect(url_for("users.listar"))
    return render_template("users/form.html", form=form, titulo="Editar Usuário")


@users_bp.route("/<int:uid>/toggle", methods=["POST"])
@require_roles("admin")
def toggle(uid: int):
    user = get_or_404(User, uid)
    user.is_active = not bool(user.is_active)
    db.session.commit()
    flash("Status alterado", "info")
    return redirect(url_for("users.listar"))
