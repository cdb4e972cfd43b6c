import logging
from datetime import datetime, timedelta
from functools import wraps

from flask import (
    Blueprint,
    current_app,
    flash,
    g,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from .. import db
from .models import User


auth_bp = Blueprint(
    "auth",
    __name__,
    template_folder=".",
)

logger = logging.getLogger(__name__)

# Grupos compostos aceitos por require_roles
ROLE_GROUPS = {
    "vendas": {"admin", "gerente", "vendedor"},
    "clinico": {"admin", "gerente", "optometrista"},
    "laboratorio_all": {"admin", "gerente", "laboratorio"},
    "financeiro_all": {"admin", "gerente", "financeiro"},
}


def require_roles(*roles):
    """Decorator para exigir um dos cargos ou grupos definidos.

    Aceita cargos diretos (admin, gerente, vendedor, optometrista,
    laboratorio, financeiro) ou grupos de ROLE_GROUPS. Sem argumentos, exige
    apenas login.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if getattr(g, "user", None) is None:
                flash("Login necessário", "warning")
                return redirect(url_for("auth.login"))
            if roles:
                allowed = set()
                for r in roles:
                    allowed.update(ROLE_GROUPS.get(r, {r}))
                if g.user.cargo not in allowed:
                    flash("Sem permissão", "danger")
                    return redirect(url_for("main.dashboard"))
            return fn(*args, **kwargs)

        return wrapper

    return decorator


@auth_bp.before_app_request
def load_user():
    uid = session.get("uid")
    g.user = None
    if uid:
        g.user = db.session.get(User, uid)
    # Expiração de sessão (inatividade)
    now = datetime.utcnow()
    timeout_min = current_app.config.get("SESSION_TIMEOUT_MIN", 60)
    last = session.get("_last_activity")
    if last:
        try:
            last_dt = datetime.fromisoformat(last)
            if (now - last_dt) > timedelta(minutes=timeout_min):
                session.clear()
                g.user = None
                flash("Sessão expirada por inatividade", "warning")
        except ValueError:  # pragma: no cover - formatação inesperada
            session.pop("_last_activity", None)
    session["_last_activity"] = now.isoformat()


def _usuario_bypass() -> User | None:
    admin = User.query.filter_by(cargo="admin").first()
    user = admin or User.query.first()
    if user:
        return user
    # Sem usuários: cria admin de desenvolvimento
    user = User()
    user.email = "dev@avelar.local"
    user.nome = "Dev Admin"
    user.cargo = "admin"
    user.password_hash = None
    db.session.add(user)
    db.session.commit()
    logger.info("Usuário de desenvolvimento criado para bypass de login")
    return user


@auth_bp.before_app_request
def enforce_login_globally():
    """Exige login em todas as rotas quando REQUIRE_LOGIN está ativo.

    Isentos: rotas de auth, health e static. Com DEBUG_LOGIN_BYPASS o primeiro
    admin (ou qualquer usuário) é logado automaticamente.
    """
    if not current_app.config.get("REQUIRE_LOGIN", True):
        return

    path = request.path or "/"
    if path.startswith("/auth/") or path == "/health" or path.startswith("/static/"):
        return

    if getattr(g, "user", None):
        return

    if current_app.config.get("DEBUG_LOGIN_BYPASS"):
        user = _usuario_bypass()
        if user:
            session["uid"] = user.id
            g.user = user
            return

    return redirect(url_for("auth.login", next=path))


def _render_login():
    return render_template("auth/login.html")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        password = request.form.get("password", "")
        user = User.query.filter_by(email=email).first()
        if user and user.locked_until and user.locked_until > datetime.utcnow():
            restante = int((user.locked_until - datetime.utcnow()).total_seconds() / 60) + 1
            flash(f"Usuário bloqueado. Tente novamente em ~{restante} min.", "danger")
            return _render_login()
        if not user:
            flash("Credenciais inválidas", "danger")
            return _render_login()
        if not user.check_password(password):
            user.register_failed_login(
                current_app.config.get("MAX_FAILED_LOGINS", 5),
                current_app.config.get("LOCKOUT_MINUTES", 15),
            )
            db.session.commit()
            logger.warning("Falha de login para %s", email)
            flash("Credenciais inválidas", "danger")
            return _render_login()
        if not user.is_active:
            flash("Usuário inativo", "warning")
            return _render_login()
        max_age_days = current_app.config.get("PASSWORD_MAX_AGE_DAYS")
        if max_age_days and user.last_password_change:
            if datetime.utcnow() - user.last_password_change > timedelta(days=max_age_days):
                flash("Senha expirada, peça a redefinição ao administrador", "warning")
        user.reset_failed_login()
        db.session.commit()
        session["uid"] = user.id
        flash("Sessão iniciada", "success")
        destino = request.args.get("next") or ""
        # Só aceita caminhos internos
        if not destino.startswith("/") or destino.startswith("//"):
            destino = url_for("main.dashboard")
        return redirect(destino)
    return _render_login()


@auth_bp.route("/logout", methods=["POST"])
def logout():
    session.pop("uid", None)
    flash("Sessão encerrada", "info")
    return redirect(url_for("auth.login"))
