from flask import Blueprint, redirect, render_template, url_for

core_bp = Blueprint(
    "core",
    __name__,
    template_folder=".",
)


@core_bp.route("/")
def index():
    return redirect(url_for("main.dashboard"))


@core_bp.app_errorhandler(404)
def nao_encontrado(_exc):
    return render_template("core/404.html"), 404
