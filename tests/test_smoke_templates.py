import pytest


@pytest.mark.parametrize(
    "path",
    [
        "/auth/login",
        "/dashboard/",
        "/dashboard/cadastros",
        "/clientes/",
        "/clientes/novo",
        "/produtos/",
        "/produtos/novo",
        "/estoque/",
        "/estoque/movimentacoes",
        "/estoque/ajuste",
        "/vendas/",
        "/vendas/historico",
        "/orcamentos/",
        "/orcamentos/lista",
        "/financeiro/",
        "/financeiro/novo",
        "/receitas/",
        "/receitas/nova",
        "/receitas/importar",
        "/laboratorio/",
        "/laboratorio/nova",
        "/laboratorio/relatorio",
        "/fornecedores/",
        "/fornecedores/novo",
        "/fornecedores/relatorio",
        "/garantias/",
        "/garantias/nova",
        "/lentes-contato/",
        "/lentes-contato/controles/novo",
        "/lentes-contato/lotes/novo",
        "/lentes-contato/relatorio",
        "/consultorio/",
        "/consultorio/novo",
        "/consultorio/calendario",
        "/consultorio/profissionais",
        "/consultorio/profissionais/novo",
        "/relatorios/",
        "/users/",
    ],
)
def test_routes_render_ok(client, path):
    resp = client.get(path)
    assert resp.status_code == 200, f"GET {path} should render 200, got {resp.status_code}"
    # basic HTML sanity
    assert b"<!doctype html" in resp.data.lower() or b"<html" in resp.data.lower()


def test_root_redirects_to_dashboard(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard/")


def test_unknown_page_renders_404(client):
    resp = client.get("/nao-existe")
    assert resp.status_code == 404
