from avelar import db


def _criar_usuario(app, email="vendas@avelar.local", cargo="vendedor", senha="segredo123"):
    with app.app_context():
        from avelar.auth.models import User

        u = User()
        u.email = email
        u.nome = "Usuário Teste"
        u.cargo = cargo
        u.set_password(senha)
        db.session.add(u)
        db.session.commit()
        return u.id


def test_login_exigido_sem_bypass(client, app):
    app.config["DEBUG_LOGIN_BYPASS"] = False
    resp = client.get("/clientes/")
    assert resp.status_code == 302
    assert "/auth/login" in resp.headers["Location"]


def test_login_e_redirecionamento(client, app):
    app.config["DEBUG_LOGIN_BYPASS"] = False
    _criar_usuario(app)
    resp = client.post(
        "/auth/login?next=/clientes/",
        data={"email": "VENDAS@avelar.local", "password": "segredo123"},
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/clientes/")

    # destino externo é ignorado
    resp = client.post(
        "/auth/login?next=//evil.example",
        data={"email": "vendas@avelar.local", "password": "segredo123"},
    )
    assert resp.headers["Location"].endswith("/dashboard/")


def test_bloqueio_apos_tentativas(client, app):
    app.config["DEBUG_LOGIN_BYPASS"] = False
    app.config["MAX_FAILED_LOGINS"] = 3
    uid = _criar_usuario(app)
    for _ in range(3):
        resp = client.post("/auth/login", data={"email": "vendas@avelar.local", "password": "errada"})
        assert b"Credenciais" in resp.data

    resp = client.post("/auth/login", data={"email": "vendas@avelar.local", "password": "segredo123"})
    assert "Usuário bloqueado".encode() in resp.data

    with app.app_context():
        from avelar.auth.models import User

        assert db.session.get(User, uid).locked_until is not None


def test_cargo_sem_permissao(client, app):
    app.config["DEBUG_LOGIN_BYPASS"] = False
    uid = _criar_usuario(app, cargo="laboratorio")
    with client.session_transaction() as sess:
        sess["uid"] = uid
    resp = client.get("/financeiro/", follow_redirects=True)
    assert "Sem permissão".encode() in resp.data

    # grupo laboratorio_all inclui o cargo
    assert client.get("/laboratorio/").status_code == 200


def test_bypass_cria_admin_de_desenvolvimento(client, app):
    assert client.get("/users/").status_code == 200
    with app.app_context():
        from avelar.auth.models import User

        dev = User.query.one()
        assert dev.email == "dev@avelar.local"
        assert dev.cargo == "admin"


def test_politica_de_senha(app):
    app.config["ENFORCE_PASSWORD_POLICY"] = True
    with app.app_context():
        from avelar.auth.models import User

        u = User(email="ana@avelar.local", nome="Ana")
        for senha, erro in (("a1", "curta"), ("ana12345", "usuário"), ("abcdefgh", "dígito")):
            try:
                u.set_password(senha)
            except ValueError as exc:
                assert erro in str(exc)
            else:  # pragma: no cover
                raise AssertionError(senha)
        u.set_password("Lentes2024")
        assert u.check_password("Lentes2024")
