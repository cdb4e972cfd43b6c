import pytest

from avelar.clientes.services import normalizar_cpf


def test_normalizar_cpf_formata_e_valida():
    assert normalizar_cpf("52998224725") == "529.982.247-25"
    assert normalizar_cpf("529.982.247-25") == "529.982.247-25"
    assert normalizar_cpf("") is None
    with pytest.raises(ValueError, match="11 dígitos"):
        normalizar_cpf("123")
    with pytest.raises(ValueError, match="CPF inválido"):
        normalizar_cpf("111.111.111-11")
    with pytest.raises(ValueError, match="CPF inválido"):
        normalizar_cpf("529.982.247-26")


def test_cadastrar_cliente_e_cpf_duplicado(client, app):
    dados = {"nome": "Ana Lima", "cpf": "52998224725", "telefone": "(11) 99999-0000"}
    resp = client.post("/clientes/novo", data=dados, follow_redirects=True)
    assert "Cliente salvo com sucesso!".encode() in resp.data
    assert "Ana Lima".encode() in resp.data

    resp = client.post("/clientes/novo", data={"nome": "Outra", "cpf": "529.982.247-25"}, follow_redirects=True)
    assert "CPF já cadastrado".encode() in resp.data

    with app.app_context():
        from avelar.clientes.models import Cliente

        assert Cliente.query.count() == 1
        assert Cliente.query.one().cpf == "529.982.247-25"


def test_busca_por_nome(client, app, make_cliente):
    with app.app_context():
        make_cliente("Carlos Pereira")
        make_cliente("Beatriz Rocha")
    resp = client.get("/clientes/?busca=carl")
    assert resp.status_code == 200
    assert b"Carlos Pereira" in resp.data
    assert b"Beatriz Rocha" not in resp.data


def test_busca_htmx_devolve_apenas_tabela(client, app, make_cliente):
    with app.app_context():
        make_cliente("Carlos Pereira")
    resp = client.get("/clientes/?busca=Carlos", headers={"HX-Request": "true"})
    assert resp.status_code == 200
    assert b"Carlos Pereira" in resp.data
    assert b"<html" not in resp.data.lower()


def test_visualizar_cliente_inexistente(client):
    assert client.get("/clientes/999").status_code == 404


def test_busca_por_cpf_sem_formatacao(client, app, make_cliente):
    client.post("/clientes/novo", data={"nome": "Ana Lima", "cpf": "52998224725"}, follow_redirects=True)
    with app.app_context():
        make_cliente("Beatriz Rocha", cpf="111.444.777-35")

    for termo in ("52998224725", "529.982.247-25", "98224", "982.247"):
        resp = client.get("/clientes/", query_string={"busca": termo})
        assert b"Ana Lima" in resp.data, termo
        assert b"Beatriz Rocha" not in resp.data, termo


def test_busca_por_nome_nao_compara_digitos_do_cpf(app, make_cliente):
    with app.app_context():
        from avelar.clientes.services import listar_clientes

        make_cliente("Ana Lima", cpf="529.982.247-25")
        assert listar_clientes("ana 529") == []
        assert [c.nome for c in listar_clientes("529 982")] == ["Ana Lima"]
