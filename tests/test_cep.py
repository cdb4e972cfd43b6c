import requests

import avelar.cep.cep as cep_mod


class FakeResponse:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, resposta=None, erro=None):
        self.resposta = resposta
        self.erro = erro
        self.urls = []

    def get(self, url, headers=None, timeout=None):
        self.urls.append(url)
        if self.erro:
            raise self.erro
        return self.resposta


def _usar(monkeypatch, sessao):
    monkeypatch.setattr(cep_mod, "_session", lambda: sessao)
    return sessao


def test_consulta_cep_ok(client, monkeypatch):
    payload = {
        "cep": "01001-000",
        "logradouro": "Praça da Sé",
        "bairro": "Sé",
        "localidade": "São Paulo",
        "uf": "SP",
    }
    sessao = _usar(monkeypatch, FakeSession(FakeResponse(payload)))
    resp = client.get("/cep/01001-000")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "cep": "01001-000",
        "endereco": "Praça da Sé",
        "bairro": "Sé",
        "cidade": "São Paulo",
        "estado": "SP",
    }
    assert sessao.urls == ["https://cep.test/ws/01001000/json/"]


def test_cep_invalido_nao_consulta(client, monkeypatch):
    sessao = _usar(monkeypatch, FakeSession(FakeResponse({})))
    resp = client.get("/cep/123")
    assert resp.status_code == 400
    assert resp.get_json()["erro"] == "CEP deve ter 8 dígitos"
    assert sessao.urls == []


def test_cep_nao_encontrado(client, monkeypatch):
    _usar(monkeypatch, FakeSession(FakeResponse({"erro": True})))
    resp = client.get("/cep/99999999")
    assert resp.status_code == 404
    assert resp.get_json()["erro"] == "CEP não encontrado"


def test_servico_indisponivel(client, monkeypatch):
    _usar(monkeypatch, FakeSession(erro=requests.ConnectionError("sem rede")))
    resp = client.get("/cep/01001000")
    assert resp.status_code == 502
    assert resp.get_json() == {"erro": "Serviço de CEP indisponível"}

    _usar(monkeypatch, FakeSession(FakeResponse({}, status=500)))
    assert client.get("/cep/01001000").status_code == 502


def test_normalizar_cep():
    assert cep_mod.normalizar_cep(" 01001-000 ") == "01001000"
