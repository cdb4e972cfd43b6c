"""Consulta de endereço por CEP (ViaCEP) usada no cadastro de fornecedores."""

import logging
import re
from typing import Any

import requests
from flask import Blueprint, current_app, jsonify
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..auth.auth import require_roles

cep_bp = Blueprint("cep", __name__)

logger = logging.getLogger(__name__)

# Sessão HTTP do módulo (criada sob demanda em _session())
__SESSION: requests.Session | None = None


class CepInvalido(ValueError):
    pass


class CepNaoEncontrado(LookupError):
    pass


def _session() -> requests.Session:
    global __SESSION
    if isinstance(__SESSION, requests.Session):
        return __SESSION
    s = requests.Session()
    retry = Retry(total=2, backoff_factor=0.3, status_forcelist=(429, 500, 502, 503, 504))
    adapter = HTTPAdapter(max_retries=retry, pool_connections=2, pool_maxsize=4)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    __SESSION = s
    return s


def normalizar_cep(cep: str | None) -> str:
    """Somente dígitos; exige exatamente 8."""
    digitos = re.sub(r"\D", "", cep or "")
    if len(digitos) != 8:
        raise CepInvalido("CEP deve ter 8 dígitos")
    return digitos


def buscar_cep(cep: str) -> dict[str, Any]:
    """Consulta o serviço de CEP e devolve os campos do formulário.

    Levanta CepInvalido, CepNaoEncontrado ou requests.RequestException.
    """
    digitos = normalizar_cep(cep)
    url = current_app.config["CEP_API_URL"].format(cep=digitos)
    resp = _session().get(
        url,
        headers={"Accept": "application/json"},
        timeout=current_app.config.get("CEP_TIMEOUT", 5),
    )
    resp.raise_for_status()
    dados = resp.json()
    # ViaCEP responde 200 com {"erro": true} para CEP inexistente
    if not isinstance(dados, dict) or dados.get("erro"):
        raise CepNaoEncontrado("CEP não encontrado")
    return {
        "cep": f"{digitos[:5]}-{digitos[5:]}",
        "endereco": dados.get("logradouro") or "",
        "bairro": dados.get("bairro") or "",
        "cidade": dados.get("localidade") or "",
        "estado": dados.get("uf") or "",
    }


@cep_bp.get("/<cep>", endpoint="consultar")
@require_roles()
def consultar(cep: str):
    try:
        return jsonify(buscar_cep(cep))
    except CepInvalido as exc:
        return jsonify({"erro": str(exc)}), 400
    except CepNaoEncontrado as exc:
        return jsonify({"erro": str(exc)}), 404
    except requests.RequestException as exc:
        logger.warning("Falha ao consultar CEP %s: %s", cep, exc)
        return jsonify({"erro": "Serviço de CEP indisponível"}), 502
