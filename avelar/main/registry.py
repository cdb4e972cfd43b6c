"""Registro de módulos do painel.

Cada módulo tem nome, título, blueprint e página de entrada. O carregamento
é preguiçoso (importlib) e idempotente: os nomes já carregados ficam num
conjunto em app.extensions, e um módulo nunca é registrado duas vezes.
Se o módulo expõe `init_<nome>(app)`, a função é chamada após o registro.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass

from flask import Blueprint, Flask

logger = logging.getLogger(__name__)

NOME_LOJA_PADRAO = "Óticas Avelar"


@dataclass(frozen=True)
class Modulo:
    nome: str
    titulo: str
    import_path: str
    blueprint: str
    url_prefix: str
    endpoint: str
    icone: str = "fa-circle"
    menu: bool = True


MODULOS: dict[str, Modulo] = {
    m.nome: m
    for m in (
        Modulo("dashboard", "Dashboard", "avelar.main.main", "main_bp", "/dashboard", "main.dashboard", "fa-chart-line"),
        Modulo("clientes", "Clientes", "avelar.clientes.clientes", "clientes_bp", "/clientes", "clientes.listar", "fa-users"),
        Modulo("vendas", "Vendas (PDV)", "avelar.vendas.vendas", "vendas_bp", "/vendas", "vendas.pdv", "fa-cash-register"),
        Modulo("orcamentos", "Orçamentos", "avelar.orcamentos.orcamentos", "orcamentos_bp", "/orcamentos", "orcamentos.novo", "fa-file-invoice"),
        Modulo("estoque", "Estoque", "avelar.estoque.estoque", "estoque_bp", "/estoque", "estoque.listar", "fa-boxes"),
        Modulo("produtos", "Produtos", "avelar.produtos.produtos", "produtos_bp", "/produtos", "produtos.listar", "fa-glasses"),
        Modulo("financeiro", "Financeiro", "avelar.financeiro.financeiro", "financeiro_bp", "/financeiro", "financeiro.listar", "fa-dollar-sign"),
        Modulo("receitas", "Receitas", "avelar.receitas.receitas", "receitas_bp", "/receitas", "receitas.listar", "fa-prescription"),
        Modulo("laboratorio", "Laboratório", "avelar.laboratorio.laboratorio", "laboratorio_bp", "/laboratorio", "laboratorio.listar", "fa-flask"),
        Modulo("fornecedores", "Fornecedores", "avelar.fornecedores.fornecedores", "fornecedores_bp", "/fornecedores", "fornecedores.listar", "fa-truck"),
        Modulo("garantias", "Garantias", "avelar.garantias.garantias", "garantias_bp", "/garantias", "garantias.listar", "fa-shield-alt"),
        Modulo("lentes_contato", "Lentes de Contato", "avelar.lentes_contato.lentes_contato", "lentes_contato_bp", "/lentes-contato", "lentes_contato.listar", "fa-eye"),
        Modulo("consultorio", "Consultório", "avelar.consultorio.consultorio", "consultorio_bp", "/consultorio", "consultorio.listar", "fa-user-md"),
        Modulo("relatorios", "Relatórios", "avelar.relatorios.relatorios", "relatorios_bp", "/relatorios", "relatorios.index", "fa-chart-bar"),
        Modulo("cep", "CEP", "avelar.cep.cep", "cep_bp", "/cep", "cep.consultar", menu=False),
    )
}


def load_module(app: Flask, nome: str) -> Blueprint:
    """Importa e registra o blueprint do módulo `nome` (uma única vez por app)."""
    modulo = MODULOS.get(nome)
    if modulo is None:
        raise KeyError(f"Módulo desconhecido: {nome}")
    carregados: set[str] = app.extensions.setdefault("avelar_modulos", set())
    mod = importlib.import_module(modulo.import_path)
    bp: Blueprint = getattr(mod, modulo.blueprint)
    if nome in carregados:
        return bp
    app.register_blueprint(bp, url_prefix=modulo.url_prefix)
    init = getattr(mod, f"init_{nome}", None)
    if callable(init):
        init(app)
    carregados.add(nome)
    logger.debug("Módulo %s carregado (%s)", nome, modulo.url_prefix)
    return bp


def modulos_carregados(app: Flask) -> set[str]:
    return set(app.extensions.get("avelar_modulos", set()))


def navegacao() -> list[Modulo]:
    return [m for m in MODULOS.values() if m.menu]


def modulo_do_blueprint(blueprint: str | None) -> Modulo | None:
    if not blueprint:
        return None
    for modulo in MODULOS.values():
        if modulo.endpoint.split(".", 1)[0] == blueprint:
            return modulo
    return None


def titulo_pagina(blueprint: str | None, loja: str = NOME_LOJA_PADRAO) -> str:
    """'Clientes - Óticas Avelar'; fora de módulo, só o nome da loja."""
    modulo = modulo_do_blueprint(blueprint)
    if modulo is None:
        return loja
    return f"{modulo.titulo} - {loja}"
