"""Fluxo de produção das ordens de serviço e relatório de produtividade."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from .. import db
from ..utils_datas import inicio_do_dia, inicio_mes
from .models import ETAPAS, OrdemServico

CODIGOS_ETAPAS = [codigo for codigo, _ in ETAPAS]
LIMITE_LISTA = 50


def proximo_numero_os() -> str:
    """Número sequencial de 4 dígitos: '0001', '0002'..."""
    total = db.session.query(db.func.count(OrdemServico.id)).scalar() or 0
    return str(total + 1).zfill(4)


def proxima_etapa(status: str) -> str | None:
    if status not in CODIGOS_ETAPAS:
        raise ValueError(f"Etapa desconhecida: {status}")
    indice = CODIGOS_ETAPAS.index(status)
    if indice + 1 >= len(CODIGOS_ETAPAS):
        return None
    return CODIGOS_ETAPAS[indice + 1]


def avancar_etapa(ordem: OrdemServico, *, agora: datetime | None = None) -> str:
    """Move a OS para a etapa seguinte e retorna a nova etapa."""
    seguinte = proxima_etapa(ordem.status)
    if seguinte is None:
        raise ValueError("Esta OS já está na etapa final!")
    ordem.status = seguinte
    ordem.data_ultima_atualizacao = agora or datetime.now()
    return seguinte


def status_etapas(status_atual: str) -> list[dict]:
    """Cada etapa marcada como concluida, atual ou pendente."""
    atual = CODIGOS_ETAPAS.index(status_atual) if status_atual in CODIGOS_ETAPAS else 0
    resultado = []
    for indice, (codigo, rotulo) in enumerate(ETAPAS):
        if indice < atual:
            situacao = "concluida"
        elif indice == atual:
            situacao = "atual"
        else:
            situacao = "pendente"
        resultado.append({"codigo": codigo, "rotulo": rotulo, "situacao": situacao})
    return resultado


def progresso(status: str) -> int:
    """Percentual de etapas concluídas (pronto = 100)."""
    if status not in CODIGOS_ETAPAS:
        return 0
    return round(CODIGOS_ETAPAS.index(status) / (len(CODIGOS_ETAPAS) - 1) * 100)


def formatar_duracao(duracao: timedelta | None) -> str:
    if duracao is None:
        return "N/A"
    horas_totais = int(duracao.total_seconds() // 3600)
    return f"{horas_totais // 24}d {horas_totais % 24}h"


@dataclass
class Produtividade:
    total_ordens: int = 0
    ordens_mes: int = 0
    taxa_conclusao: float = 0.0
    tempo_medio: str = "N/A"
    ordens_atrasadas: int = 0
    eficiencia: float = 0.0
    recomendacoes: list[str] = field(default_factory=list)


def calcular_produtividade(ordens, *, hoje: date | None = None) -> Produtividade:
    """Métricas sobre as ordens informadas (normalmente as do mês).

    - taxa de conclusão: % prontas
    - tempo médio: criação até a última atualização das prontas
    - eficiência: % prontas dentro do prazo (sem prazo conta como no prazo)
    """
    hoje = hoje or date.today()
    ordens = list(ordens)
    rel = Produtividade(total_ordens=len(ordens))
    ini = inicio_do_dia(inicio_mes(hoje))
    rel.ordens_mes = sum(1 for o in ordens if o.created_at and o.created_at >= ini)
    prontas = [o for o in ordens if o.status == "pronto"]
    rel.ordens_atrasadas = sum(1 for o in ordens if o.atrasada(hoje))
    if ordens:
        rel.taxa_conclusao = round(len(prontas) / len(ordens) * 100, 1)
        no_prazo = [
            o
            for o in prontas
            if not o.prazo_entrega
            or not o.data_ultima_atualizacao
            or o.data_ultima_atualizacao.date() <= o.prazo_entrega
        ]
        rel.eficiencia = round(len(no_prazo) / len(ordens) * 100, 1)
    duracoes = [
        o.data_ultima_atualizacao - o.created_at
        for o in prontas
        if o.data_ultima_atualizacao and o.created_at
    ]
    if duracoes:
        rel.tempo_medio = formatar_duracao(sum(duracoes, timedelta()) / len(duracoes))

    rel.recomendacoes = recomendacoes(rel) if ordens else ["Nenhuma OS no período."]
    return rel


def recomendacoes(rel: Produtividade) -> list[str]:
    resultado = []
    if rel.ordens_atrasadas > 0:
        resultado.append("Revisar prazos das OS atrasadas")
    if rel.taxa_conclusao < 80:
        resultado.append("Melhorar eficiência na conclusão")
    if rel.eficiencia < 70:
        resultado.append("Otimizar processos de produção")
    if rel.ordens_atrasadas == 0 and rel.taxa_conclusao > 90:
        resultado.append("Excelente performance!")
    return resultado


def ordens_do_mes(hoje: date | None = None) -> list[OrdemServico]:
    ini = inicio_do_dia(inicio_mes(hoje or date.today()))
    return OrdemServico.query.filter(OrdemServico.created_at >= ini).all()


def listar_ordens(status: str | None = None) -> list[OrdemServico]:
    query = OrdemServico.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(OrdemServico.created_at.desc(), OrdemServico.id.desc()).limit(LIMITE_LISTA).all()
