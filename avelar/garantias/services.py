from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from .. import db
from ..utils_datas import inicio_mes, somar_meses
from .models import Garantia, OcorrenciaGarantia

# Tipos aceitos por tipo de produto
GARANTIAS_POR_PRODUTO = {
    "armacao": ("6_meses", "12_meses", "vitalicia"),
    "lente": ("6_meses", "12_meses", "24_meses"),
    "servico": ("30_dias", "90_dias"),
    "lente_contato": ("fabricante",),
}

DURACAO_MESES = {"6_meses": 6, "12_meses": 12, "24_meses": 24, "fabricante": 12}
DURACAO_DIAS = {"30_dias": 30, "90_dias": 90}

TERMOS_PADRAO = (
    "A garantia cobre defeitos de fabricação e ajustes dentro do período "
    "indicado, mediante apresentação deste comprovante. Não cobre danos por "
    "mau uso, quedas ou acidentes, salvo quando a cobertura de quebras "
    "estiver marcada."
)


def validar_tipo(tipo_produto: str, tipo_garantia: str) -> None:
    if tipo_produto not in GARANTIAS_POR_PRODUTO:
        raise ValueError("Selecione o tipo de produto!")
    if tipo_garantia not in GARANTIAS_POR_PRODUTO[tipo_produto]:
        raise ValueError("Tipo de garantia não disponível para este produto")


def duracao_padrao(tipo_garantia: str) -> int | None:
    return DURACAO_MESES.get(tipo_garantia)


def calcular_data_fim(data_inicio: date, tipo_garantia: str, duracao_meses: int | None = None) -> date | None:
    """Fim da cobertura; None para garantia vitalícia.

    `duracao_meses` informado explicitamente prevalece sobre o padrão do tipo.
    """
    if tipo_garantia == "vitalicia":
        return None
    if tipo_garantia in DURACAO_DIAS and not duracao_meses:
        return data_inicio + timedelta(days=DURACAO_DIAS[tipo_garantia])
    meses = duracao_meses or DURACAO_MESES.get(tipo_garantia)
    if not meses:
        raise ValueError("Informe a duração da garantia")
    return somar_meses(data_inicio, meses)


def estender_garantia(garantia: Garantia, meses: int) -> date:
    if not meses or meses < 1:
        raise ValueError("Informe um número de meses válido!")
    if garantia.status == "cancelada":
        raise ValueError("Garantia cancelada não pode ser estendida")
    if garantia.data_fim is None:
        raise ValueError("Garantia vitalícia não pode ser estendida")
    garantia.data_fim = somar_meses(garantia.data_fim, meses)
    garantia.duracao_meses = (garantia.duracao_meses or 0) + meses
    return garantia.data_fim


def cancelar_garantia(garantia: Garantia) -> None:
    if garantia.status == "cancelada":
        raise ValueError("Garantia já está cancelada")
    garantia.status = "cancelada"


def registrar_ocorrencia(garantia: Garantia, *, tipo: str, descricao: str,
                         resolucao: str | None = None, data: date | None = None) -> OcorrenciaGarantia:
    """Troca consome a garantia (status utilizada)."""
    if garantia.status_efetivo() != "ativa":
        raise ValueError("Ocorrências só podem ser registradas em garantias ativas")
    if not (descricao or "").strip():
        raise ValueError("Descreva a ocorrência")
    ocorrencia = OcorrenciaGarantia(
        tipo=tipo,
        descricao=descricao.strip(),
        resolucao=(resolucao or "").strip() or None,
        data=data or date.today(),
    )
    garantia.ocorrencias.append(ocorrencia)
    if tipo == "troca":
        garantia.status = "utilizada"
    return ocorrencia


@dataclass
class EstatisticasGarantia:
    total: int = 0
    ativas: int = 0
    vencidas: int = 0
    ocorrencias_mes: int = 0


def estatisticas(hoje: date | None = None) -> EstatisticasGarantia:
    hoje = hoje or date.today()
    garantias = Garantia.query.all()
    stats = EstatisticasGarantia(total=len(garantias))
    for g in garantias:
        efetivo = g.status_efetivo(hoje)
        if efetivo == "ativa":
            stats.ativas += 1
        elif efetivo == "vencida":
            stats.vencidas += 1
    stats.ocorrencias_mes = (
        db.session.query(db.func.count(OcorrenciaGarantia.id))
        .filter(OcorrenciaGarantia.data >= inicio_mes(hoje))
        .scalar()
        or 0
    )
    return stats


def listar_garantias(status: str | None = None, hoje: date | None = None) -> list[Garantia]:
    hoje = hoje or date.today()
    garantias = Garantia.query.order_by(Garantia.data_inicio.desc(), Garantia.id.desc()).all()
    if status:
        garantias = [g for g in garantias if g.status_efetivo(hoje) == status]
    return garantias
