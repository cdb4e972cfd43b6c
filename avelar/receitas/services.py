"""Regras de receitas: formatação de graus, renovação e importação de aparelhos."""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta

from ..formatters import data_br
from .models import Receita

LIMITE_LISTA = 100
VALIDADE_PADRAO_ANOS = 1

CAMPOS_CLINICOS = [
    f"{olho}_{campo}"
    for olho in ("od", "oe")
    for campo in ("esferico", "cilindrico", "eixo", "adicao", "dp", "dnp", "altura", "prisma", "base")
]

CAMPOS_COPIADOS = CAMPOS_CLINICOS + [
    "cliente_id",
    "medico_nome",
    "medico_crm",
    "curva_corneana_od",
    "curva_corneana_oe",
    "idade",
    "ocupacao",
    "uso_previo",
    "historico_ocular",
    "tipo_lente",
    "tratamento",
    "material_lente",
]

_REFRACAO = ["od_esferico", "od_cilindrico", "od_eixo", "oe_esferico", "oe_cilindrico", "oe_eixo"]

APARELHOS: dict[str, tuple[str, list[str]]] = {
    "autorrefrator": ("Autorrefrator", _REFRACAO + ["od_dnp", "oe_dnp"]),
    "lensometro": ("Lensômetro", list(_REFRACAO)),
    "ceratometro": ("Ceratômetro", ["curva_corneana_od", "curva_corneana_oe"]),
    "manual": ("Inserção Manual", _REFRACAO + ["od_adicao", "oe_adicao", "od_dnp", "oe_dnp"]),
}

_CAMPOS_TEXTO = {"curva_corneana_od", "curva_corneana_oe"}


def formatar_grau(grau) -> str:
    """Grau esférico/adição: vazio ou zero -> '-', positivo com sinal '+'."""
    if not grau:
        return "-"
    valor = float(grau)
    return f"+{valor:.2f}" if valor > 0 else f"{valor:.2f}"


def formatar_cilindrico(cilindrico) -> str:
    if not cilindrico:
        return ""
    valor = float(cilindrico)
    return f"+{valor:.2f}" if valor > 0 else f"{valor:.2f}"


def calcular_nova_validade(referencia: date | None = None, anos: int = VALIDADE_PADRAO_ANOS) -> date:
    return (referencia or date.today()) + relativedelta(years=anos)


def dados_renovacao(original: Receita, *, hoje: date | None = None) -> dict:
    """Dados para uma nova receita a partir de `original`.

    Data de hoje, validade de um ano e observação citando a receita anterior.
    """
    hoje = hoje or date.today()
    dados = {campo: getattr(original, campo) for campo in CAMPOS_COPIADOS}
    dados["data_receita"] = hoje
    dados["data_validade"] = calcular_nova_validade(hoje)
    obs = f"Renovação da receita anterior de {data_br(original.data_receita)}."
    if original.observacoes:
        obs = f"{obs} {original.observacoes}"
    dados["observacoes"] = obs
    return dados


def dados_importados(tipo_aparelho: str | None, valores) -> dict:
    """Converte as leituras de um aparelho em campos da receita.

    `valores` é um mapeamento campo -> texto (ex.: request.form). Campos
    vazios são ignorados; vírgula decimal é aceita.
    """
    if not tipo_aparelho or tipo_aparelho not in APARELHOS:
        raise ValueError("Selecione o tipo de aparelho!")
    _, campos = APARELHOS[tipo_aparelho]
    dados: dict = {}
    for campo in campos:
        bruto = (valores.get(campo) or "").strip()
        if not bruto:
            continue
        if campo in _CAMPOS_TEXTO:
            dados[campo] = bruto
            continue
        try:
            numero = float(bruto.replace(",", "."))
        except ValueError:
            raise ValueError(f"Valor inválido para {campo}: {bruto}") from None
        dados[campo] = int(numero) if campo.endswith("_eixo") else numero
    return dados


def listar_receitas(cliente_id: int | None = None) -> list[Receita]:
    query = Receita.query
    if cliente_id:
        query = query.filter_by(cliente_id=cliente_id)
    return query.order_by(Receita.created_at.desc(), Receita.id.desc()).limit(LIMITE_LISTA).all()
