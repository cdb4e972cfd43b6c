"""Produtos especializados: campos técnicos por categoria, margem, busca."""

from __future__ import annotations

from sqlalchemy import or_

from ..formatters import formatar_label
from .models import CATEGORIAS, Produto

CAMPOS_ESPECIFICOS: dict[str, list[str]] = {
    "armacao": ["ponte", "aro", "haste", "calibre", "dm", "material", "tipo_lente", "genero", "faixa_etaria"],
    "lente": [
        "tipo_lente",
        "tratamento",
        "fotossensivel",
        "filtro_azul",
        "indice_refracao",
        "material",
        "design",
        "protecao_uv",
    ],
    "lente_contato": [
        "tipo_lente",
        "curva_base",
        "diametro",
        "raio",
        "tipo_substituicao",
        "material",
        "conteudo_agua",
        "transmissibilidade",
        "grau_minimo",
        "grau_maximo",
        "cilindro_minimo",
        "cilindro_maximo",
        "validade_meses",
    ],
    "acessorio": ["tipo_acessorio", "compatibilidade", "material", "funcao"],
    "solucao": ["tipo_solucao", "composicao", "volume", "indicacao"],
}

# Campo 'material' é comum; os demais só existem nas categorias acima
TODOS_CAMPOS_ESPECIFICOS = sorted(
    {c for campos in CAMPOS_ESPECIFICOS.values() for c in campos} - {"material"}
)

ROTULOS = {
    "dm": "DM",
    "indice_refracao": "Índice de Refração",
    "protecao_uv": "Proteção UV",
    "conteudo_agua": "Conteúdo de Água",
    "funcao": "Função",
    "composicao": "Composição",
    "indicacao": "Indicação",
    "genero": "Gênero",
    "faixa_etaria": "Faixa Etária",
    "fotossensivel": "Fotossensível",
    "diametro": "Diâmetro",
    "tipo_substituicao": "Tipo de Substituição",
    "grau_minimo": "Grau Mínimo",
    "grau_maximo": "Grau Máximo",
    "cilindro_minimo": "Cilindro Mínimo",
    "cilindro_maximo": "Cilindro Máximo",
    "validade_meses": "Validade (meses)",
}


def rotulo_campo(campo: str) -> str:
    return ROTULOS.get(campo, formatar_label(campo))


def categoria_label(categoria: str | None) -> str:
    return dict(CATEGORIAS).get(categoria or "", formatar_label(categoria))


def campos_da_categoria(categoria: str | None) -> list[str]:
    return list(CAMPOS_ESPECIFICOS.get(categoria or "", []))


def limpar_campos_fora_da_categoria(produto: Produto) -> None:
    """Zera campos técnicos que não pertencem à categoria atual."""
    permitidos = set(campos_da_categoria(produto.categoria))
    for campo in TODOS_CAMPOS_ESPECIFICOS:
        if campo not in permitidos:
            setattr(produto, campo, None)


def especificacoes(produto: Produto) -> list[tuple[str, object]]:
    """Pares (rótulo, valor) dos campos técnicos preenchidos."""
    itens = []
    for campo in campos_da_categoria(produto.categoria):
        valor = getattr(produto, campo, None)
        if valor not in (None, ""):
            itens.append((rotulo_campo(campo), valor))
    return itens


def margem(produto: Produto) -> tuple[float, float]:
    """Retorna (margem em R$, margem % sobre o preço de venda)."""
    venda = float(produto.preco_venda or 0)
    custo = float(produto.preco_custo or 0)
    valor = round(venda - custo, 2)
    pct = round(valor / venda * 100, 1) if venda else 0.0
    return valor, pct


def buscar_produtos(
    termo: str | None,
    *,
    somente_com_estoque: bool = False,
    categoria: str | None = None,
    limite: int = 20,
) -> list[Produto]:
    """Produtos ativos cujo nome, SKU ou marca contém o termo."""
    query = Produto.query.filter(Produto.ativo.is_(True))
    if somente_com_estoque:
        query = query.filter(Produto.estoque_atual > 0)
    if categoria:
        query = query.filter(Produto.categoria == categoria)
    if termo:
        like = f"%{termo.strip()}%"
        query = query.filter(or_(Produto.nome.ilike(like), Produto.sku.ilike(like), Produto.marca.ilike(like)))
    return query.order_by(Produto.nome).limit(limite).all()


def sku_em_uso(sku: str, *, exceto_id: int | None = None) -> bool:
    existente = Produto.query.filter_by(sku=sku).first()
    return existente is not None and existente.id != exceto_id
