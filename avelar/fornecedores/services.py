from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .models import CATEGORIAS, AvaliacaoFornecedor, Fornecedor

MIN_AVALIACOES_MELHOR = 3
MIN_AVALIACOES_PROBLEMA = 2
NOTA_PROBLEMA = 3


def media_avaliacoes(notas) -> float:
    notas = [n for n in notas if n is not None]
    if not notas:
        return 0.0
    return sum(notas) / len(notas)


def estrelas(nota) -> list[str]:
    """Cinco posições: 'cheia', 'meia' ou 'vazia'.

    >>> estrelas(3.5)
    ['cheia', 'cheia', 'cheia', 'meia', 'vazia']
    """
    nota = float(nota or 0)
    inteiras = int(nota)
    tem_meia = nota - inteiras > 0
    resultado = []
    for posicao in range(1, 6):
        if posicao <= inteiras:
            resultado.append("cheia")
        elif tem_meia and posicao == inteiras + 1:
            resultado.append("meia")
        else:
            resultado.append("vazia")
    return resultado


def estrelas_html(nota) -> str:
    icones = {"cheia": "fas fa-star", "meia": "fas fa-star-half-alt", "vazia": "far fa-star"}
    return "".join(f'<i class="{icones[e]} text-warning"></i>' for e in estrelas(nota))


def listar_fornecedores(categoria: str | None = None) -> list[Fornecedor]:
    query = Fornecedor.query
    if categoria:
        query = query.filter_by(categoria=categoria)
    return query.order_by(Fornecedor.nome).all()


def cnpj_em_uso(cnpj: str | None, ignorar_id: int | None = None) -> bool:
    if not cnpj:
        return False
    query = Fornecedor.query.filter(Fornecedor.cnpj == cnpj)
    if ignorar_id:
        query = query.filter(Fornecedor.id != ignorar_id)
    return query.first() is not None


def registrar_avaliacao(fornecedor: Fornecedor, *, nota, criterio_qualidade=None,
                        criterio_entrega=None, criterio_atendimento=None,
                        comentario=None) -> AvaliacaoFornecedor:
    if not nota:
        raise ValueError("Por favor, selecione uma avaliação geral!")
    nota = int(nota)
    if not 1 <= nota <= 5:
        raise ValueError("A avaliação deve ser entre 1 e 5")
    avaliacao = AvaliacaoFornecedor(
        nota=nota,
        criterio_qualidade=criterio_qualidade or None,
        criterio_entrega=criterio_entrega or None,
        criterio_atendimento=criterio_atendimento or None,
        comentario=(comentario or "").strip() or None,
    )
    fornecedor.avaliacoes.append(avaliacao)
    return avaliacao


@dataclass
class RelatorioFornecedores:
    total: int = 0
    ativos: int = 0
    media_geral: float = 0.0
    melhor: Fornecedor | None = None
    melhor_media: float = 0.0
    com_problemas: list[tuple[Fornecedor, float]] = field(default_factory=list)
    por_categoria: list[tuple[str, int]] = field(default_factory=list)


def gerar_relatorio(fornecedores) -> RelatorioFornecedores:
    """Consolida avaliações.

    Melhor fornecedor exige ao menos 3 avaliações; fornecedores com
    problemas têm média abaixo de 3 com pelo menos 2 avaliações.
    """
    fornecedores = list(fornecedores)
    rel = RelatorioFornecedores(total=len(fornecedores))
    rel.ativos = sum(1 for f in fornecedores if f.ativo)
    todas_notas = [a.nota for f in fornecedores for a in f.avaliacoes]
    rel.media_geral = round(media_avaliacoes(todas_notas), 2)

    for f in fornecedores:
        qtd = len(f.avaliacoes)
        media = f.media_avaliacao
        if qtd >= MIN_AVALIACOES_MELHOR and media > rel.melhor_media:
            rel.melhor, rel.melhor_media = f, media
        if qtd >= MIN_AVALIACOES_PROBLEMA and media < NOTA_PROBLEMA:
            rel.com_problemas.append((f, media))

    contagem = Counter(f.categoria for f in fornecedores)
    rotulos = dict(CATEGORIAS)
    rel.por_categoria = [(rotulos.get(cat, cat), qtd) for cat, qtd in contagem.most_common()]
    return rel
