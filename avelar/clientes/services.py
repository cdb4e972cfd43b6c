"""Regras do cadastro de clientes (CPF, busca)."""

from __future__ import annotations

from sqlalchemy import func, or_

from .models import Cliente

LIMITE_LISTA = 100
LIMITE_BUSCA = 50


def normalizar_cpf(raw: str | None, *, validar: bool = True) -> str | None:
    """Normaliza CPF para XXX.XXX.XXX-YY e opcionalmente valida.

    Retorna None se a entrada for vazia. Com validar=True, CPF com tamanho
    errado, dígitos repetidos ou dígito verificador incorreto levanta
    ValueError.
    """
    if not raw:
        return None
    digits = "".join(ch for ch in raw if ch.isdigit())
    if len(digits) != 11:
        if validar:
            raise ValueError("CPF deve conter 11 dígitos")
        return digits
    if validar:
        if digits == digits[0] * 11:
            raise ValueError("CPF inválido")
        for tamanho in (9, 10):
            soma = sum(int(digits[i]) * (tamanho + 1 - i) for i in range(tamanho))
            dv = (soma * 10) % 11
            if dv == 10:
                dv = 0
            if dv != int(digits[tamanho]):
                raise ValueError("CPF inválido")
    return f"{digits[0:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:11]}"


def cpf_em_uso(cpf: str, *, exceto_id: int | None = None) -> bool:
    existente = Cliente.query.filter_by(cpf=cpf).first()
    return existente is not None and existente.id != exceto_id


def _cpf_somente_digitos():
    return func.replace(func.replace(Cliente.cpf, ".", ""), "-", "")


def listar_clientes(busca: str | None = None) -> list[Cliente]:
    """Lista por nome; com busca filtra nome, CPF ou email (contém, sem caixa).

    CPF é gravado formatado, então termos só com dígitos e pontuação também
    são comparados contra os dígitos do CPF ('52998224725' acha '529.982.247-25').
    """
    query = Cliente.query
    if busca:
        busca = busca.strip()
        like = f"%{busca}%"
        condicoes = [Cliente.nome.ilike(like), Cliente.cpf.ilike(like), Cliente.email.ilike(like)]
        digitos = "".join(ch for ch in busca if ch.isdigit())
        if digitos and all(ch.isdigit() or ch in ".-/ " for ch in busca):
            condicoes.append(_cpf_somente_digitos().like(f"%{digitos}%"))
        query = query.filter(or_(*condicoes))
        return query.order_by(Cliente.nome).limit(LIMITE_BUSCA).all()
    return query.order_by(Cliente.nome).limit(LIMITE_LISTA).all()


def opcoes_clientes() -> list[tuple[int, str]]:
    """Choices para SelectField (0 = sem cliente)."""
    return [(0, "Selecione...")] + [(c.id, c.nome) for c in Cliente.query.order_by(Cliente.nome).all()]
