"""Formatação para exibição (moeda, datas, rótulos) usada nos templates."""

from __future__ import annotations

from datetime import date, datetime


def moeda(valor) -> str:
    """1234.5 -> 'R$ 1.234,50'. None vira 'R$ 0,00'."""
    numero = float(valor or 0)
    texto = f"{abs(numero):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    sinal = "-" if numero < 0 else ""
    return f"{sinal}R$ {texto}"


def data_br(valor) -> str:
    if not valor:
        return "-"
    if isinstance(valor, str):
        try:
            valor = date.fromisoformat(valor[:10])
        except ValueError:
            return valor
    return valor.strftime("%d/%m/%Y")


def data_hora_br(valor: datetime | None) -> str:
    if not valor:
        return "-"
    return valor.strftime("%d/%m/%Y %H:%M")


def formatar_label(campo: str | None) -> str:
    """'curva_base' -> 'Curva Base'."""
    if not campo:
        return ""
    return " ".join(parte.capitalize() for parte in campo.split("_") if parte)


def percentual(valor) -> str:
    return f"{float(valor or 0):.1f}%".replace(".", ",")


def register_filters(app) -> None:
    app.add_template_filter(moeda, "moeda")
    app.add_template_filter(data_br, "data_br")
    app.add_template_filter(data_hora_br, "data_hora_br")
    app.add_template_filter(formatar_label, "label")
    app.add_template_filter(percentual, "percentual")
