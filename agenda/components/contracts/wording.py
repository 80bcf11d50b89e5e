"""Brazilian Portuguese money and date wording for contracts."""

from datetime import datetime

MONTHS = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

_UNITS = ("", "um", "dois", "três", "quatro", "cinco", "seis", "sete", "oito", "nove")
_TEENS = ("dez", "onze", "doze", "treze", "catorze", "quinze", "dezesseis", "dezessete", "dezoito", "dezenove")
_TENS = ("", "", "vinte", "trinta", "quarenta", "cinquenta", "sessenta", "setenta", "oitenta", "noventa")
_HUNDREDS = (
    "",
    "cento",
    "duzentos",
    "trezentos",
    "quatrocentos",
    "quinhentos",
    "seiscentos",
    "setecentos",
    "oitocentos",
    "novecentos",
)


def _below_thousand(n: int) -> str:
    if n == 100:
        return "cem"
    if n < 10:
        return _UNITS[n]
    if n < 20:
        return _TEENS[n - 10]
    if n < 100:
        unit = n % 10
        return _TENS[n // 10] + (f" e {_UNITS[unit]}" if unit else "")
    rest = n % 100
    return _HUNDREDS[n // 100] + (f" e {_below_thousand(rest)}" if rest else "")


def number_to_words(value: float) -> str:
    """Whole part of ``value`` spelled out, e.g. 1500 -> "mil e quinhentos"."""
    n = int(abs(value))
    if n == 0:
        return "zero"

    millions, rest = divmod(n, 1_000_000)
    thousands, remainder = divmod(rest, 1000)

    groups: list[tuple[int, str, str]] = []
    if millions:
        groups.append((millions, "um milhão" if millions == 1 else f"{_below_thousand(millions)} milhões", ", "))
    if thousands:
        groups.append((thousands, "mil" if thousands == 1 else f"{_below_thousand(thousands)} mil", " "))
    if remainder:
        groups.append((remainder, _below_thousand(remainder), ""))

    # "e" before a group below 100 or a round hundred, else the separator that
    # follows the previous group: a comma after millions, a space after thousands.
    words = groups[0][1]
    for (_, _, separator), (group, text, _) in zip(groups, groups[1:]):
        words += " e " if group < 100 or group % 100 == 0 else separator
        words += text
    return words


def reais_in_words(value: float) -> str:
    whole = int(abs(value))
    if whole == 1:
        return "um real"
    # "um milhão de reais", "dois milhões de reais"
    joiner = " de " if whole >= 1_000_000 and whole % 1_000_000 == 0 else " "
    return f"{number_to_words(whole)}{joiner}reais"


def format_brl(value: float) -> str:
    """1500 -> "R$ 1.500,00"."""
    formatted = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {formatted}"


def date_in_words(moment: datetime) -> str:
    return f"{moment.day} de {MONTHS[moment.month - 1]} de {moment.year}"
