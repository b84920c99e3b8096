"""Transformações de texto do formato iCalendar (RFC 5545 § 3.1 e § 3.3.11).

Funções puras:
- escape/unescape: barra invertida, quebra de linha, vírgula e ponto e vírgula
- fold/unfold: quebra de valores longos em linhas de continuação

A ordem de codificação é escape -> fold; a de decodificação, unfold -> unescape.
"""

from __future__ import annotations

import re

LINE_SEPARATOR = "\r\n"
CONTINUATION = LINE_SEPARATOR + " "
FOLD_WIDTH = 72

_ESCAPE_PATTERN = re.compile(r"\r\n|[\\\r\n,;]")
_ESCAPES = {
    "\\": "\\\\",
    "\r\n": "\\n",
    "\r": "\\n",
    "\n": "\\n",
    ",": "\\,",
    ";": "\\;",
}

_UNESCAPE_PATTERN = re.compile(r"\\([\\nN,;])")
_UNESCAPES = {
    "\\": "\\",
    "n": "\n",
    "N": "\n",
    ",": ",",
    ";": ";",
}


def escape(value: str) -> str:
    """Escapa caracteres especiais de um valor TEXT.

    Quebras de linha (\\r\\n, \\r ou \\n) viram a sequência literal \\n, então
    unescape(escape(s)) devolve s com as quebras normalizadas para \\n; o
    formato só representa uma forma de quebra.
    """
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES[m.group(0)], value)


def unescape(value: str) -> str:
    """Desfaz escape em passagem única (\\\\n continua sendo barra + n).

    Sequências desconhecidas (ex.: \\:) são preservadas.
    """
    return _UNESCAPE_PATTERN.sub(lambda m: _UNESCAPES[m.group(1)], value)


def fold(value: str, prefix_length: int = 0, width: int = FOLD_WIDTH) -> str:
    """Quebra um valor já escapado em linhas de continuação.

    Args:
        value: Valor escapado.
        prefix_length: Tamanho do "NOME:" já emitido na primeira linha.
        width: Largura máxima de cada trecho.

    Returns:
        Trechos unidos por separador de linha + espaço.
    """
    first_width = max(width - prefix_length, 1)
    chunks = [value[:first_width]]
    rest = value[first_width:]
    while rest:
        chunks.append(rest[:width])
        rest = rest[width:]
    return CONTINUATION.join(chunks)


def unfold(value: str) -> str:
    """Remove as quebras de continuação inseridas por fold ou pelo parser."""
    return value.replace(CONTINUATION, "")
