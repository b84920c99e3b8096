"""Parser iCalendar baseado em pilha explícita de blocos abertos.

Cada linha é uma de:
- continuação (começa com espaço): estende o último valor do bloco corrente
- BEGIN:<tag>: empilha novo bloco
- END:<tag>: desempilha, anexa ao pai e decodifica os valores do bloco
- NOME:valor: propriedade do bloco corrente, guardada ainda codificada

Valores só são decodificados (unfold + unescape) quando o bloco fecha, então a
árvore devolvida contém apenas texto decodificado.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from api.codecs.ics.text import LINE_SEPARATOR, unescape, unfold
from app.domain.calendar_object import CalendarObject
from utils.errors import FormatError

DEFAULT_ROOT_TAG = "VCALENDAR"

_LINE_SPLIT_PATTERN = re.compile(r"\r\n|\n|\r")
_IMPLICIT_ROOT = "__root__"


@dataclass
class _Frame:
    """Estado de parse de um bloco aberto.

    `last_key` fica aqui (e não no CalendarObject) para que a contabilidade
    de continuação não vaze para o modelo de dados.
    """

    block: CalendarObject
    last_key: str | None = None


def parse(text: str, root_tag: str = DEFAULT_ROOT_TAG) -> CalendarObject:
    """Converte texto iCalendar em árvore de CalendarObject.

    Args:
        text: Documento completo.
        root_tag: Tag esperada exatamente uma vez no nível superior
            (ex.: "VEVENT" ao decodificar um evento em cache).

    Returns:
        O único bloco `root_tag` de nível superior.

    Raises:
        FormatError: Linha sem "NOME:valor", END sem bloco aberto, END com tag
            divergente, documento desbalanceado ou raiz ausente/duplicada.
    """
    stack: list[_Frame] = [_Frame(CalendarObject(type=_IMPLICIT_ROOT))]

    for line_number, line in enumerate(_LINE_SPLIT_PATTERN.split(text), start=1):
        if line.startswith(" "):
            _append_continuation(stack[-1], line, line_number)
            continue
        if not line:
            continue

        name, value = _split_line(line, line_number)
        if name == "BEGIN":
            stack.append(_Frame(CalendarObject(type=value)))
        elif name == "END":
            _close_block(stack, value, line_number)
        else:
            _set_property(stack[-1], name, value, line_number)

    if len(stack) != 1:
        raise FormatError(f"Bloco {stack[-1].block.type} não foi fechado")

    roots = stack[0].block.children(root_tag)
    if len(roots) != 1:
        raise FormatError(f"Esperado exatamente um {root_tag}, encontrado {len(roots)}")
    return roots[0]


def _split_line(line: str, line_number: int) -> tuple[str, str]:
    index = line.find(":")
    if index == -1:
        raise FormatError("Linha inválida, esperado NOME:valor", line_number)
    return line[:index], line[index + 1 :]


def _append_continuation(frame: _Frame, line: str, line_number: int) -> None:
    if frame.last_key is None:
        raise FormatError("Continuação sem propriedade anterior", line_number)
    current = frame.block.properties[frame.last_key]
    # `line` já começa com o espaço; unfold remove separador + espaço
    frame.block.properties[frame.last_key] = current + LINE_SEPARATOR + line


def _set_property(frame: _Frame, name: str, value: str, line_number: int) -> None:
    if isinstance(frame.block.properties.get(name), list):
        raise FormatError(f"Propriedade {name} conflita com blocos filhos", line_number)
    frame.block.properties[name] = value
    frame.last_key = name


def _close_block(stack: list[_Frame], tag: str, line_number: int) -> None:
    if len(stack) == 1:
        raise FormatError(f"END:{tag} sem bloco aberto", line_number)

    frame = stack.pop()
    block = frame.block
    if block.type != tag:
        raise FormatError(f"END:{tag} fecha bloco {block.type}", line_number)

    _decode_values(block)

    parent_frame = stack[-1]
    parent_frame.last_key = None
    parent = parent_frame.block
    collection = parent.properties.setdefault(block.type, [])
    if not isinstance(collection, list):
        raise FormatError(f"Bloco {parent.type} não pode agrupar {block.type}", line_number)
    collection.append(block)


def _decode_values(block: CalendarObject) -> None:
    for name, value in block.properties.items():
        if isinstance(value, str):
            block.properties[name] = unescape(unfold(value))
