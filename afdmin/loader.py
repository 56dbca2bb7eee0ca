from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import re
from .automaton import Automaton, MAX_STATES, SINK, START

#formato de cada línea (valores separados por comas):
#   ESTADO, [ENTRADA, ESTADO]*, [FINAL]
#ESTADO es un entero positivo, ENTRADA un carácter no numérico, FINAL 0 o 1.
#un destino <= 0 es el estado error (por convención -1). las líneas que
#empiezan con # son comentarios. el primer estado declarado debe ser el 1.

COMMENT_PREFIX = "#"
SEPARATOR = ","
NUMBER_RE = re.compile(r"^[+-]?\d+$")

#estados de la máquina que interpreta cada línea
PARSE_STATE = "estado"
PARSE_INPUT = "entrada"
PARSE_TARGET = "transicion"
PARSE_FINAL = "final"


class AutomatonFormatError(ValueError):
    """Excepción específica para errores en la definición del autómata"""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"línea {line}: {message}"
        super().__init__(message)


def _is_number(tok: str) -> bool:
    return bool(NUMBER_RE.match(tok))


def _tokenize(line: str) -> List[str]:
    """Separa por comas, quita espacios y descarta tokens vacíos"""
    return [tok.strip() for tok in line.split(SEPARATOR) if tok.strip()]


def parse_automaton(text: str, max_states: int = MAX_STATES) -> Automaton:
    """
    Interpreta la descripción textual de un AFD.

    Args:
        text: Contenido con un registro por línea
        max_states: Número máximo de estados (los ids válidos son 1..max_states-1)

    Returns:
        El autómata cargado

    Raises:
        AutomatonFormatError: Ante cualquier registro mal formado
    """
    dfa = Automaton(max_states=max_states)
    finals: Dict[int, bool] = {}
    #destino de cada (estado, entrada) ya definida; el error se guarda como SINK
    targets: Dict[Tuple[int, str], int] = {}
    first_record = True

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        parse_state = PARSE_STATE
        state = SINK
        symbol = ""
        for tok in _tokenize(line):
            if parse_state == PARSE_STATE:
                if not _is_number(tok):
                    raise AutomatonFormatError(f"El estado no se define correctamente: '{tok}'", line_no)
                state = int(tok)
                if state <= 0 or state >= max_states:
                    raise AutomatonFormatError(f"Estado inválido: {state}", line_no)
                if first_record and state != START:
                    raise AutomatonFormatError(f"El primer estado tiene que ser {START}", line_no)
                first_record = False
                dfa.add_state(state)
                parse_state = PARSE_INPUT

            elif parse_state == PARSE_INPUT:
                if _is_number(tok):
                    #un número en lugar de un símbolo es la marca de final
                    flag = int(tok)
                    if flag not in (0, 1):
                        raise AutomatonFormatError("Definición de final tiene que ser 0 o 1", line_no)
                    if state in finals and finals[state] != bool(flag):
                        raise AutomatonFormatError(f"Estado {state} declarado final y no final", line_no)
                    finals[state] = bool(flag)
                    if flag:
                        dfa.add_state(state, accept=True)
                    parse_state = PARSE_FINAL
                elif len(tok) == 1:
                    symbol = tok
                    parse_state = PARSE_TARGET
                else:
                    raise AutomatonFormatError(
                        f"Entrada no bien definida: '{tok}' (debe ser un carácter no numérico)", line_no
                    )

            elif parse_state == PARSE_TARGET:
                if not _is_number(tok):
                    raise AutomatonFormatError(
                        f"Las transiciones deben ser números (estados): '{tok}'", line_no
                    )
                target = int(tok)
                if target >= max_states:
                    raise AutomatonFormatError(f"Estado destino inválido: {target}", line_no)
                dest: Optional[int] = None
                if target > 0:
                    dest = target
                    dfa.add_state(dest)
                resolved = SINK if dest is None else dest
                previous = targets.setdefault((state, symbol), resolved)
                if previous != resolved:
                    raise AutomatonFormatError(
                        f"Transición contradictoria: d({state}, {symbol}) = {previous} y {resolved}", line_no
                    )
                try:
                    dfa.add_transition(state, symbol, dest)
                except ValueError as e:
                    raise AutomatonFormatError(str(e), line_no) from e
                parse_state = PARSE_INPUT

            else:
                raise AutomatonFormatError("Más datos en la línea de los esperados", line_no)

        if parse_state == PARSE_TARGET:
            raise AutomatonFormatError(f"Falta el estado destino para la entrada '{symbol}'", line_no)

    if first_record:
        raise AutomatonFormatError("El archivo no define ningún estado")
    return dfa


def load_automaton(path: Union[str, Path], max_states: int = MAX_STATES) -> Automaton:
    """Lee y carga un autómata desde un archivo"""
    with open(path, "r", encoding="utf-8") as f:
        return parse_automaton(f.read(), max_states=max_states)


__all__ = ["AutomatonFormatError", "parse_automaton", "load_automaton"]
