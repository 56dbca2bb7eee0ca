from __future__ import annotations
import json
import subprocess
from typing import List
from .automaton import Automaton, SINK

def automaton_to_dict(a: Automaton) -> dict:
    """
    Convierte un autómata a diccionario para exportación JSON.

    Las transiciones hacia el estado error se omiten (quedan implícitas).

    Args:
        a: El autómata a convertir

    Returns:
        Diccionario con formato estándar del proyecto
    """
    trans_list = []
    for src in sorted(a.states):
        for sym in sorted(a.alphabet):
            dest = a.transition(src, sym)
            if dest != SINK:
                trans_list.append((src, sym, dest))
    return {
        "ESTADOS": sorted(a.states),
        "SIMBOLOS": sorted(a.alphabet),
        "INICIO": [a.initial] if a.initial in a.states else [],
        "ACEPTACION": sorted(a.accepts),
        "TRANSICIONES": trans_list,
    }


def export_json(a: Automaton, path: str) -> None:
    """
    Exporta un autómata a formato JSON.

    Args:
        a: El autómata a exportar
        path: Ruta del archivo de salida
    """
    data = automaton_to_dict(a)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def automaton_to_csv(a: Automaton) -> str:
    """Escribe el autómata en el mismo formato que lee el cargador.
    El estado inicial va primero; el resto en orden. Las transiciones al
    estado error se escriben como -1."""
    ordered: List[int] = sorted(a.states)
    if a.initial in a.states:
        ordered = [a.initial] + [s for s in ordered if s != a.initial]
    lines = []
    for s in ordered:
        fields = [str(s)]
        for sym in sorted(a.alphabet):
            dest = a.transition(s, sym)
            #-1 conserva el símbolo en el alfabeto al volver a cargar
            fields += [sym, str(dest) if dest != SINK else "-1"]
        fields.append("1" if s in a.accepts else "0")
        lines.append(", ".join(fields))
    return "\n".join(lines) + "\n"


def export_csv(a: Automaton, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(automaton_to_csv(a))


def export_dot(a: Automaton, path: str) -> None:
    """
    Exporta un autómata a formato DOT de Graphviz.

    Args:
        a: El autómata a exportar
        path: Ruta del archivo de salida
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(a.to_dot())


def export_image(a: Automaton, path: str, format: str = "png") -> bool:
    """
    Exporta un autómata como imagen usando Graphviz.

    Args:
        a: El autómata a exportar
        path: Ruta del archivo de salida
        format: Formato de imagen (png, svg, pdf)

    Returns:
        True si la exportación fue exitosa
    """
    try:
        subprocess.run(
            ["dot", f"-T{format}", "-o", path],
            input=a.to_dot(),
            text=True,
            capture_output=True,
            check=True,
            encoding='utf-8'
        )
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


__all__ = [
    "automaton_to_dict", "export_json", "automaton_to_csv", "export_csv",
    "export_dot", "export_image"
]
