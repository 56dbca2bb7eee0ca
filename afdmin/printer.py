from __future__ import annotations
from typing import List
from .automaton import SINK
from .minimizer import MinimizationResult

ERROR_NAME = "E"


def _state_name(state: int) -> str:
    return ERROR_NAME if state == SINK else f"q{state}"


def render_report(result: MinimizationResult) -> str:
    """
    Genera el reporte de texto de una minimización.

    Incluye el alfabeto, los alcanzables, los pares equivalentes, las
    clases, la nueva función de transición y los estados finales.
    """
    dfa = result.original
    minimized = result.minimized
    alphabet = sorted(dfa.alphabet)
    lines: List[str] = []

    lines.append(f"El alfabeto es: {', '.join(alphabet)}")
    lines.append(f"Alcanzables: {', '.join(str(q) for q in result.reachable)}")

    for p, q in result.partition.equivalent_pairs(result.reachable):
        lines.append(f"{p} y {q} son equivalentes")

    for new_id, cls in result.emitted_classes():
        members = ", ".join(str(s) for s in cls.states if s != SINK)
        lines.append(f"{_state_name(new_id)} = {{{members}}}")
    sink_index = result.partition.sink_index
    if sink_index is not None and sink_index not in result.class_ids:
        dead = [str(s) for s in result.partition.classes[sink_index].states if s != SINK]
        if dead:
            #estados alcanzables equivalentes al estado error
            lines.append(f"{ERROR_NAME} = {{{', '.join(dead)}}}")

    lines.append(f"    ==== El automata minimizado (el estado inicial es {_state_name(minimized.initial)}) ====")
    for state in sorted(minimized.states):
        for sym in alphabet:
            lines.append(f"d({_state_name(state)}, {sym}) = {_state_name(minimized.transition(state, sym))}")
    if minimized.has_undefined_transitions():
        for sym in alphabet:
            lines.append(f"d({ERROR_NAME}, {sym}) = {ERROR_NAME}")

    finals = " ".join(_state_name(s) for s in sorted(minimized.accepts))
    lines.append(f"Estados finales: [ {finals + ' ' if finals else ''}]")
    return "\n".join(lines)


__all__ = ["render_report"]
