from __future__ import annotations
from typing import List
from .automaton import Automaton, SINK

# Estados alcanzables desde el inicial

def reachable_states(dfa: Automaton) -> List[int]:
    """Devuelve los estados alcanzables desde el inicial, en orden de descubrimiento.

    Expansión por punto fijo: se recorre cada estado ya encontrado con cada
    símbolo del alfabeto y se agregan los destinos nuevos (sin el estado
    error) hasta que una pasada completa no agrega nada.
    """
    if dfa.initial not in dfa.states:
        return []

    alphabet = sorted(dfa.alphabet)
    reachable: List[int] = [dfa.initial]
    seen = {dfa.initial}
    fixed = False
    while not fixed:
        fixed = True
        for q in reachable:
            for sym in alphabet:
                p = dfa.transition(q, sym)
                if p != SINK and p not in seen:
                    #nuevo estado alcanzable
                    seen.add(p)
                    reachable.append(p)
                    fixed = False
    return reachable


__all__ = ["reachable_states"]
