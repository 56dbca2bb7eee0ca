from __future__ import annotations
from typing import Dict, Tuple
from .automaton import Automaton
from .refinement import Partition

# Construcción del autómata cociente

def build_quotient(dfa: Automaton, partition: Partition) -> Tuple[Automaton, Dict[int, int]]:
    """
    Construye el AFD mínimo a partir de la partición.

    Cada clase se vuelve un estado nuevo numerado desde 1 en orden de
    descubrimiento (la clase del estado inicial es la 1). La clase que
    contiene al estado error no se emite: las transiciones hacia ella quedan
    indefinidas, es decir, van al estado error implícito del nuevo autómata.

    Returns:
        (autómata mínimo, mapa índice de clase -> estado nuevo)
    """
    minimized = Automaton(initial=dfa.initial, max_states=max(dfa.max_states, len(partition) + 1))
    minimized.alphabet = set(dfa.alphabet)
    start_index = partition.index_of(dfa.initial)

    class_ids: Dict[int, int] = {}
    for i, cls in enumerate(partition.classes):
        #si el inicial es equivalente al error se conserva como único estado
        if partition.is_sink_class(i) and i != start_index:
            continue
        class_ids[i] = len(class_ids) + 1

    for i, new_id in class_ids.items():
        rep = partition.classes[i].representative
        minimized.add_state(new_id, accept=dfa.is_accepting(rep))

    for i, new_id in class_ids.items():
        rep = partition.classes[i].representative
        for sym in sorted(dfa.alphabet):
            target = partition.index_of(dfa.transition(rep, sym))
            if target is None or partition.is_sink_class(target):
                minimized.add_transition(new_id, sym, None)
            else:
                minimized.add_transition(new_id, sym, class_ids[target])

    if start_index is not None:
        minimized.initial = class_ids[start_index]
    return minimized, class_ids


__all__ = ["build_quotient"]
