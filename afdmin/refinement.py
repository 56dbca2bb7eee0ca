from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Set, Tuple
from .automaton import Automaton, SINK

# Refinamiento de la partición en clases de equivalencia (Myhill-Nerode)
# mediante la tabla de pares distinguibles.


class DistinguishabilityTable:
    """Relación simétrica de pares de estados distinguibles.

    Los pares (p, q) y (q, p) son la misma entrada; un estado nunca es
    distinguible de sí mismo. Las marcas nunca se quitan.
    """

    def __init__(self) -> None:
        self._marked: Set[FrozenSet[int]] = set()

    def mark(self, p: int, q: int) -> bool:
        """Marca el par; devuelve True si la marca es nueva."""
        if p == q:
            return False
        pair = frozenset((p, q))
        if pair in self._marked:
            return False
        self._marked.add(pair)
        return True

    def is_marked(self, p: int, q: int) -> bool:
        if p == q:
            return False
        return frozenset((p, q)) in self._marked

    def __len__(self) -> int:
        return len(self._marked)


@dataclass
class EquivalenceClass:
    """Clase de estados equivalentes; el representante es el primero agregado."""
    states: List[int] = field(default_factory=list)

    @property
    def representative(self) -> int:
        return self.states[0]

    def add(self, state: int) -> None:
        self.states.append(state)

    def __contains__(self, state: int) -> bool:
        return state in self.states

    def __len__(self) -> int:
        return len(self.states)


@dataclass
class Partition:
    """Clases en orden de descubrimiento (la del estado inicial primero).

    sink_index es el índice de la clase que contiene al estado error, o None
    si ningún estado alcanzable tiene transiciones hacia él.
    """
    classes: List[EquivalenceClass] = field(default_factory=list)
    sink_index: Optional[int] = None

    def index_of(self, state: int) -> Optional[int]:
        for i, cls in enumerate(self.classes):
            if state in cls:
                return i
        return None

    def class_of(self, state: int) -> Optional[EquivalenceClass]:
        i = self.index_of(state)
        return None if i is None else self.classes[i]

    def same_class(self, p: int, q: int) -> bool:
        i = self.index_of(p)
        return i is not None and i == self.index_of(q)

    def is_sink_class(self, index: int) -> bool:
        return index == self.sink_index

    def equivalent_pairs(self, order: List[int]) -> List[Tuple[int, int]]:
        """Pares (p, q) de estados distintos equivalentes, en el orden dado."""
        pairs = []
        for i, p in enumerate(order):
            for q in order[i + 1:]:
                if self.same_class(p, q):
                    pairs.append((p, q))
        return pairs

    def __len__(self) -> int:
        return len(self.classes)


def _mark_distinguishable(dfa: Automaton, participants: List[int]) -> DistinguishabilityTable:
    table = DistinguishabilityTable()
    alphabet = sorted(dfa.alphabet)
    n = len(participants)

    #caso base: finales y no finales son distinguibles
    for i in range(n):
        for j in range(i + 1, n):
            p, q = participants[i], participants[j]
            if dfa.is_accepting(p) != dfa.is_accepting(q):
                table.mark(p, q)

    #punto fijo: (p, q) es distinguible si d(p, a) y d(q, a) lo son
    fixed = False
    while not fixed:
        fixed = True
        for i in range(n):
            for j in range(i + 1, n):
                p, q = participants[i], participants[j]
                if table.is_marked(p, q):
                    continue
                for sym in alphabet:
                    if table.is_marked(dfa.transition(p, sym), dfa.transition(q, sym)):
                        table.mark(p, q)
                        fixed = False
                        break
    return table


def refine(dfa: Automaton, reachable: List[int]) -> Partition:
    """
    Calcula la partición más gruesa de los estados alcanzables en clases de
    estados indistinguibles.

    El estado error participa en la tabla (al final) solo si algún estado
    alcanzable tiene una transición indefinida; así un estado que va al error
    se distingue de uno que va a un estado de aceptación.

    Args:
        dfa: El autómata
        reachable: Estados alcanzables en orden de descubrimiento

    Returns:
        La partición con las clases en orden de descubrimiento
    """
    participants = list(reachable)
    if reachable and dfa.has_undefined_transitions(reachable):
        participants.append(SINK)

    table = _mark_distinguishable(dfa, participants)

    #crear clases: cada estado se une a la primera clase cuyo representante
    #no es distinguible de él, o abre una clase nueva
    partition = Partition()
    for p in participants:
        for cls in partition.classes:
            if not table.is_marked(cls.representative, p):
                cls.add(p)
                break
        else:
            partition.classes.append(EquivalenceClass([p]))

    if SINK in participants:
        partition.sink_index = partition.index_of(SINK)
    return partition


__all__ = ["DistinguishabilityTable", "EquivalenceClass", "Partition", "refine"]
