from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from .automaton import Automaton
from .reachability import reachable_states
from .refinement import EquivalenceClass, Partition, refine
from .quotient import build_quotient


@dataclass
class MinimizationResult:
    """Resultado de cada etapa de la minimización."""
    original: Automaton
    reachable: List[int]
    partition: Partition
    minimized: Automaton
    class_ids: Dict[int, int] = field(default_factory=dict)

    def emitted_classes(self) -> List[Tuple[int, EquivalenceClass]]:
        """Pares (estado nuevo, clase) de las clases emitidas, en orden."""
        return [(new_id, self.partition.classes[i]) for i, new_id in self.class_ids.items()]


def minimize(dfa: Automaton) -> MinimizationResult:
    """Alcanzables -> clases de equivalencia -> autómata cociente.
    No modifica el autómata de entrada."""
    reachable = reachable_states(dfa)
    partition = refine(dfa, reachable)
    minimized, class_ids = build_quotient(dfa, partition)
    return MinimizationResult(
        original=dfa,
        reachable=reachable,
        partition=partition,
        minimized=minimized,
        class_ids=class_ids,
    )


__all__ = ["MinimizationResult", "minimize"]
