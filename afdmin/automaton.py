from __future__ import annotations
from dataclasses import dataclass, field
from typing import Set, Dict, Optional, List, Tuple

SINK = 0  #estado error implícito
START = 1
MAX_STATES = 64

@dataclass
class Automaton:
    """Representa un autómata finito determinista con estado error implícito.

    - Los estados son enteros no negativos en [0, max_states).
    - El estado 0 es el estado error (sumidero): nunca se declara, nunca es de
      aceptación y toda transición no definida va hacia él.
    - El estado 1 es el estado inicial.
    - transitions: dict estado -> dict símbolo -> estado destino (función parcial).
    - alphabet: símbolos vistos en alguna transición.
    """

    states: Set[int] = field(default_factory=set)
    alphabet: Set[str] = field(default_factory=set)
    transitions: Dict[int, Dict[str, int]] = field(default_factory=dict)
    accepts: Set[int] = field(default_factory=set)
    initial: int = START
    max_states: int = MAX_STATES

    # ---------------- Construcción básica -----------------
    def _check_bounds(self, state: int) -> None:
        if not 0 <= state < self.max_states:
            raise ValueError(f"Estado fuera de rango: {state} (máximo {self.max_states - 1})")

    def add_state(self, state: int, *, accept: bool = False) -> None:
        """
        Añade un estado al autómata.

        Args:
            state: Identificador del estado
            accept: Si es estado de aceptación
        """
        self._check_bounds(state)
        if state == SINK:
            if accept:
                raise ValueError("El estado error no puede ser de aceptación")
            return
        #permitir idempotencia
        self.states.add(state)
        self.transitions.setdefault(state, {})
        if accept:
            self.accepts.add(state)

    def add_transition(self, src: int, symbol: str, dest: Optional[int]) -> None:
        """
        Añade una transición. dest=None significa "sin transición" y se
        resuelve aquí mismo hacia el estado error (no se guarda nada).

        Args:
            src: Estado origen
            symbol: Símbolo (un carácter)
            dest: Estado destino o None
        """
        self._check_bounds(src)
        if len(symbol) != 1:
            raise ValueError(f"Símbolo inválido: {symbol!r}")
        self.alphabet.add(symbol)
        if dest is None or dest == SINK:
            dest = SINK
        else:
            self._check_bounds(dest)
        current = self.transitions.get(src, {}).get(symbol)
        if current is not None and current != dest:
            raise ValueError(f"Transición contradictoria: d({src}, {symbol}) = {current} y {dest}")
        if dest == SINK:
            return
        self.transitions.setdefault(src, {})[symbol] = dest

    # ---------------- Consultas -----------------
    def transition(self, state: int, symbol: str) -> int:
        """Destino de d(state, symbol); el estado error si no está definida."""
        return self.transitions.get(state, {}).get(symbol, SINK)

    def is_accepting(self, state: int) -> bool:
        return state != SINK and state in self.accepts

    def has_undefined_transitions(self, states: Optional[List[int]] = None) -> bool:
        """Indica si algún estado (de la lista dada o de todos) va al estado error."""
        pool = self.states if states is None else states
        return any(self.transition(s, a) == SINK for s in pool for a in self.alphabet)

    # ---------------- Simulación -----------------
    def simulate_path(self, input_str: str) -> Tuple[List[int], bool]:
        """Simula la cadena devolviendo los estados visitados (incluye inicial) y aceptación.
        Un símbolo fuera del alfabeto lleva al estado error."""
        path = [self.initial]
        current = self.initial
        for ch in input_str:
            current = self.transition(current, ch)
            path.append(current)
            if current == SINK:
                #el estado error es absorbente
                break
        return path, self.is_accepting(current)

    def accepts_word(self, input_str: str) -> bool:
        return self.simulate_path(input_str)[1]

    # ---------------- Utilidades -----------------
    def clone(self) -> "Automaton":
        new = Automaton(initial=self.initial, max_states=self.max_states)
        new.states = set(self.states)
        new.alphabet = set(self.alphabet)
        new.accepts = set(self.accepts)
        for s, mp in self.transitions.items():
            new.transitions[s] = dict(mp)
        return new

    def to_dot(self, name: str = "AFD") -> str:
        """Genera representación DOT del autómata; dibuja E solo si se usa."""
        lines = [f"digraph {name} {{", "rankdir=LR;", "__start__ [shape=point];"]
        for s in sorted(self.states):
            shape = "doublecircle" if s in self.accepts else "circle"
            lines.append(f"q{s} [shape={shape}];")
        uses_error = self.has_undefined_transitions()
        if uses_error:
            lines.append("E [shape=circle, style=dashed];")
        lines.append(f"__start__ -> q{self.initial};")

        #agrupar transiciones por par (src, dst) para combinar etiquetas
        edge_labels: Dict[Tuple[str, str], List[str]] = {}
        for src in sorted(self.states):
            for sym in sorted(self.alphabet):
                dst = self.transition(src, sym)
                dst_name = "E" if dst == SINK else f"q{dst}"
                edge_labels.setdefault((f"q{src}", dst_name), []).append(sym)
        if uses_error:
            edge_labels[("E", "E")] = sorted(self.alphabet)
        for (src, dst), symbols in edge_labels.items():
            label = ", ".join(symbols)
            style = ", style=dashed, color=gray" if dst == "E" else ""
            lines.append(f'{src} -> {dst} [label="{label}"{style}];')
        lines.append("}")
        return "\n".join(lines)


__all__ = ["Automaton", "SINK", "START", "MAX_STATES"]
