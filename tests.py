#!/usr/bin/env python3
"""
Casos de prueba para el minimizador de AFD.

Incluye:
- Pruebas unitarias para cada etapa (alcanzables, clases, cociente)
- Pruebas del cargador, del reporte y de la exportación
- Propiedades sobre autómatas aleatorios (corrección, maximalidad,
  idempotencia, preservación del lenguaje)
- Pruebas de la línea de comandos
"""

import unittest
import tempfile
import os
import io
import json
import random
import shutil
from collections import deque
from contextlib import redirect_stdout, redirect_stderr
from itertools import product
from pathlib import Path
from typing import Optional

from afdmin.automaton import Automaton, SINK, START, MAX_STATES
from afdmin.loader import parse_automaton, load_automaton, AutomatonFormatError
from afdmin.reachability import reachable_states
from afdmin.refinement import DistinguishabilityTable, EquivalenceClass, refine
from afdmin.quotient import build_quotient
from afdmin.minimizer import minimize
from afdmin.printer import render_report
from afdmin.exporter import (
    automaton_to_dict, automaton_to_csv, export_json, export_dot, export_csv, export_image
)
import main as cli

EXAMPLES_DIR = Path(__file__).resolve().parent / "ejemplos"

#(a|b)*abb, 1 y 3 equivalentes
AF0 = """
# comentario
1, a, 2, b, 3, 0
2, a, 2, b, 4, 0
3, a, 2, b, 3, 0
4, a, 2, b, 5, 0
5, a, 2, b, 3, 1
"""

#a+b con estado muerto 4, inalcanzable 6 y transiciones indefinidas en 5
AF1 = """
1, a, 2, b, 4, 0
2, a, 3, b, 5, 0
3, a, 3, b, 5, 0
4, a, 4, b, 4, 0
5, 1
6, a, 5, 1
"""


def random_dfa(rng: random.Random, n: int, alphabet: str = "ab") -> Automaton:
    """Autómata aleatorio con estados 1..n; destino 0 es transición indefinida"""
    dfa = Automaton()
    for s in range(1, n + 1):
        dfa.add_state(s, accept=rng.random() < 0.4)
    for s in range(1, n + 1):
        for sym in alphabet:
            target = rng.randint(0, n)
            dfa.add_transition(s, sym, target or None)
    return dfa


def distinguishing_word(dfa: Automaton, p: int, q: int) -> Optional[str]:
    """Busca por anchura una cadena que distinga p de q (None si son equivalentes)"""
    alphabet = sorted(dfa.alphabet)
    seen = {(p, q)}
    pending = deque([(p, q, "")])
    while pending:
        a, b, word = pending.popleft()
        if dfa.is_accepting(a) != dfa.is_accepting(b):
            return word
        for sym in alphabet:
            nxt = (dfa.transition(a, sym), dfa.transition(b, sym))
            if nxt not in seen:
                seen.add(nxt)
                pending.append((nxt[0], nxt[1], word + sym))
    return None


def isomorphic(a: Automaton, b: Automaton) -> bool:
    """Compara dos AFD completos (con el estado error) salvo renombrado"""
    if len(a.states) != len(b.states) or a.alphabet != b.alphabet:
        return False
    mapping = {a.initial: b.initial, SINK: SINK}
    pending = [a.initial]
    while pending:
        s = pending.pop()
        if a.is_accepting(s) != b.is_accepting(mapping[s]):
            return False
        for sym in sorted(a.alphabet):
            ta, tb = a.transition(s, sym), b.transition(mapping[s], sym)
            if ta in mapping:
                if mapping[ta] != tb:
                    return False
            else:
                mapping[ta] = tb
                pending.append(ta)
    return len(set(mapping.values())) == len(mapping)


class TestAutomatonModel(unittest.TestCase):
    """Pruebas para el modelo del autómata"""

    def setUp(self):
        self.dfa = Automaton()
        self.dfa.add_state(1)
        self.dfa.add_state(2, accept=True)
        self.dfa.add_transition(1, "a", 2)
        self.dfa.add_transition(2, "b", None)

    def test_undefined_transition_goes_to_sink(self):
        self.assertEqual(self.dfa.transition(1, "a"), 2)
        self.assertEqual(self.dfa.transition(1, "b"), SINK)
        self.assertEqual(self.dfa.transition(2, "b"), SINK)
        self.assertEqual(self.dfa.transition(2, "z"), SINK)

    def test_sink_is_absorbing_and_rejecting(self):
        for sym in self.dfa.alphabet:
            self.assertEqual(self.dfa.transition(SINK, sym), SINK)
        self.assertFalse(self.dfa.is_accepting(SINK))
        self.assertTrue(self.dfa.is_accepting(2))
        self.assertFalse(self.dfa.is_accepting(1))

    def test_alphabet_collects_symbols(self):
        #la transición a None también aporta su símbolo
        self.assertEqual(self.dfa.alphabet, {"a", "b"})
        self.assertEqual(self.dfa.transitions[2], {})

    def test_bounds_checked(self):
        with self.assertRaises(ValueError):
            self.dfa.add_state(MAX_STATES)
        with self.assertRaises(ValueError):
            self.dfa.add_state(-3)
        with self.assertRaises(ValueError):
            self.dfa.add_transition(1, "a", MAX_STATES + 5)
        with self.assertRaises(ValueError):
            self.dfa.add_state(SINK, accept=True)
        small = Automaton(max_states=3)
        small.add_state(2)
        with self.assertRaises(ValueError):
            small.add_state(3)

    def test_contradictory_transition(self):
        with self.assertRaises(ValueError):
            self.dfa.add_transition(1, "a", 1)
        with self.assertRaises(ValueError):
            self.dfa.add_transition(1, "a", None)
        #redefinir igual es idempotente
        self.dfa.add_transition(1, "a", 2)

    def test_simulation(self):
        path, accepted = self.dfa.simulate_path("a")
        self.assertEqual(path, [1, 2])
        self.assertTrue(accepted)

        path, accepted = self.dfa.simulate_path("ab")
        self.assertEqual(path, [1, 2, SINK])
        self.assertFalse(accepted)

        #símbolo fuera del alfabeto
        self.assertFalse(self.dfa.accepts_word("x"))
        self.assertFalse(self.dfa.accepts_word(""))

    def test_clone_is_independent(self):
        copy = self.dfa.clone()
        self.assertEqual(copy, self.dfa)
        copy.add_transition(2, "a", 1)
        self.assertEqual(self.dfa.transition(2, "a"), SINK)

    def test_dot(self):
        dot = self.dfa.to_dot()
        self.assertIn("digraph", dot)
        self.assertIn("q2 [shape=doublecircle];", dot)
        self.assertIn('q1 -> q2 [label="a"];', dot)
        self.assertIn("E [shape=circle, style=dashed];", dot)


class TestLoader(unittest.TestCase):
    """Pruebas para el cargador del formato de texto"""

    def test_parse_valid(self):
        dfa = parse_automaton(AF1)
        self.assertEqual(dfa.states, {1, 2, 3, 4, 5, 6})
        self.assertEqual(dfa.alphabet, {"a", "b"})
        self.assertEqual(dfa.accepts, {5, 6})
        self.assertEqual(dfa.initial, START)
        self.assertEqual(dfa.transition(1, "b"), 4)
        self.assertEqual(dfa.transition(5, "a"), SINK)

    def test_comments_whitespace_and_error_target(self):
        text = "# comentario\n\n  1 ,a,  -1 , b , 2  \n2, b, 0, 1\n"
        dfa = parse_automaton(text)
        self.assertEqual(dfa.transition(1, "a"), SINK)
        self.assertEqual(dfa.transition(1, "b"), 2)
        self.assertEqual(dfa.transition(2, "b"), SINK)
        self.assertEqual(dfa.alphabet, {"a", "b"})
        self.assertEqual(dfa.accepts, {2})

    def test_target_states_are_declared(self):
        dfa = parse_automaton("1, a, 7")
        self.assertIn(7, dfa.states)
        self.assertFalse(dfa.is_accepting(7))

    def test_repeated_records_merge(self):
        dfa = parse_automaton("1, a, 2\n1, b, 1, 1\n1, a, 2")
        self.assertEqual(dfa.transition(1, "a"), 2)
        self.assertEqual(dfa.transition(1, "b"), 1)
        self.assertTrue(dfa.is_accepting(1))

    def test_validation_errors(self):
        invalid_cases = [
            "",  # Vacío
            "# solo comentarios",
            "2, a, 1, 0",  # El primer estado no es 1
            "x, a, 2",  # Estado no numérico
            "1, a, 2\n0, a, 1",  # El estado error no se declara
            f"{MAX_STATES}, a, 1",  # Demasiados estados
            "1, a",  # Falta destino
            "1, ab, 2",  # Entrada de más de un carácter
            "1, a, x",  # Destino no numérico
            f"1, a, {MAX_STATES}",  # Destino fuera de rango
            "1, a, 2, 2",  # Final distinto de 0 o 1
            "1, 1, a, 2",  # Datos después de la marca de final
            "1, a, 2, 1\n1, 0",  # Final contradictorio
            "1, a, 2\n1, a, 3",  # Transición contradictoria
            "1, a, -1, a, 2",  # Error y luego destino real en el mismo registro
            "1, a, -1\n1, a, 2",  # Error y luego destino real en otro registro
            "1, a, 2, a, -1",  # Destino real y luego error
        ]

        for text in invalid_cases:
            with self.subTest(text=text):
                with self.assertRaises(AutomatonFormatError):
                    parse_automaton(text)

    def test_repeated_error_target_is_allowed(self):
        dfa = parse_automaton("1, a, -1, b, 1\n1, a, 0, b, 1")
        self.assertEqual(dfa.transition(1, "a"), SINK)
        self.assertEqual(dfa.transition(1, "b"), 1)

    def test_error_carries_line(self):
        with self.assertRaises(AutomatonFormatError) as ctx:
            parse_automaton("# c\n1, a, 2\n2, a\n")
        self.assertEqual(ctx.exception.line, 3)
        self.assertIn("línea 3", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValueError)

    def test_max_states_config(self):
        with self.assertRaises(AutomatonFormatError):
            parse_automaton("1, a, 5", max_states=5)
        dfa = parse_automaton("1, a, 4", max_states=5)
        self.assertEqual(dfa.max_states, 5)

    def test_load_example_files(self):
        for name in ("af0.csv", "af1.csv"):
            with self.subTest(name=name):
                dfa = load_automaton(EXAMPLES_DIR / name)
                self.assertIn(START, dfa.states)


class TestReachability(unittest.TestCase):
    """Pruebas para los estados alcanzables"""

    def test_discovery_order(self):
        self.assertEqual(reachable_states(parse_automaton(AF0)), [1, 2, 3, 4, 5])
        self.assertEqual(reachable_states(parse_automaton(AF1)), [1, 2, 4, 3, 5])

    def test_unreachable_excluded(self):
        reachable = reachable_states(parse_automaton(AF1))
        self.assertNotIn(6, reachable)
        self.assertNotIn(SINK, reachable)

    def test_only_start(self):
        self.assertEqual(reachable_states(parse_automaton("1, a, -1, 1")), [1])
        self.assertEqual(reachable_states(parse_automaton("1")), [1])

    def test_missing_start(self):
        self.assertEqual(reachable_states(Automaton()), [])

    def test_soundness(self):
        """Cada alcanzable se alcanza con alguna cadena y viceversa"""
        rng = random.Random(7)
        for _ in range(30):
            dfa = random_dfa(rng, rng.randint(1, 6))
            n = len(dfa.states)
            by_words = set()
            for length in range(n + 1):
                for word in product(sorted(dfa.alphabet), repeat=length):
                    by_words.add(dfa.simulate_path("".join(word))[0][-1])
            by_words.discard(SINK)
            with self.subTest(dfa=automaton_to_csv(dfa)):
                reachable = reachable_states(dfa)
                self.assertEqual(len(reachable), len(set(reachable)))
                self.assertEqual(set(reachable), by_words)


class TestRefinement(unittest.TestCase):
    """Pruebas para el cálculo de clases de equivalencia"""

    def classes(self, text):
        dfa = parse_automaton(text)
        return refine(dfa, reachable_states(dfa))

    def test_table_is_symmetric(self):
        table = DistinguishabilityTable()
        self.assertTrue(table.mark(3, 1))
        self.assertTrue(table.is_marked(1, 3))
        self.assertFalse(table.mark(1, 3))
        self.assertFalse(table.mark(2, 2))
        self.assertFalse(table.is_marked(2, 2))
        self.assertEqual(len(table), 1)

    def test_representative_is_first(self):
        cls = EquivalenceClass([4])
        cls.add(2)
        self.assertEqual(cls.representative, 4)
        self.assertIn(2, cls)
        self.assertEqual(len(cls), 2)

    def test_redundant_state(self):
        partition = self.classes(AF0)
        self.assertEqual([c.states for c in partition.classes], [[1, 3], [2], [4], [5]])
        self.assertIsNone(partition.sink_index)
        self.assertEqual(partition.equivalent_pairs([1, 2, 3, 4, 5]), [(1, 3)])

    def test_dead_state_joins_sink(self):
        partition = self.classes(AF1)
        self.assertEqual([c.states for c in partition.classes], [[1], [2, 3], [4, SINK], [5]])
        self.assertEqual(partition.sink_index, 2)
        self.assertTrue(partition.same_class(4, SINK))
        self.assertEqual(partition.class_of(3).representative, 2)
        self.assertIsNone(partition.index_of(6))

    def test_chain_to_accepting_loop(self):
        """1 -a-> 2 -a-> 3 -a-> 3 con 3 final: 'a' distingue 1 de 2"""
        partition = self.classes("1, a, 2, 0\n2, a, 3, 0\n3, a, 3, 1")
        self.assertEqual([c.states for c in partition.classes], [[1], [2], [3]])

    def test_collapsing_accepting_tail(self):
        partition = self.classes("1, a, 2, 0\n2, a, 3, 1\n3, a, 3, 1")
        self.assertEqual([c.states for c in partition.classes], [[1], [2, 3]])

    def test_all_distinct(self):
        partition = self.classes("1, a, 2, 0\n2, a, 3, 0\n3, a, 1, 1")
        self.assertEqual(len(partition), 3)

    def test_start_class_first(self):
        rng = random.Random(3)
        for _ in range(20):
            dfa = random_dfa(rng, rng.randint(1, 7))
            partition = refine(dfa, reachable_states(dfa))
            self.assertEqual(partition.classes[0].representative, START)

    def test_start_equivalent_to_sink(self):
        partition = self.classes("1, a, -1, 0")
        self.assertEqual([c.states for c in partition.classes], [[1, SINK]])
        self.assertEqual(partition.sink_index, 0)

    def test_empty(self):
        partition = refine(Automaton(), [])
        self.assertEqual(len(partition), 0)
        self.assertIsNone(partition.sink_index)


class TestQuotient(unittest.TestCase):
    """Pruebas para el autómata cociente"""

    def test_redundant_state(self):
        dfa = parse_automaton(AF0)
        result = minimize(dfa)
        m = result.minimized
        self.assertEqual(m.states, {1, 2, 3, 4})
        self.assertEqual(m.accepts, {4})
        self.assertEqual(m.initial, 1)
        expected = {
            (1, "a"): 2, (1, "b"): 1,
            (2, "a"): 2, (2, "b"): 3,
            (3, "a"): 2, (3, "b"): 4,
            (4, "a"): 2, (4, "b"): 1,
        }
        for (s, sym), dest in expected.items():
            with self.subTest(state=s, symbol=sym):
                self.assertEqual(m.transition(s, sym), dest)

    def test_sink_class_elided(self):
        result = minimize(parse_automaton(AF1))
        m = result.minimized
        self.assertEqual(result.class_ids, {0: 1, 1: 2, 3: 3})
        self.assertEqual(m.states, {1, 2, 3})
        self.assertEqual(m.accepts, {3})
        self.assertEqual(m.alphabet, {"a", "b"})
        self.assertEqual(m.transition(1, "a"), 2)
        self.assertEqual(m.transition(1, "b"), SINK)
        self.assertEqual(m.transition(2, "a"), 2)
        self.assertEqual(m.transition(2, "b"), 3)
        self.assertEqual(m.transition(3, "a"), SINK)
        self.assertEqual(m.transition(3, "b"), SINK)

    def test_unreachable_does_not_change_result(self):
        without_6 = "\n".join(l for l in AF1.splitlines() if not l.startswith("6"))
        self.assertEqual(minimize(parse_automaton(AF1)).minimized,
                         minimize(parse_automaton(without_6)).minimized)

    def test_chain_scenario(self):
        result = minimize(parse_automaton("1, a, 2, 0\n2, a, 3, 0\n3, a, 3, 1"))
        self.assertEqual(len(result.minimized.states), 3)
        result = minimize(parse_automaton("1, a, 2, 0\n2, a, 3, 1\n3, a, 3, 1"))
        self.assertEqual(len(result.minimized.states), 2)
        self.assertEqual(result.minimized.accepts, {2})
        self.assertEqual(result.minimized.transition(2, "a"), 2)

    def test_all_distinct_keeps_count(self):
        dfa = parse_automaton("1, a, 2, 0\n2, a, 3, 0\n3, a, 1, 1")
        result = minimize(dfa)
        self.assertEqual(len(result.minimized.states), len(result.reachable))

    def test_dead_start(self):
        result = minimize(parse_automaton("1, a, -1, 0"))
        m = result.minimized
        self.assertEqual(m.states, {1})
        self.assertEqual(m.accepts, set())
        self.assertEqual(m.transition(1, "a"), SINK)

    def test_missing_start(self):
        result = minimize(Automaton())
        self.assertEqual(result.reachable, [])
        self.assertEqual(result.minimized.states, set())

    def test_input_not_mutated(self):
        dfa = parse_automaton(AF1)
        before = dfa.clone()
        partition = refine(dfa, reachable_states(dfa))
        build_quotient(dfa, partition)
        self.assertEqual(dfa, before)


class TestMinimizationProperties(unittest.TestCase):
    """Propiedades sobre autómatas aleatorios"""

    def setUp(self):
        rng = random.Random(2024)
        self.cases = []
        for _ in range(60):
            alphabet = rng.choice(["a", "ab", "abc"])
            self.cases.append(random_dfa(rng, rng.randint(1, 8), alphabet))

    def test_partition_correctness(self):
        for dfa in self.cases:
            partition = refine(dfa, reachable_states(dfa))
            for cls in partition.classes:
                for p in cls.states:
                    for q in cls.states:
                        with self.subTest(dfa=automaton_to_csv(dfa), p=p, q=q):
                            self.assertEqual(dfa.is_accepting(p), dfa.is_accepting(q))
                            for sym in dfa.alphabet:
                                self.assertEqual(
                                    partition.index_of(dfa.transition(p, sym)),
                                    partition.index_of(dfa.transition(q, sym)),
                                )

    def test_partition_maximality(self):
        for dfa in self.cases:
            partition = refine(dfa, reachable_states(dfa))
            reps = [c.representative for c in partition.classes]
            for i, p in enumerate(reps):
                for q in reps[i + 1:]:
                    with self.subTest(dfa=automaton_to_csv(dfa), p=p, q=q):
                        self.assertIsNotNone(distinguishing_word(dfa, p, q))

    def test_partition_covers_reachable(self):
        for dfa in self.cases:
            reachable = reachable_states(dfa)
            partition = refine(dfa, reachable)
            members = [s for c in partition.classes for s in c.states if s != SINK]
            self.assertEqual(sorted(members), sorted(reachable))

    def test_language_preservation(self):
        rng = random.Random(99)
        for dfa in self.cases:
            minimized = minimize(dfa).minimized
            symbols = sorted(dfa.alphabet) + ["z"]
            for _ in range(100):
                word = "".join(rng.choice(symbols) for _ in range(rng.randint(0, 10)))
                with self.subTest(dfa=automaton_to_csv(dfa), word=word):
                    self.assertEqual(dfa.accepts_word(word), minimized.accepts_word(word))

    def test_idempotence(self):
        for dfa in self.cases:
            once = minimize(dfa).minimized
            twice = minimize(once).minimized
            with self.subTest(dfa=automaton_to_csv(dfa)):
                self.assertEqual(len(once.states), len(twice.states))
                self.assertTrue(isomorphic(once, twice))

    def test_never_grows(self):
        for dfa in self.cases:
            result = minimize(dfa)
            self.assertLessEqual(len(result.minimized.states), max(1, len(result.reachable)))


class TestPrinter(unittest.TestCase):
    """Pruebas para el reporte de texto"""

    def test_report_with_error_state(self):
        report = render_report(minimize(parse_automaton(AF1)))
        lines = report.splitlines()
        self.assertIn("El alfabeto es: a, b", lines)
        self.assertIn("Alcanzables: 1, 2, 4, 3, 5", lines)
        self.assertIn("2 y 3 son equivalentes", lines)
        self.assertIn("q2 = {2, 3}", lines)
        self.assertIn("E = {4}", lines)
        self.assertIn("    ==== El automata minimizado (el estado inicial es q1) ====", lines)
        self.assertIn("d(q1, b) = E", lines)
        self.assertIn("d(q2, b) = q3", lines)
        self.assertIn("d(E, a) = E", lines)
        self.assertEqual(lines[-1], "Estados finales: [ q3 ]")

    def test_report_without_error_state(self):
        report = render_report(minimize(parse_automaton(AF0)))
        self.assertIn("1 y 3 son equivalentes", report)
        self.assertIn("q1 = {1, 3}", report)
        self.assertNotIn("d(E,", report)
        self.assertTrue(report.endswith("Estados finales: [ q4 ]"))

    def test_no_finals(self):
        report = render_report(minimize(parse_automaton("1, a, 1, 0")))
        self.assertTrue(report.endswith("Estados finales: [ ]"))


class TestExporter(unittest.TestCase):
    """Pruebas para exportación"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.minimized = minimize(parse_automaton(AF1)).minimized

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_dict(self):
        data = automaton_to_dict(self.minimized)
        self.assertEqual(data["ESTADOS"], [1, 2, 3])
        self.assertEqual(data["SIMBOLOS"], ["a", "b"])
        self.assertEqual(data["INICIO"], [1])
        self.assertEqual(data["ACEPTACION"], [3])
        self.assertEqual(data["TRANSICIONES"], [(1, "a", 2), (2, "a", 2), (2, "b", 3)])

    def test_json_export(self):
        json_path = os.path.join(self.temp_dir, "test.json")
        export_json(self.minimized, json_path)
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["TRANSICIONES"], [[1, "a", 2], [2, "a", 2], [2, "b", 3]])

    def test_csv_round_trip(self):
        text = automaton_to_csv(self.minimized)
        self.assertEqual(text.splitlines(), [
            "1, a, 2, b, -1, 0",
            "2, a, 2, b, 3, 0",
            "3, a, -1, b, -1, 1",
        ])
        csv_path = os.path.join(self.temp_dir, "test.csv")
        export_csv(self.minimized, csv_path)
        self.assertEqual(load_automaton(csv_path), self.minimized)

    def test_dot_export(self):
        dot_path = os.path.join(self.temp_dir, "test.dot")
        export_dot(self.minimized, dot_path)
        with open(dot_path, encoding="utf-8") as f:
            content = f.read()
        self.assertIn("digraph", content)
        self.assertIn('q2 -> q3 [label="b"];', content)
        self.assertIn("E -> E", content)

    def test_image_export(self):
        png_path = os.path.join(self.temp_dir, "test.png")
        # Puede fallar si Graphviz no está instalado
        if export_image(self.minimized, png_path):
            self.assertTrue(os.path.exists(png_path))


class TestCommandLine(unittest.TestCase):
    """Pruebas de la línea de comandos"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def write(self, name, text):
        path = os.path.join(self.temp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_report(self):
        code, out, _ = self.run_cli(str(EXAMPLES_DIR / "af1.csv"))
        self.assertEqual(code, 0)
        self.assertIn("***** Procesando archivo", out)
        self.assertIn("Estados finales: [ q3 ]", out)

    def test_export(self):
        out_dir = os.path.join(self.temp_dir, "out")
        code, _, _ = self.run_cli(str(EXAMPLES_DIR / "af0.csv"), "-o", out_dir, "--no-images", "-q")
        self.assertEqual(code, 0)
        for ext in ("json", "dot", "csv"):
            self.assertTrue(os.path.exists(os.path.join(out_dir, f"af0_min.{ext}")))
        self.assertFalse(os.path.exists(os.path.join(out_dir, "af0_min.png")))

    def test_simulate(self):
        code, out, err = self.run_cli(str(EXAMPLES_DIR / "af1.csv"), "-s", "aab,b,ab")
        self.assertEqual(code, 0)
        self.assertIn("'aab': ACEPTADA (q1 → q2 → q2 → q3)", out)
        self.assertIn("'b': RECHAZADA (q1 → E)", out)
        self.assertEqual(err, "")

    def test_bad_file_aborts_run(self):
        bad = self.write("malo.csv", "2, a, 1, 0\n")
        code, out, err = self.run_cli(bad, str(EXAMPLES_DIR / "af0.csv"))
        self.assertEqual(code, 1)
        self.assertIn("El primer estado tiene que ser 1", err)
        self.assertNotIn("af0.csv", out)

    def test_missing_file(self):
        code, _, err = self.run_cli(os.path.join(self.temp_dir, "no_existe.csv"))
        self.assertEqual(code, 1)
        self.assertIn("no encontrado", err)

    def test_max_states(self):
        path = self.write("grande.csv", "1, a, 9, 0\n9, a, 1, 1\n")
        code, _, _ = self.run_cli(path, "--max-states", "8", "-q")
        self.assertEqual(code, 1)
        code, _, _ = self.run_cli(path, "--max-states", "10", "-q")
        self.assertEqual(code, 0)

    def test_quiet_and_verbose(self):
        code, _, err = self.run_cli(str(EXAMPLES_DIR / "af0.csv"), "-q", "-v")
        self.assertEqual(code, 1)
        self.assertIn("mutuamente excluyentes", err)


if __name__ == "__main__":
    unittest.main(verbosity=2)
