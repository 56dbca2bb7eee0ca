import argparse
import sys
from pathlib import Path
from typing import List, Optional
from afdmin.automaton import MAX_STATES, SINK
from afdmin.loader import load_automaton, AutomatonFormatError
from afdmin.minimizer import minimize, MinimizationResult
from afdmin.printer import render_report
from afdmin.exporter import export_json, export_dot, export_csv, export_image

def create_parser() -> argparse.ArgumentParser:
    """Crear parser de argumentos de línea de comandos"""
    parser = argparse.ArgumentParser(
        description="Minimización de autómatas finitos deterministas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos de uso:
  python main.py ejemplos/af0.csv                 # Minimizar un autómata
  python main.py ejemplos/af0.csv ejemplos/af1.csv
  python main.py af0.csv -o out                   # Exportar JSON, DOT, CSV y PNG
  python main.py af0.csv -o out --no-images       # Sin generar imágenes
  python main.py af0.csv -s "ab,aab"              # Simular cadenas específicas

Formato de cada línea:
  ESTADO, [ENTRADA, ESTADO]*, [FINAL]
  - El primer estado tiene que ser 1
  - ENTRADA es un carácter no numérico; un destino -1 es el estado error
  - FINAL es 0 (no final) o 1 (final)
  - Las líneas que empiezan con # son comentarios
        """
    )

    parser.add_argument(
        "files",
        nargs="+",
        help="Archivos con la definición del autómata"
    )

    #opciones de salida
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Directorio de salida para exportar el AFD mínimo"
    )
    parser.add_argument(
        "--no-images",
        action="store_true",
        help="No generar imágenes PNG"
    )

    #opciones de simulación
    parser.add_argument(
        "-s", "--simulate",
        type=str,
        help="Cadenas a simular separadas por comas (ej: 'ab,aab,b')"
    )

    #configuración
    parser.add_argument(
        "--max-states",
        type=int,
        default=MAX_STATES,
        help=f"Número máximo de estados (default: {MAX_STATES})"
    )

    #opciones de comportamiento
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Salida detallada"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Silenciar salida no esencial"
    )

    return parser


def process_file(path: str, args) -> MinimizationResult:
    """
    Cargar y minimizar un archivo.

    Raises:
        AutomatonFormatError: si el archivo está mal formado
        OSError: si no se puede leer
    """
    if not args.quiet:
        print(f"\n\n***** Procesando archivo {path} *****\n")

    dfa = load_automaton(path, max_states=args.max_states)
    if args.verbose:
        print(f"  AFD: {len(dfa.states)} estados, {len(dfa.accepts)} aceptación")

    result = minimize(dfa)
    if args.verbose:
        print(f"  Alcanzables: {len(result.reachable)}, clases: {len(result.partition)}")
        print(f"  AFD mínimo: {len(result.minimized.states)} estados, "
              f"{len(result.minimized.accepts)} aceptación")

    if not args.quiet:
        print(render_report(result))
    return result


def export_result(result: MinimizationResult, path: str, args, output_dir: Path) -> None:
    """Exportar el AFD mínimo en los formatos disponibles"""
    stem = Path(path).stem
    minimized = result.minimized

    export_json(minimized, str(output_dir / f"{stem}_min.json"))
    export_dot(minimized, str(output_dir / f"{stem}_min.dot"))
    export_csv(minimized, str(output_dir / f"{stem}_min.csv"))
    if not args.quiet:
        print(f"  Archivos JSON, DOT y CSV exportados para '{path}' en '{output_dir}'")

    if not args.no_images:
        if export_image(minimized, str(output_dir / f"{stem}_min.png")):
            if args.verbose:
                print(f"  imagen generada: {stem}_min.png")
        elif not args.quiet:
            print("  Nota: Para generar imágenes, instala Graphviz:")
            print("    Ubuntu/Debian: sudo apt-get install graphviz")
            print("    macOS: brew install graphviz")
            print("    Windows: https://graphviz.org/download/")


def simulate_strings(result: MinimizationResult, strings: List[str], args) -> None:
    """Simular cadenas en el AFD original y en el mínimo"""
    print("\nSimulación de cadenas:")
    for string in strings:
        _, original_accepted = result.original.simulate_path(string)
        path, accepted = result.minimized.simulate_path(string)
        status = "ACEPTADA" if accepted else "RECHAZADA"
        trace = " → ".join("E" if q == SINK else f"q{q}" for q in path)
        print(f"  '{string}': {status} ({trace})")
        if args.verbose:
            print(f"    AFD original: {'ACEPTADA' if original_accepted else 'RECHAZADA'}")
        if original_accepted != accepted:
            #no debería pasar nunca
            print(f"  '{string}': el AFD original da un resultado distinto", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """fun principal"""
    parser = create_parser()
    args = parser.parse_args(argv)

    #validar args
    if args.quiet and args.verbose:
        print("Error: --quiet y --verbose son mutuamente excluyentes", file=sys.stderr)
        return 1
    if args.max_states < 2:
        print("Error: --max-states debe ser al menos 2", file=sys.stderr)
        return 1

    output_dir: Optional[Path] = None
    if args.output:
        output_dir = Path(args.output)
        output_dir.mkdir(parents=True, exist_ok=True)

    strings = []
    if args.simulate:
        strings = [s.strip() for s in args.simulate.split(',')]

    #cualquier error de formato aborta toda la ejecución
    for path in args.files:
        try:
            result = process_file(path, args)
        except AutomatonFormatError as e:
            print(f"Error en '{path}': {e}", file=sys.stderr)
            return 1
        except FileNotFoundError:
            print(f"Error: Archivo '{path}' no encontrado", file=sys.stderr)
            return 1
        except OSError as e:
            print(f"Error leyendo archivo '{path}': {e}", file=sys.stderr)
            return 1

        if output_dir is not None:
            export_result(result, path, args, output_dir)
        if strings:
            simulate_strings(result, strings, args)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nPrograma interrumpido por el usuario")
        sys.exit(0)
