"""
sx — narzędzie CLI systemu ekspertowego (reguły implikacyjne, ponens / tollens).

Użycie:
  sx [--verbose | --quiet] <komenda> [opcje]

Komendy:
  solve      Rozstrzyga cel na regułach i faktach z pliku JSON (z dopytywaniem).
  rules      Listuje reguły i fakty bazy wiedzy.
  validate   Waliduje bazę wiedzy (JSON).
  example    Wypisuje przykładową bazę wiedzy z zajęć.
  shell      Interaktywna edycja bazy wiedzy i rozstrzyganie celów.

Zmienne środowiskowe:
  SX_METHOD        domyślna metoda wnioskowania (automatic)
  SX_REVEAL_DELAY  odstęp między pokazywanymi faktami pochodnymi, w sekundach (0.6)
  SX_LOG_LEVEL     poziom logowania (WARNING)

Zmienne można też podać w pliku .env w katalogu bieżącym.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252 — wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from sx._config import get_log_level, load_env_file, setup_logging
from sx.commands import solve as cmd_solve
from sx.commands import rules as cmd_rules
from sx.commands import validate as cmd_validate
from sx.commands import example as cmd_example
from sx.commands import shell as cmd_shell

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sx",
        description="sx — system ekspertowy: wnioskowanie modus ponens / modus tollens.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"sx {__version__}"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logowanie DEBUG (m.in. ślad wyprowadzeń resolvera).",
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Tylko błędy w logu.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_solve.add_parser(subparsers)
    cmd_rules.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_example.add_parser(subparsers)
    cmd_shell.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_env_file()
    setup_logging(get_log_level(), verbose=args.verbose, quiet=args.quiet)
    args.func(args)


if __name__ == "__main__":
    main()
