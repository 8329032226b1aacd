"""Ustawienia sx — konfiguracja przez zmienne środowiskowe, logowanie przez rich."""

from __future__ import annotations

import logging
import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from solver import InferenceMethod, parse_method


@dataclass(frozen=True)
class Settings:
    method:       InferenceMethod
    reveal_delay: float


def load_env_file(path: pathlib.Path | None = None) -> bool:
    """
    Wczytuje zmienne z pliku .env (domyślnie z katalogu bieżącego).
    Zmienne już ustawione w środowisku mają pierwszeństwo.
    """
    return load_dotenv(path or pathlib.Path.cwd() / ".env", override=False)


def get_settings() -> Settings:
    """
    Odczytuje ustawienia:
      SX_METHOD        domyślna metoda wnioskowania (automatic)
      SX_REVEAL_DELAY  odstęp w sekundach między pokazywanymi faktami pochodnymi (0.6)

    Raises:
        ValueError przy nieprawidłowej wartości zmiennej.
    """
    delay_raw = os.getenv("SX_REVEAL_DELAY", "0.6")
    try:
        delay = float(delay_raw)
    except ValueError:
        raise ValueError(f"SX_REVEAL_DELAY musi być liczbą, otrzymano '{delay_raw}'") from None

    return Settings(
        method       = parse_method(os.getenv("SX_METHOD", "automatic")),
        reveal_delay = max(delay, 0.0),
    )


def get_log_level() -> str:
    """Poziom logowania z SX_LOG_LEVEL (domyślnie WARNING)."""
    return os.getenv("SX_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str = "WARNING", *, verbose: bool = False, quiet: bool = False) -> None:
    """Konfiguruje logger główny z RichHandler (na stderr)."""
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level if level in logging.getLevelNamesMapping() else logging.WARNING)
