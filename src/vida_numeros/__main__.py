"""Ponto de entrada da app Kivy."""

from __future__ import annotations

import logging

from vida_numeros.app import run_app


def main() -> int:
    """Run app entrypoint."""
    logging.basicConfig(level=logging.WARNING)
    try:
        return run_app()
    except ImportError as exc:
        print(f"Não foi possível iniciar o Kivy: {exc}")
        print("Instale as dependências da GUI: pip install 'vida-numeros[gui]'")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
