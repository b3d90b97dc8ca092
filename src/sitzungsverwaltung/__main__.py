"""
Sitzungsverwaltung CLI entrypoint.

Executed via:
  python -m sitzungsverwaltung
"""

from sitzungsverwaltung.cli.app import app

if __name__ == "__main__":
    app()
