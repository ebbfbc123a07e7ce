"""Entrypoint for `python -m portal`."""

from portal.main import run

if __name__ == "__main__":
    run()
