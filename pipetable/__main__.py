"""Module entrypoint for running pipetable as ``python -m pipetable``."""

from __future__ import annotations

from pipetable.cli import main


if __name__ == "__main__":
    main()
