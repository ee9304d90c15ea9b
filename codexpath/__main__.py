"""Module entrypoint for running codexpath as ``python -m codexpath``."""

from __future__ import annotations

from codexpath.cli import main


if __name__ == "__main__":
    main()
