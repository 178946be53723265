"""Sample driver: write a 1000x1000 gradient to ``gradient.bmp``."""

from __future__ import annotations

from rasterbmp import cli


if __name__ == "__main__":
    raise SystemExit(cli.main([]))
