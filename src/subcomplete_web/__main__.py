from __future__ import annotations
import logging

from .web import serve

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    raise SystemExit(serve())
