from __future__ import annotations
import argparse, json, logging, sys, time
from typing import Callable, List, Optional, Tuple, TypeVar

from . import config as CFG
from .engine import Engine
from .errors import IngestError, StorageError

T = TypeVar("T")

# Fixed demonstration sequence run when no --q is given
DEMO_QUERIES: List[List[str]] = [
    ["Otto"],
    ["otto"],
    ["Wolf"],
    ["wang"],
    ["Ot", "Be"],
    ["Wo", "Ma"],
    ["Wol", "Bau"],
    ["zi", "li"],
    ["zi", "di", "li"],
]

RULE = "-" * 57


def parse_positionals(tokens: List[str]) -> Tuple[bool, Optional[str]]:
    """
    Up to two tokens, any order: 'clean' (case-insensitive) requests a wipe,
    anything else is the corpus filename (the last one wins).
    """
    clean = False
    filename: Optional[str] = None
    for tok in tokens[:2]:
        if tok.lower() == "clean":
            clean = True
        else:
            filename = tok
    return clean, filename


def _timed(fn: Callable[[], T]) -> Tuple[T, float]:
    t0 = time.perf_counter()
    out = fn()
    return out, (time.perf_counter() - t0) * 1000.0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Substring autocomplete demo (clean / load / query)")
    p.add_argument("args", nargs="*", metavar="clean|FILE",
                   help="'clean' to wipe the index first and/or a corpus file to load")
    p.add_argument("--db", default=CFG.DEFAULT_DSN, help="Store DSN (memory://, sqlite:///path, redis://host:port/db)")
    p.add_argument("--q", nargs="+", action="append", metavar="TERM",
                   help="Query terms (repeatable); replaces the demo queries")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if len(args.args) > 2:
        p.error("expected at most two positional arguments: clean and/or FILE")
    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    do_clean, filename = parse_positionals(args.args)
    queries = args.q or DEMO_QUERIES

    try:
        with Engine(args.db) as eng:
            if do_clean:
                print("Deleting index")
                print(RULE)
                _, ms = _timed(eng.clean)
                print(f"Time elapsed {ms:.3f}ms")
                print(RULE)

            if filename:
                print(f"Loading {filename}")
                print(RULE)
                n, ms = _timed(lambda: eng.ingest_file(filename))
                if n == 0 and eng.loaded():
                    print("(corpus already loaded, skipped)")
                else:
                    print(f"documents={n:,}")
                print(f"Time elapsed {ms:.3f}ms")
                print(RULE)

            for terms in queries:
                run_query(eng, terms, as_json=args.json)
    except (IngestError, StorageError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def run_query(eng: Engine, terms: List[str], *, as_json: bool = False) -> None:
    rows, ms = _timed(lambda: eng.complete(*terms))
    if as_json:
        print(json.dumps({"terms": terms, "documents": rows, "elapsed_ms": round(ms, 3)}, ensure_ascii=False))
        return
    print("Searching for " + ", ".join(f"'{t}'" for t in terms) + "...")
    print(RULE)
    print(f"Time elapsed {ms:.3f}ms")
    if not rows:
        print("(no matches)")
    for doc in rows:
        print(doc)
    print(RULE)


if __name__ == "__main__":
    raise SystemExit(main())
