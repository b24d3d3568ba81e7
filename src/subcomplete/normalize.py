from __future__ import annotations
import re
from typing import List, Set

from . import config as CFG

# '.' and '-' split tokens: "Hans-Peter" -> "hans peter", "St.Pauli" -> "st pauli"
_SEPARATORS = re.compile(r"[.-]")

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def normalize_line(line: str, mode: str | None = None) -> str:
    """
    Normalize a raw line for indexing.
    Rules:
      * every '.' and '-' becomes a single space
      * mode "full":  str.casefold() ('Straße' -> 'strasse', 'MÜLLER' -> 'müller')
      * mode "ascii": str.lower(), which keeps 'ß' (legacy pairing with ASCII-only query folding)
    """
    mode = (mode or CFG.QUERY_CASE_FOLD).lower()
    line = _SEPARATORS.sub(" ", line)
    return line.lower() if mode == "ascii" else line.casefold()


def tokenize(line: str) -> List[str]:
    """Normalize, then split on whitespace runs."""
    return [tok.strip() for tok in normalize_line(line).split() if tok.strip()]


def expand_token(token: str, max_len: int | None = None) -> Set[str]:
    """
    Return every contiguous substring token[i:j] with 0 <= i < j <= len(token).
    The whole token is included so a word is found by its own spelling.
    max_len > 0 caps the substring length (0 / None = no cap).
    """
    cap = CFG.MAX_TERM_LENGTH if max_len is None else max_len
    n = len(token)
    out: Set[str] = set()
    for i in range(n):
        hi = n if not cap else min(n, i + cap)
        for j in range(i + 1, hi + 1):
            out.add(token[i:j])
    return out


def terms_for_line(line: str, max_len: int | None = None) -> Set[str]:
    """Union of expand_token() over all tokens of the line."""
    terms: Set[str] = set()
    for tok in tokenize(line):
        terms |= expand_token(tok, max_len)
    return terms


def fold_query_term(term: str, mode: str | None = None) -> str:
    """
    Fold a user supplied search term.
      "full"  -> casefold, identical to ingestion
      "ascii" -> only A-Z are lowered; ingestion then uses str.lower() (legacy behavior)
    """
    mode = (mode or CFG.QUERY_CASE_FOLD).lower()
    if mode == "full":
        return term.casefold()
    if mode == "ascii":
        return term.translate(_ASCII_LOWER)
    raise ValueError(f"Unknown query case fold mode: {mode!r}")
