from __future__ import annotations
from dataclasses import dataclass

from . import config as CFG


@dataclass(frozen=True)
class Document:
    id: int       # 1-based, assigned by the id counter
    text: str     # raw line, exactly as read


@dataclass(frozen=True)
class KeyLayout:
    """
    Key names for one index namespace.

      <prefix>.nextid        counter
      <prefix>.dcs           hash: decimal id -> raw line
      <prefix>.trm.<term>    ordered set of id strings, weight 0
      <prefix>.tmp.<token>   scratch intersection of a single query
    """
    prefix: str = CFG.KEY_PREFIX

    @property
    def next_id(self) -> str:
        return f"{self.prefix}.nextid"

    @property
    def documents(self) -> str:
        return f"{self.prefix}.dcs"

    def term(self, term: str) -> str:
        return f"{self.prefix}.trm.{term}"

    @property
    def terms_pattern(self) -> str:
        return f"{self.prefix}.trm.*"

    def scratch(self, token: str) -> str:
        return f"{self.prefix}.tmp.{token}"

    @property
    def scratch_pattern(self) -> str:
        return f"{self.prefix}.tmp.*"


DEFAULT_KEYS = KeyLayout()
