import json
from pathlib import Path
import pytest

from subcomplete.__main__ import DEMO_QUERIES, main, parse_positionals

CORPUS = Path(__file__).resolve().parents[2] / "data" / "names.txt"


def test_parse_positionals_any_order():
    assert parse_positionals([]) == (False, None)
    assert parse_positionals(["clean"]) == (True, None)
    assert parse_positionals(["names.txt", "CLEAN"]) == (True, "names.txt")
    assert parse_positionals(["Clean", "names.txt"]) == (True, "names.txt")


@pytest.mark.e2e
def test_cli_demo_sequence(tmp_path: Path, capsys):
    dsn = f"sqlite:///{tmp_path / 'demo.sqlite'}"
    assert main([str(CORPUS), "clean", "--db", dsn]) == 0
    out = capsys.readouterr().out
    assert "Deleting index" in out
    assert "documents=" in out
    assert out.count("Time elapsed") == 2 + len(DEMO_QUERIES)
    assert "Searching for 'Ot', 'Be'..." in out
    assert "Otto Mustermann" in out
    assert "Wolfram Bauer" in out

    # second run: corpus already there, ingestion skipped
    assert main([str(CORPUS), "--db", dsn, "--q", "zi", "li"]) == 0
    out = capsys.readouterr().out
    assert "already loaded" in out
    assert "Zita Lindner" in out


@pytest.mark.e2e
def test_cli_json_queries(tmp_path: Path, capsys):
    dsn = f"sqlite:///{tmp_path / 'j.sqlite'}"
    assert main([str(CORPUS), "--db", dsn, "--json", "--q", "Ott", "tto", "--q", "wolf"]) == 0
    lines = [json.loads(ln) for ln in capsys.readouterr().out.splitlines() if ln.startswith("{")]
    assert lines[0]["terms"] == ["Ott", "tto"]
    assert lines[0]["documents"] == ["Otto Mustermann"]
    assert "Maria Wolf" in lines[1]["documents"]


@pytest.mark.e2e
def test_cli_missing_file_exits_1(tmp_path: Path, capsys):
    rc = main([str(tmp_path / "missing.txt"), "--db", "memory://"])
    assert rc == 1
    assert "error:" in capsys.readouterr().err
