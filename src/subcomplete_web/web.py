from __future__ import annotations
import argparse, sys
from flask import Flask, request, jsonify, Response

from subcomplete import config as CFG
from subcomplete.engine import Engine
from subcomplete.errors import EmptyQueryError, IngestError, StorageError

app = Flask(__name__)
_engine: Engine | None = None


def _require_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call serve() or set web._engine first.")
    return _engine


# ---------- API ----------
@app.get("/api/complete")
def api_complete():
    terms = [t for t in request.args.getlist("q", type=str) if t]
    eng = _require_engine()
    try:
        ids = eng.search_ids(*terms)
        docs = eng.load(*ids) or []
    except EmptyQueryError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"terms": terms, "ids": ids, "documents": docs})


@app.get("/api/documents")
def api_documents():
    ids = request.args.getlist("id", type=str)
    return jsonify({"documents": _require_engine().load(*ids)})


@app.get("/health")
def health():
    return jsonify({"ok": True, "loaded": _require_engine().loaded()})


@app.errorhandler(StorageError)
def storage_failed(e: StorageError):
    return jsonify({"error": str(e)}), 503


# ---------- UI ----------
@app.get("/")
def home():
    # One form, no external assets; results come from /api/complete.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Substring autocomplete</title>
<style>
body{margin:24px auto;max-width:760px;padding:0 16px;font:16px/1.45 system-ui,sans-serif;background:#0b0f14;color:#cfd8e3}
input{width:100%;padding:10px 12px;border-radius:10px;border:1px solid #1c2530;background:#0b1117;color:#cfd8e3;font-size:16px}
li{padding:4px 0;border-bottom:1px solid #1c2530}
.small{color:#8a94a6;font-size:13px}
</style>
</head>
<body>
<h1>Substring autocomplete</h1>
<form id="f" onsubmit="return false">
  <input id="q" autocomplete="off" placeholder="e.g. ot be" autofocus />
</form>
<p class="small" id="meta">Type one or more partial words; every word must match.</p>
<ul id="out"></ul>
<script>
const q = document.getElementById('q'), out = document.getElementById('out'), meta = document.getElementById('meta');
let timer = null;
q.addEventListener('input', () => { clearTimeout(timer); timer = setTimeout(run, 150); });
async function run(){
  const terms = q.value.split(/\s+/).filter(Boolean);
  out.innerHTML = '';
  if (!terms.length) { meta.textContent = ''; return; }
  const qs = terms.map(t => 'q=' + encodeURIComponent(t)).join('&');
  const t0 = performance.now();
  const r = await fetch('/api/complete?' + qs);
  const data = await r.json();
  if (!r.ok) { meta.textContent = data.error || r.statusText; return; }
  meta.textContent = data.documents.length + ' match(es) in ' + (performance.now() - t0).toFixed(1) + 'ms';
  for (const d of data.documents) {
    const li = document.createElement('li'); li.textContent = d === null ? '(missing)' : d; out.appendChild(li);
  }
}
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def serve(argv: list[str] | None = None) -> int:
    global _engine
    ap = argparse.ArgumentParser(description="Substring autocomplete web UI")
    ap.add_argument("--db", default=CFG.DEFAULT_DSN, help="Store DSN (memory://, sqlite:///path, redis://host:port/db)")
    ap.add_argument("--load", default=None, metavar="FILE", help="Corpus file to ingest if the index is empty")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=5000)
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args(argv)

    _engine = Engine(args.db)
    try:
        if args.load:
            try:
                _engine.ingest_file(args.load)
            except (IngestError, StorageError) as e:
                print(f"error: {e}", file=sys.stderr)
                return 1
        app.run(host=args.host, port=args.port, debug=args.debug)
    finally:
        _engine.shutdown()
        _engine = None
    return 0
