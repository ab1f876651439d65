from __future__ import annotations
from flask import Flask, Response
import json as stdjson

try:
    import orjson as _oj
    def dumps(obj): return _oj.dumps(obj).decode()
except Exception:
    _oj = None
    def dumps(obj): return stdjson.dumps(obj)

from ..config import CFG


def create_app(cfg: CFG, snap) -> Flask:
    app = Flask(__name__)

    @app.get("/api/report")
    def api_report():
        report = snap.report_dict()
        if report is None:
            app.logger.debug("report requested before first observation")
            return Response(dumps({"report": None}), status=503, mimetype="application/json")
        return Response(dumps(report), mimetype="application/json")

    @app.get("/api/targets")
    def api_targets():
        with snap.lock:
            targets = list(snap.targets)
        return Response(dumps({"named": cfg.named_mode, "interval": cfg.interval, "targets": targets}),
                        mimetype="application/json")

    return app
