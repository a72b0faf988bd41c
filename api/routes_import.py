"""
api.routes_import - /api/v1/import endpoint.

Accepts the file via multipart upload or raw request body and runs it
through a stored import template.
"""

import os
import tempfile

from flask import request, jsonify

import config
from api import api_bp
from import_engine import ExecutionContext, run_import


def _int_arg(name: str):
    raw = request.args.get(name, "").strip()
    return int(raw) if raw.isdigit() else None


@api_bp.route("/import/<int:template_id>", methods=["POST"])
def api_import_file(template_id: int):
    """
    POST /api/v1/import/{template_id}?mode=U&client=&org=&user=

    Multipart: field name 'file'
    Or: raw file as request body (Content-Type: text/csv).
    Omitted client/org/user fall back to the configured defaults.
    """
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("file")
        if not f:
            return jsonify({"error": "no file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    context = ExecutionContext.from_config(
        client_id=_int_arg("client"),
        org_id=_int_arg("org"),
        user_id=_int_arg("user"),
    )

    config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    fd, path = tempfile.mkstemp(dir=config.UPLOAD_DIR, suffix=".csv")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        report = run_import(template_id, path,
                            mode=request.args.get("mode", ""), context=context)
    finally:
        os.unlink(path)

    return jsonify(report.to_dict())
