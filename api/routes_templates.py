"""
api.routes_templates - /api/v1/templates endpoints.

Expose stored import templates so operators can check which table a
template writes to and how its header definition is read.
"""

from flask import request, jsonify

import config
from api import api_bp
from catalog import Catalog
from db import get_session
from import_engine.field_spec import parse_header
from services.template_service import TemplateService


def _field_spec_dict(fs) -> dict:
    return {
        "column": fs.column_index,
        "token": fs.original,
        "path": list(fs.path_parts),
        "target_column": fs.target_column,
        "lookup_column": fs.lookup_column,
        "lookup_table": fs.lookup_table,
        "is_key": fs.is_key,
    }


@api_bp.route("/templates")
def list_templates():
    """GET /api/v1/templates?limit=100&offset=0"""
    limit  = min(int(request.args.get("limit", config.API_DEFAULT_LIMIT)),
                 config.API_MAX_LIMIT)
    offset = int(request.args.get("offset", 0))

    session = get_session()
    try:
        templates, total = TemplateService.list_active(
            session, limit=limit, offset=offset,
        )
        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "templates": [t.to_dict() for t in templates],
        })
    finally:
        session.close()


@api_bp.route("/templates/<int:template_id>")
def get_template(template_id: int):
    """GET /api/v1/templates/{id} - template, target table and parsed header."""
    session = get_session()
    try:
        template = TemplateService.get(session, template_id)
        if not template:
            return jsonify({"error": "not found"}), 404

        data = template.to_dict()
        data["table"] = Catalog(session).resolve_table_name(template.tab_id)
        tokens = TemplateService.header_tokens(template)
        data["fields"] = [_field_spec_dict(fs) for fs in parse_header(tokens)] if tokens else []
        return jsonify(data)
    finally:
        session.close()
