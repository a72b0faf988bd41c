"""
api.errors - JSON error handlers for the API blueprint.
"""

from flask import jsonify

from api import api_bp
from import_engine.errors import ConfigurationError, ImportEngineError


@api_bp.errorhandler(ConfigurationError)
def api_configuration_error(e: ConfigurationError):
    status = 404 if "template_id" in e.details else 422
    return jsonify({"error": e.to_dict()}), status


@api_bp.errorhandler(ImportEngineError)
def api_import_error(e: ImportEngineError):
    return jsonify({"error": e.to_dict()}), 422


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
