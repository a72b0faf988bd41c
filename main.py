#!/usr/bin/env python3
"""
AIT Import - Template-driven file import service
================================================

Single-command run:  python main.py
Command-line import: flask --app main import-file TEMPLATE_ID PATH [--mode U]

See config.py for all environment-variable tunables.
"""

import logging
import sys

import click
from flask import Flask, jsonify

import config
from db import init_db
from api import api_bp
from import_engine import ExecutionContext, ImportEngineError, run_import

logger = logging.getLogger(__name__)


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

    # ── Initialise database ─────────────────────────────────────────
    url = db_url or config.DB_URL
    init_db(url)
    logger.info("Database: %s", url)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    # ── CLI ─────────────────────────────────────────────────────────
    @app.cli.command("import-file")
    @click.argument("template_id", type=int)
    @click.argument("path", type=click.Path(dir_okay=False))
    @click.option("--mode", default="", help='"U" to update instead of insert.')
    @click.option("--client", type=int, default=None, help="AD_Client_ID running the import.")
    @click.option("--org", type=int, default=None, help="AD_Org_ID running the import.")
    @click.option("--user", type=int, default=None, help="AD_User_ID running the import.")
    def import_file(template_id, path, mode, client, org, user):
        """Import PATH through import template TEMPLATE_ID."""
        context = ExecutionContext.from_config(
            client_id=client, org_id=org, user_id=user,
        )
        try:
            report = run_import(template_id, path, mode=mode, context=context)
        except ImportEngineError as exc:
            click.echo(f"Import failed: {exc}", err=True)
            for problem in getattr(exc, "problems", [])[1:]:
                click.echo(f"  also: {problem}", err=True)
            sys.exit(1)
        click.echo(report.summary())

    return app


def main():
    print("=" * 56)
    print("  AIT Import - file import service")
    print("=" * 56)

    app = create_app()

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
