"""
Flask application for the portfolio's server-side endpoints.

Run:
    python -m portfolio.app --port 4321
"""

import argparse
import logging
from typing import Optional, Mapping, Any

from flask import Flask

from .config import load_config
from .contact import contact_bp
from .mailer import build_mailer


def create_app(config: Optional[Mapping[str, Any]] = None, mailer=None) -> Flask:
    """Application factory.

    Args:
        config: Overrides applied on top of the environment-derived config
        mailer: Object with ``send(EmailMessage)``; built from
            ``RESEND_API_KEY`` when omitted
    """
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    app.extensions["contact_mailer"] = mailer if mailer is not None else build_mailer(app.config)
    if app.extensions["contact_mailer"] is None:
        app.logger.warning("RESEND_API_KEY is not set; contact submissions will be rejected")

    app.register_blueprint(contact_bp)
    return app


def main():
    parser = argparse.ArgumentParser(description="Serve the portfolio contact endpoint")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=4321, help="Port (default: 4321)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
