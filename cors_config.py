# CORS configuration
import logging
import os

from flask import request
from flask_cors import CORS

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "https://libby-tracker.netlify.app",
]


def configure_cors(app):
    # The dashboard front end only reads, so GET is all it needs.
    extra = [o.strip() for o in os.environ.get("CORS_ORIGINS", "").split(",") if o.strip()]
    CORS(app, resources={
        r"/api/*": {
            "origins": DEFAULT_ORIGINS + extra,
            "methods": ["GET", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    @app.after_request
    def after_request(response):
        logger.debug(f"CORS - Origin: {request.headers.get('Origin')} {request.method} -> {response.status_code}")
        return response

    return app
