# jwverse/server.py
from flask import Flask
from flask_cors import CORS
import os

from jwverse.core.config import configure_logging
from jwverse.routes.verses_api import verses_bp, set_store
from jwverse.services.verses import SettingsStore


def create_app(store: SettingsStore = None) -> Flask:
    app = Flask(__name__)

    # Editor front ends call from their own origin
    CORS(app)

    if store is not None:
        set_store(store)

    app.register_blueprint(verses_bp)
    return app


if __name__ == "__main__":
    configure_logging()
    create_app().run(
        host=os.getenv("JWVERSE_HOST", "127.0.0.1"),
        port=int(os.getenv("JWVERSE_PORT", "5056")),
    )
