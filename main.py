"""WSGI entrypoint for the recipe API.

Containerized deployments serve the ``app`` object below with Gunicorn, which
owns signal handling and graceful shutdown. ``python main.py`` starts the
Flask development server on ``PORT``; ``flask --app main run`` works too.
Variables from a local ``.env`` file are loaded before configuration is read.
"""

from dotenv import load_dotenv

from recipe_catalog import create_app
from recipe_catalog.config import Config

load_dotenv()

config = Config.from_env()
app = create_app(config=config)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.port)


__all__ = ["app"]
