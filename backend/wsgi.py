"""
WSGI entry point for Gunicorn.

    gunicorn wsgi:app              # from backend/
    gunicorn backend.wsgi:app      # from the repository root

Settings are read from the environment (and .env) when the module is
imported. REQUIRE_CONFIG=true makes an incomplete configuration fail the
boot instead of answering protected routes with 500.
"""
import os
import sys

backend_dir = os.path.dirname(os.path.abspath(__file__))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(port=int(os.getenv('PORT', '4000')))
