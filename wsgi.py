"""WSGI entry point for the retirement runway planner application."""

import os
import sys
from app import create_app

app = create_app()

if __name__ == "__main__":
    port = 5000  # default

    # PORT environment variable (Render, Heroku, etc.)
    if "PORT" in os.environ:
        port = int(os.environ["PORT"])

    if len(sys.argv) > 2 and sys.argv[1] == "--port":
        port = int(sys.argv[2])

    debug = os.environ.get("FLASK_ENV", "development") == "development"
    app.run(debug=debug, host="127.0.0.1", port=port)
