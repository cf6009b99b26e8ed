from __future__ import annotations

"""
Entry point for uvicorn:

  python -m uvicorn fastapi_server:app --host 0.0.0.0 --port 3000

or run directly (reads PORT, exits 1 if the port cannot be bound):

  PORT=3000 python fastapi_server.py

Importing this file builds the app but never opens a socket.
All real logic lives in claude_example/.
"""

import sys

from claude_example.app_factory import create_app
from claude_example.runner import main

app = create_app()

if __name__ == "__main__":
    sys.exit(main())
