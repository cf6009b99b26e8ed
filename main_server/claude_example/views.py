from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

# templates/ ships inside the package, so resolve it next to this file
TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def configure(app: FastAPI) -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.templates = templates
    return templates
