"""Jinja2 environment shared by the server-rendered pages."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.api.core.i18n import SUPPORTED_LOCALES, translate

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["t"] = translate
templates.env.globals["supported_locales"] = SUPPORTED_LOCALES
