from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from iar_uploader.core.config import Settings, get_settings

TEMPLATES_DIR = Path(__file__).resolve().parents[3] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request, settings: Settings = Depends(get_settings)):
    """Uploader page"""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"title": settings.project_name, "table_name": settings.iar_table_name},
    )
