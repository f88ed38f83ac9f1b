from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def format_date(value: Optional[datetime]) -> str:
    """Oct 17, 03:04 PM"""
    if value is None:
        return ""
    return value.strftime("%b %d, %I:%M %p")


templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.filters["format_date"] = format_date
