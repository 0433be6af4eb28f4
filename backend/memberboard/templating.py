from pathlib import Path

from fastapi.templating import Jinja2Templates

from .utils.display import avatar_initial, avatar_url, format_joined_date

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["initial"] = avatar_initial
templates.env.filters["avatar_url"] = avatar_url
templates.env.filters["joined_date"] = format_joined_date
