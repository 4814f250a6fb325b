"""Goal tracker page — the only public route."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from services.progress import GOAL_COUNT, build_progress, format_count
from services.resolver import TotalResolver
from services.youtube import CHANNELS

logger = logging.getLogger(__name__)

router = APIRouter()

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_jinja_env() -> Environment:
    """Jinja2 environment for page templates, with a thousands-separator filter."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["thousands"] = format_count
    return env


_env = create_jinja_env()


def render_page(count: int, goal: int = GOAL_COUNT, commit: str = "unknown") -> str:
    """Render the page for a given subscriber count. No side effects."""
    template = _env.get_template("index.html")
    return template.render(
        progress=build_progress(count, goal),
        channels=CHANNELS,
        commit=commit,
    )


def get_resolver(request: Request) -> TotalResolver:
    return request.app.state.resolver


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, resolver: TotalResolver = Depends(get_resolver)) -> HTMLResponse:
    """Current subscriber total against the goal."""
    count = await resolver.resolve()
    return HTMLResponse(render_page(count, commit=request.app.state.commit))
