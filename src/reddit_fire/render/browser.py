# ABOUTME: Browser renderer serving collected feeds as an HTML page on localhost.
# ABOUTME: FastAPI app with a Jinja2 template, run by uvicorn, opens the page on startup.

import webbrowser
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from reddit_fire.config import Settings, get_settings
from reddit_fire.models import Subreddit

logger = structlog.get_logger()

TEMPLATES_DIR = Path(__file__).parent / "templates"


def page_url(settings: Settings) -> str:
    return f"http://localhost:{settings.port}"


def create_app(
    feeds: list[Subreddit],
    settings: Settings | None = None,
    open_browser: bool = False,
) -> FastAPI:
    """Create the FastAPI application serving a snapshot of collected feeds.

    Args:
        feeds: Feeds to display, in configuration order.
        settings: Settings providing the base URL and port.
        open_browser: Open the page in the default browser once the server starts.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        url = page_url(settings)
        logger.warning("http_server_started", url=url)
        if open_browser:
            webbrowser.open(url)
        yield

    app = FastAPI(title="reddit-fire", version="0.1.0", lifespan=lifespan)

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.templates = templates
    app.state.feeds = feeds

    @app.get("/", response_class=HTMLResponse)
    async def view(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "feeds.html",
            {"feeds": request.app.state.feeds, "base_url": settings.base_url.rstrip("/")},
        )

    return app


def serve(feeds: list[Subreddit], settings: Settings | None = None) -> None:
    """Serve the feeds page and open it in a browser. Blocks until interrupted."""
    settings = settings or get_settings()
    app = create_app(feeds, settings, open_browser=True)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="warning")
