"""Default route: a static greeting page."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["Root"])


@router.get("/", response_class=HTMLResponse, summary="Greeting page")
async def index() -> str:
    return "<h1>Hello World!</h1>"
