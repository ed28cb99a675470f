from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from starlette.responses import Response

from sweetkicks_core.forms import BindingTable, apply_bindings

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["ui"])


class IndexModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, alias="Name", max_length=100)


def _get_binding_table(request: Request) -> BindingTable:
    table = getattr(request.app.state, "binding_table", None)
    if table is None:
        raise HTTPException(status_code=500, detail="Binding table not initialized")
    return table


def _ui_settings(request: Request) -> Any:
    config = getattr(request.app.state, "sweetkicks_config", None)
    return getattr(config, "ui", None)


def render_page(
    request: Request,
    name: str,
    context: dict[str, Any],
    *,
    model: BaseModel,
    status_code: int = 200,
) -> HTMLResponse:
    """Render a template and bind its tagged elements to ``model``."""

    table = _get_binding_table(request)
    html = templates.get_template(name).render(
        {"request": request, "ui": _ui_settings(request), "model": model, **context}
    )
    return HTMLResponse(apply_bindings(html, model, table), status_code=status_code)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    # One-shot: the submitted name is shown on the next page view only.
    submitted = request.session.pop("Name", None)
    try:
        model = IndexModel.model_validate({"Name": submitted})
    except ValidationError:
        logger.warning("Discarding session value that does not fit the index page model")
        model = IndexModel()

    return render_page(
        request,
        "index.html",
        {"title": "SweetKicks", "greeting": model.name},
        model=model,
    )


@router.post("/", response_model=None)
async def index_post(request: Request, name: str = Form(default="", alias="Name")) -> Response:
    name = name.strip()
    logger.info("Name is %s", name)

    try:
        model = IndexModel.model_validate({"Name": name or None})
    except ValidationError as exc:
        message = exc.errors()[0].get("msg", "Invalid name")
        # The rejected value goes back into the input, never into the greeting.
        return render_page(
            request,
            "index.html",
            {"title": "SweetKicks", "greeting": None, "error": message},
            model=IndexModel.model_construct(Name=name),
            status_code=400,
        )

    if model.name is None:
        request.session.pop("Name", None)
    else:
        request.session["Name"] = model.name
    return RedirectResponse(url="/", status_code=302)
