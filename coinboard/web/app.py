"""
FastAPI app entrypoint.

Routes:
    GET /            dashboard with the USD chart
    GET /health      "ok", or 500 when the updaters have gone quiet
    GET /{currency}  dashboard; "usd" keeps the USD chart, anything else shows BTC
"""
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coinboard.shared.config import Config
from coinboard.shared.db.session import get_db
from coinboard.shared.utils import setup_logger
from coinboard.web.dashboard import build_context
from coinboard.web.health import check_health

logger = setup_logger(__name__, Config.LOGS_DIR / "web.log" if Config.ENV == "prod" else None)

MSG_GENERIC_ERROR = "There was an error, try again later"
STATUS_INTERNAL_ERROR = 500

templates = Jinja2Templates(directory=str(Config.TEMPLATES_DIR))
# Fail at startup rather than on the first request
templates.get_template("dashboard.html")

app = FastAPI(title="coinboard", version="0.1.0")
app.mount("/static", StaticFiles(directory=str(Config.STATIC_DIR)), name="static")


def db_session():
    with get_db() as db:
        yield db


def web_error(err: Exception | str) -> PlainTextResponse:
    logger.error("%s", err)
    return PlainTextResponse(MSG_GENERIC_ERROR, status_code=STATUS_INTERNAL_ERROR)


def render_dashboard(request: Request, db: Session, use_btc: bool):
    try:
        context = build_context(db, use_btc)
    except (SQLAlchemyError, LookupError, ValueError) as e:
        return web_error(e)
    return templates.TemplateResponse(request, "dashboard.html", context)


@app.get("/", response_class=HTMLResponse)
def home(request: Request, db: Session = Depends(db_session)):
    return render_dashboard(request, db, use_btc=False)


@app.get("/health", response_class=PlainTextResponse)
def health(db: Session = Depends(db_session)):
    try:
        problem = check_health(db)
    except SQLAlchemyError as e:
        return web_error(e)
    if problem is not None:
        return web_error(problem)
    return PlainTextResponse("ok")


@app.get("/{currency}", response_class=HTMLResponse)
def home_in_currency(currency: str, request: Request, db: Session = Depends(db_session)):
    return render_dashboard(request, db, use_btc=currency != "usd")
