# todoapp/main.py
from dotenv import load_dotenv

# .env must be loaded before the DB engine reads DATABASE_URL
load_dotenv()

import logging  # noqa: E402
from pathlib import Path  # noqa: E402

from fastapi import FastAPI, HTTPException, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import RedirectResponse  # noqa: E402
from fastapi.staticfiles import StaticFiles  # noqa: E402
from sqlmodel import text  # noqa: E402

from todoapp.core.config import settings  # noqa: E402
from todoapp.core.logging_config import setup_logging  # noqa: E402
from todoapp.db.session import engine  # noqa: E402
from todoapp.dependencies.auth import LoginRequired  # noqa: E402
from todoapp.routers import todo, todo_api  # noqa: E402
from todoapp.routers.auth import auth_router  # noqa: E402

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Todo List", version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(
    "/static",
    StaticFiles(directory=str(Path(__file__).resolve().parent / "static")),
    name="static",
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(url="/auth", status_code=303)


app.include_router(auth_router)
app.include_router(todo_api.router)
app.include_router(todo.router)


@app.get("/health")
def health_app():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    # Schema is managed by alembic; runtime only verifies connectivity.
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception:
        logger.exception("database health check failed")
        raise HTTPException(status_code=500, detail="Database connection failed")
