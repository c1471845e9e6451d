#main.py
from pathlib import Path
from dotenv import load_dotenv
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.catalog import router as catalog_router
from api.profiles import router as profiles_router
from api.suggestions import router as suggestions_router
from api.titles import router as titles_router
from core.database import init_db
from settings import APP_TITLE, CORS_ORIGINS
from telemetry.logger import get_logger, log_event

log = get_logger("advisor")

app = FastAPI(title=APP_TITLE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(titles_router)
app.include_router(catalog_router)
app.include_router(suggestions_router)
app.include_router(profiles_router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    log_event("request_error", {"path": request.url.path, "error": type(exc).__name__})
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
async def startup():
    await init_db()


@app.get("/")
def health():
    return {"status": "ok"}
