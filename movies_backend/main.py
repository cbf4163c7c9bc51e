# movies_backend/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Import Core Backend Components ---
from movies_backend.config import CORS_ORIGINS, MESSAGES_PATH
from movies_backend.routers import auth, favorites, movies
from movies_backend.utils.database import create_tables, engine
from movies_backend.utils.messages import MessageCatalog

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("movies_backend")

# Message keys for fields whose failures don't carry their own key (missing, wrong type, bad email)
FIELD_MESSAGES = {
    "email": "errors.auth.invalidEmailFormat",
    "firstName": "errors.auth.firstNameRequired",
    "lastName": "errors.auth.lastNameRequired",
    "password": "errors.auth.passwordRequired",
    "movieId": "errors.favorites.invalidMovieId",
    "search": "errors.movies.searchTooLong",
}
NO_STORE_PATHS = ("/api/movies", "/api/favorites")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application Startup: Creating database tables...")
    await create_tables()
    logger.info("Application Startup: Tables created successfully.")
    yield
    await engine.dispose()
    logger.info("Application Shutdown: Goodbye!")


app = FastAPI(title="Movie Favorites API", lifespan=lifespan)
app.state.messages = MessageCatalog(MESSAGES_PATH)

app.add_middleware(
    CORSMiddleware, allow_origins=CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)


# Suggestion scores change on every call
@app.middleware("http")
async def no_cache(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.rstrip("/") in NO_STORE_PATHS:
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        response.headers["Pragma"] = "no-cache"
    return response


def _validation_message(messages: MessageCatalog, error: dict) -> str:
    reason = (error.get("ctx") or {}).get("error")
    if isinstance(reason, ValueError) and str(reason).startswith("errors."):
        key = str(reason)
        if key == "errors.auth.passwordMinLength":
            return messages.get(key, min=auth.PASSWORD_MIN_LENGTH)
        if key == "errors.auth.passwordMaxLength":
            return messages.get(key, max=auth.PASSWORD_MAX_BYTES)
        return messages.get(key)
    field = str(error["loc"][-1]) if error.get("loc") else ""
    ctx = error.get("ctx") or {}
    params = {"max": ctx["max_length"]} if "max_length" in ctx else {}
    return messages.get(FIELD_MESSAGES.get(field, "errors.validation.invalidInput"), **params)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = request.app.state.messages
    errors = [
        {"field": str(error["loc"][-1]) if error.get("loc") else "", "msg": _validation_message(messages, error)}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": messages.get("errors.validation.invalidInput"), "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": request.app.state.messages.get("errors.server.internal")},
    )


# --- Include Routers ---
logger.info("Including routers...")
app.include_router(auth.router)       # /api/auth/...
app.include_router(movies.router)     # /api/movies
app.include_router(favorites.router)  # /api/favorites
logger.info("Routers included.")


@app.get("/health")
def health_check():
    return {"status": "ok"}
