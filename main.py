# =======================================
# SECTION: IMPORTS AND APP SETUP
# =======================================

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import APP_ENV, CORS_ORIGINS, validate_environment
from db import Base, engine
import models  # noqa: F401
from logging_config import configure_logging
from middleware import AuthGateMiddleware

configure_logging()

app = FastAPI(title="GoJumpingJack API")


@app.on_event("startup")
def on_startup():
    validate_environment(throw_on_missing=(APP_ENV == "production"))
    Base.metadata.create_all(bind=engine)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        text = "Invalid JSON body"
    else:
        text = "Invalid request"
    # flight routes answer with {"message"}, everything else with {"error"}
    key = "message" if request.url.path.startswith("/api/flights") else "error"
    return JSONResponse({key: text}, status_code=400)


# middleware added last runs first: the auth gate sits inside CORS
app.add_middleware(AuthGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =======================================
# SECTION: ROUTERS
# =======================================

from routers.health import router as health_router
from routers.flights import router as flights_router
from routers.duffel import router as duffel_router
from routers.auth import router as auth_router
from routers.users import router as users_router
from routers.airports import router as airports_router
from routers.unsplash import router as unsplash_router

app.include_router(health_router)
app.include_router(flights_router)
app.include_router(duffel_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(airports_router)
app.include_router(unsplash_router)
