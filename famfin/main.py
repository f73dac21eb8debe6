import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db import models, session
from .errors import FamFinError
from .routes import auth_router, budget_router, cash_flow_router, goals_router, tasks_router, users_router

logger = logging.getLogger(__name__)

app = FastAPI(title="FamFin")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(budget_router)
app.include_router(cash_flow_router)
app.include_router(goals_router)
app.include_router(tasks_router)


@app.exception_handler(FamFinError)
def famfin_error_handler(request: Request, exc: FamFinError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


@app.exception_handler(Exception)
def internal_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


@app.on_event("startup")
def startup_event():
    # In production, use migration tools like Alembic.
    models.Base.metadata.create_all(bind=session.engine)
    if settings.seed_demo_data:
        from .seed_data import seed_demo_family

        db = session.SessionLocal()
        try:
            seed_demo_family(db)
        finally:
            db.close()


@app.get("/health")
def health_check():
    return {"status": "ok"}
