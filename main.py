import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.errors import SubmissionError
from app.routers import admissions
from app.services.email import AdminNotifier, build_connection_config
from app.services.storage import LocalUploadStorage
from config import settings
from database import Base, engine

# Logging ayarları
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Student Admissions")

# Yükleme dizini static mount'tan önce var olmalı
storage = LocalUploadStorage(settings.UPLOAD_DIR)
storage.ensure_directory()


@app.on_event("startup")
async def startup_event():
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Database error: {e}")
        raise

    app.state.storage = storage
    app.state.notifier = AdminNotifier(build_connection_config(settings), [settings.ADMIN_EMAIL])
    logger.info(f"Notifications will be sent to {settings.ADMIN_EMAIL}")


@app.on_event("shutdown")
async def shutdown_event():
    engine.dispose()
    logger.info("Database engine disposed")


@app.exception_handler(SubmissionError)
async def submission_error_handler(request: Request, exc: SubmissionError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.reason})


@app.exception_handler(RequestValidationError)
async def form_error_handler(request: Request, exc: RequestValidationError):
    # Dosya yerine metin (ya da tersi) gönderilen form parçaları
    fields = [str(err.get("loc", ("?",))[-1]) for err in exc.errors()]
    logger.info(f"Malformed form data on {request.url.path}: {fields}")
    return JSONResponse(status_code=400, content={"error": "Invalid form data"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Server error"})


app.include_router(admissions.router)

# CORS ayarları
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    max_age=600
)

app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
