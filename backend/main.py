# backend/main.py

import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Config
from models.database import Base, engine, SessionLocal
from models import storage
from routers import humanize_router, file_router, achievement_router, auth_router

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Text Alchemist & File Forge")

# upload folders
os.makedirs(Config.UPLOAD_DIR, exist_ok=True)
os.makedirs(Config.CONVERTED_DIR, exist_ok=True)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# tables + guest user
Base.metadata.create_all(bind=engine)
with SessionLocal() as db:
    storage.ensure_guest_user(db, Config.GUEST_USERNAME, Config.GUEST_PASSWORD)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Invalid request data on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


app.include_router(humanize_router.router)
app.include_router(file_router.router)
app.include_router(achievement_router.router)
app.include_router(auth_router.router)


@app.get("/")
def root():
    return {"message": "Backend server is running!"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
