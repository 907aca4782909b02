from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.notifications import build_notification_dispatcher
from app.routes.health import router as health_router
from app.routes.submissions import router as submissions_router
from app.routes.admin import router as admin_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.notification_dispatcher = build_notification_dispatcher(get_settings())
    yield


configure_logging()

app = FastAPI(title="Event Registration", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        get_settings().frontend_base_url,
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(submissions_router)
app.include_router(admin_router)
