"""FastAPI app: /health, /check, /config/cache."""

from deps import CORSMiddleware, FastAPI

from .config import configure_logging, get_host, get_port
from .routes import check_router, health_router
from .startup import validate_config

configure_logging()

app = FastAPI(
    title="Baseline Buddy API",
    description="Reports script and stylesheet features that are not baseline for your browser targets.",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health_router)
app.include_router(check_router)


@app.on_event("startup")
def _validate_config() -> None:
    validate_config()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_host(), port=get_port())
