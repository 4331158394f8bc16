"""FastAPI app: /health, /features, /check, /analyze."""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from baseline_checker import __version__

from .config import get_host, get_port
from .routes import analyze_router, check_router, features_router, health_router, root_router
from .startup import validate_config

app = FastAPI(
    title="Baseline Compatibility Checker API",
    description="Baseline status of web features in CSS and JavaScript, plus Together.ai fix suggestions.",
    version=__version__,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(features_router)
app.include_router(check_router)
app.include_router(analyze_router)


@app.on_event("startup")
def _validate_config() -> None:
    """Validate config at startup and warn if .env, TOGETHER_API_KEY or the dataset is missing."""
    validate_config()


def run() -> None:
    """Serve the API with uvicorn on HOST:PORT."""
    uvicorn.run(app, host=get_host(), port=get_port())
