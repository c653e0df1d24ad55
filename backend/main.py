from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from themescore import __version__
from themescore.api.middleware import BodySizeLimitMiddleware
from themescore.api.routes import router as score_router
from themescore.config import Config
from themescore.schemas import HealthResponse
from themescore.utils.logging import configure_logging, get_logger

# Load environment variables
load_dotenv()


def _validation_detail(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the ThemeScore application for one server configuration."""
    if config is None:
        config = Config()
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="ThemeScore",
        description="Scores how closely an image's average color matches a theme color",
        version=__version__
    )
    app.state.config = config

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=config.max_body_bytes)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(RequestValidationError)
    async def bad_json_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": f"bad json: {_validation_detail(exc)}"})

    app.include_router(score_router)

    @app.get("/healthz", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        return HealthResponse(ok=True, version=__version__, service="themescore")

    return app


app = create_app()


if __name__ == "__main__":
    config = app.state.config
    get_logger().info(f"listening on {config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
