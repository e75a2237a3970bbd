from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from playground.core.config import Settings, get_settings
from playground.core.logging import setup_logging
from playground.api.routers import github as r_github
from playground.api.routers import preview as r_preview
from playground.api.routers import run as r_run
from playground.sandbox.gateway import build_gateway
from playground.services.github import GitHubClient, GitHubError


async def github_error_handler(request: Request, exc: GitHubError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.gateway = build_gateway(settings)
    app.state.github = GitHubClient(
        base_url=settings.GITHUB_API_BASE,
        timeout=settings.GITHUB_TIMEOUT_S,
        default_branch=settings.GITHUB_DEFAULT_BRANCH,
    )
    app.add_exception_handler(GitHubError, github_error_handler)

    app.include_router(r_run.router, prefix=settings.API_PREFIX)
    app.include_router(r_preview.router, prefix=settings.API_PREFIX)
    app.include_router(r_github.router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=5000)
