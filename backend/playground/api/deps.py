from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from playground.sandbox.gateway import ExecutionGateway
from playground.services.github import GitHubClient, normalize_token

bearer = HTTPBearer(auto_error=False)


def get_gateway(request: Request) -> ExecutionGateway:
    return request.app.state.gateway


def get_github(request: Request) -> GitHubClient:
    return request.app.state.github


async def get_github_token(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> str:
    # GitHub's own "token <pat>" scheme is not seen by HTTPBearer
    raw = creds.credentials if creds else request.headers.get("authorization", "")
    return normalize_token(raw)
