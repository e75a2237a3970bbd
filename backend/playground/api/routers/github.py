from fastapi import APIRouter, Depends, Query
from playground.api.deps import get_github, get_github_token
from playground.schemas.github import (
    Account,
    Commit,
    FileDelete,
    FileIn,
    FileOut,
    RepoCreate,
    Repository,
    TreeEntry,
)
from playground.services.github import GitHubClient

router = APIRouter(prefix="/github", tags=["github"])


@router.get("/user", response_model=Account)
async def get_user(
    token: str = Depends(get_github_token), gh: GitHubClient = Depends(get_github)
):
    return await gh.authenticate(token)


@router.get("/repos", response_model=list[Repository])
async def list_repos(
    token: str = Depends(get_github_token), gh: GitHubClient = Depends(get_github)
):
    return await gh.list_repositories(token)


@router.post("/repos", response_model=Repository, status_code=201)
async def create_repo(
    payload: RepoCreate,
    token: str = Depends(get_github_token),
    gh: GitHubClient = Depends(get_github),
):
    return await gh.create_repository(
        token, payload.name, payload.description, payload.private
    )


@router.get("/repos/{owner}/{repo}/contents", response_model=FileOut)
async def read_file(
    owner: str,
    repo: str,
    path: str = Query(min_length=1),
    ref: str | None = None,
    token: str = Depends(get_github_token),
    gh: GitHubClient = Depends(get_github),
):
    return await gh.read_file(token, owner, repo, path, ref)


@router.put("/repos/{owner}/{repo}/contents", response_model=Commit)
async def write_file(
    owner: str,
    repo: str,
    payload: FileIn,
    token: str = Depends(get_github_token),
    gh: GitHubClient = Depends(get_github),
):
    return await gh.write_file(
        token,
        owner,
        repo,
        payload.path.strip(),
        payload.content,
        payload.message.strip(),
        sha=payload.sha,
        branch=payload.branch,
    )


@router.delete("/repos/{owner}/{repo}/contents", response_model=Commit)
async def delete_file(
    owner: str,
    repo: str,
    payload: FileDelete,
    token: str = Depends(get_github_token),
    gh: GitHubClient = Depends(get_github),
):
    return await gh.delete_file(
        token,
        owner,
        repo,
        payload.path.strip(),
        payload.message.strip(),
        sha=payload.sha,
        branch=payload.branch,
    )


@router.get("/repos/{owner}/{repo}/commits", response_model=list[Commit])
async def list_commits(
    owner: str,
    repo: str,
    path: str = "",
    limit: int = Query(default=10, ge=1, le=100),
    token: str = Depends(get_github_token),
    gh: GitHubClient = Depends(get_github),
):
    return await gh.list_history(token, owner, repo, path, limit)


@router.get("/repos/{owner}/{repo}/tree", response_model=list[TreeEntry])
async def repo_tree(
    owner: str,
    repo: str,
    ref: str | None = None,
    token: str = Depends(get_github_token),
    gh: GitHubClient = Depends(get_github),
):
    return await gh.get_tree(token, owner, repo, ref)
