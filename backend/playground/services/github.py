"""Thin async client for the GitHub REST API used to save and load code."""

import base64
import logging
import re
from urllib.parse import quote

import httpx

from playground.schemas.github import Account, Commit, FileOut, Repository, TreeEntry

logger = logging.getLogger("playground.github")

_TOKEN_PREFIX = re.compile(r"^(bearer|token)\s+", re.IGNORECASE)


class GitHubError(Exception):
    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.message = message
        self.upstream_status = upstream_status


class AuthError(GitHubError):
    status_code = 401


class NotFoundError(GitHubError):
    status_code = 404


class ConflictError(GitHubError):
    status_code = 409


class RateLimitedError(GitHubError):
    status_code = 429


def normalize_token(token: str | None) -> str:
    cleaned = _TOKEN_PREFIX.sub("", (token or "").strip()).strip()
    if not cleaned:
        raise AuthError("GitHub token is required")
    return cleaned


def _message(resp: httpx.Response) -> str:
    try:
        return resp.json().get("message") or resp.reason_phrase
    except ValueError:
        return resp.text or resp.reason_phrase


def raise_for_status(resp: httpx.Response, what: str) -> None:
    if resp.is_success:
        return
    status = resp.status_code
    msg = _message(resp)
    if status == 401:
        raise AuthError(
            "Invalid or expired GitHub token. Please generate a new token.", status
        )
    if status == 429 or (
        status == 403 and resp.headers.get("x-ratelimit-remaining") == "0"
    ):
        raise RateLimitedError(f"GitHub rate limit exceeded: {msg}", status)
    if status == 403:
        raise AuthError(f"Not allowed to {what}: {msg}", status)
    if status == 404:
        raise NotFoundError(f"Not found while trying to {what}", status)
    if status == 409 or (
        status == 422 and ("sha" in msg.lower() or "already exists" in msg.lower())
    ):
        raise ConflictError(msg or f"Conflict while trying to {what}", status)
    raise GitHubError(f"Failed to {what} (Status: {status}): {msg}", status)


def _repository(data: dict) -> Repository:
    return Repository(
        id=data["id"],
        name=data["name"],
        full_name=data.get("full_name") or f'{data["owner"]["login"]}/{data["name"]}',
        owner=data["owner"]["login"],
        private=data.get("private", False),
        description=data.get("description"),
        default_branch=data.get("default_branch"),
        html_url=data.get("html_url"),
        updated_at=data.get("updated_at"),
    )


def _commit(data: dict) -> Commit:
    # list endpoints nest message/author under "commit"; write endpoints
    # return the git commit object directly
    inner = data.get("commit", data)
    author = inner.get("author") or {}
    return Commit(
        sha=data["sha"],
        message=inner.get("message", ""),
        author=author.get("name"),
        date=author.get("date"),
        html_url=data.get("html_url"),
    )


class GitHubClient:
    def __init__(
        self,
        base_url: str = "https://api.github.com",
        timeout: float = 15,
        default_branch: str = "main",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_branch = default_branch
        self._transport = transport

    async def _request(
        self, method: str, url: str, token: str, **kwargs
    ) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {normalize_token(token)}",
            "Accept": "application/vnd.github.v3+json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as exc:
            logger.error("could not reach GitHub: %s", exc)
            raise GitHubError(f"GitHub unreachable: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return resp

    @staticmethod
    def _contents_url(owner: str, repo: str, path: str) -> str:
        return f"/repos/{owner}/{repo}/contents/{quote(path.strip('/'), safe='/')}"

    async def authenticate(self, token: str) -> Account:
        resp = await self._request("GET", "/user", token)
        raise_for_status(resp, "authenticate with GitHub")
        data = resp.json()
        return Account(
            login=data["login"],
            id=data["id"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
        )

    async def list_repositories(self, token: str) -> list[Repository]:
        resp = await self._request(
            "GET",
            "/user/repos",
            token,
            params={"sort": "updated", "per_page": 100},
        )
        raise_for_status(resp, "fetch repositories")
        return [_repository(r) for r in resp.json()]

    async def create_repository(
        self, token: str, name: str, description: str = "", private: bool = False
    ) -> Repository:
        name = name.strip()
        if not name:
            raise ValueError("Repository name is required")
        body = {"name": name, "private": private, "auto_init": True}
        if description.strip():
            body["description"] = description.strip()
        resp = await self._request("POST", "/user/repos", token, json=body)
        raise_for_status(resp, "create repository")
        return _repository(resp.json())

    async def read_file(
        self, token: str, owner: str, repo: str, path: str, ref: str | None = None
    ) -> FileOut:
        resp = await self._request(
            "GET",
            self._contents_url(owner, repo, path),
            token,
            params={"ref": ref or self.default_branch},
        )
        if resp.status_code == 404:
            raise NotFoundError(f'File "{path}" not found in repository', 404)
        raise_for_status(resp, "fetch file content")
        data = resp.json()
        if isinstance(data, list) or data.get("type") != "file":
            raise NotFoundError(f'"{path}" is not a file', 404)
        raw = base64.b64decode("".join(data.get("content", "").split()))
        return FileOut(path=data.get("path", path), content=raw.decode("utf-8"), sha=data.get("sha"))

    async def get_file_sha(
        self, token: str, owner: str, repo: str, path: str, ref: str | None = None
    ) -> str | None:
        try:
            return (await self.read_file(token, owner, repo, path, ref)).sha
        except NotFoundError:
            return None

    async def write_file(
        self,
        token: str,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
        branch: str | None = None,
    ) -> Commit:
        if sha is None:
            sha = await self.get_file_sha(token, owner, repo, path, branch)
        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if sha:
            body["sha"] = sha
        if branch:
            body["branch"] = branch
        resp = await self._request(
            "PUT", self._contents_url(owner, repo, path), token, json=body
        )
        raise_for_status(resp, "commit file")
        return _commit(resp.json()["commit"])

    async def delete_file(
        self,
        token: str,
        owner: str,
        repo: str,
        path: str,
        message: str,
        sha: str | None = None,
        branch: str | None = None,
    ) -> Commit:
        if sha is None:
            sha = await self.get_file_sha(token, owner, repo, path, branch)
            if sha is None:
                raise NotFoundError(f'File "{path}" not found in repository', 404)
        body = {"message": message, "sha": sha, "branch": branch or self.default_branch}
        resp = await self._request(
            "DELETE", self._contents_url(owner, repo, path), token, json=body
        )
        raise_for_status(resp, "delete file")
        return _commit(resp.json()["commit"])

    async def list_history(
        self, token: str, owner: str, repo: str, path: str = "", limit: int = 10
    ) -> list[Commit]:
        params = {"per_page": limit}
        if path:
            params["path"] = path
        resp = await self._request(
            "GET", f"/repos/{owner}/{repo}/commits", token, params=params
        )
        # new files and empty repositories have no history yet
        if resp.status_code in (404, 409):
            return []
        raise_for_status(resp, "fetch commit history")
        data = resp.json()
        return [_commit(c) for c in data] if isinstance(data, list) else []

    async def get_tree(
        self, token: str, owner: str, repo: str, ref: str | None = None
    ) -> list[TreeEntry]:
        branch = ref or self.default_branch
        resp = await self._request(
            "GET", f"/repos/{owner}/{repo}/git/ref/heads/{branch}", token
        )
        raise_for_status(resp, "fetch branch information")
        commit_sha = resp.json()["object"]["sha"]

        resp = await self._request(
            "GET", f"/repos/{owner}/{repo}/git/commits/{commit_sha}", token
        )
        raise_for_status(resp, "fetch commit information")
        tree_sha = resp.json()["tree"]["sha"]

        resp = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/git/trees/{tree_sha}",
            token,
            params={"recursive": 1},
        )
        raise_for_status(resp, "fetch repository tree")
        return [
            TreeEntry(path=e["path"], type=e["type"], sha=e["sha"], size=e.get("size"))
            for e in resp.json().get("tree", [])
        ]
