import asyncio

import httpx
import pytest

from playground.services.github import (
    AuthError,
    ConflictError,
    GitHubClient,
    GitHubError,
    NotFoundError,
    RateLimitedError,
    normalize_token,
)
from fake_github import TOKEN, FakeGitHub


@pytest.fixture
def fake():
    backend = FakeGitHub()
    backend.repos["playground"] = backend._repo("playground")
    return backend


@pytest.fixture
def gh(fake):
    return GitHubClient(transport=fake.transport())


def run(coro):
    return asyncio.run(coro)


@pytest.mark.parametrize(
    "raw", ["ghp_valid", "Bearer ghp_valid", "token ghp_valid", "  bearer   ghp_valid "]
)
def test_normalize_token_strips_prefixes(raw):
    assert normalize_token(raw) == "ghp_valid"


@pytest.mark.parametrize("raw", ["", "   ", None, "Bearer "])
def test_normalize_token_requires_a_value(raw):
    with pytest.raises(AuthError):
        normalize_token(raw)


def test_authenticate(gh):
    account = run(gh.authenticate("token " + TOKEN))
    assert account.login == "octo"


def test_bad_token_is_auth_error(gh):
    with pytest.raises(AuthError) as err:
        run(gh.authenticate("ghp_wrong"))
    assert err.value.status_code == 401


def test_write_then_read_round_trip(gh):
    text = "print('héllo')\n# ünïcode survives\n"
    run(gh.write_file(TOKEN, "octo", "playground", "src/main.py", text, "save"))
    loaded = run(gh.read_file(TOKEN, "octo", "playground", "src/main.py"))
    assert loaded.content == text
    assert loaded.path == "src/main.py"


def test_overwrite_looks_up_current_sha(gh, fake):
    run(gh.write_file(TOKEN, "octo", "playground", "main.py", "v1", "first"))
    run(gh.write_file(TOKEN, "octo", "playground", "main.py", "v2", "second"))
    assert run(gh.read_file(TOKEN, "octo", "playground", "main.py")).content == "v2"
    assert [c["commit"]["message"] for c in fake.commits] == ["second", "first"]


def test_stale_sha_is_conflict(gh):
    run(gh.write_file(TOKEN, "octo", "playground", "main.py", "v1", "first"))
    with pytest.raises(ConflictError):
        run(gh.write_file(TOKEN, "octo", "playground", "main.py", "v2", "x", sha="stale"))


def test_missing_file_is_not_found(gh):
    with pytest.raises(NotFoundError):
        run(gh.read_file(TOKEN, "octo", "playground", "nope.py"))
    assert run(gh.get_file_sha(TOKEN, "octo", "playground", "nope.py")) is None


def test_create_and_list_repositories(gh, fake):
    repo = run(gh.create_repository(TOKEN, "  demo  ", "my demo", private=True))
    assert repo.name == "demo"
    assert repo.owner == "octo"
    assert repo.private is True
    names = [r.name for r in run(gh.list_repositories(TOKEN))]
    assert "demo" in names


def test_duplicate_repository_is_conflict(gh):
    with pytest.raises(ConflictError):
        run(gh.create_repository(TOKEN, "playground"))


def test_history_for_path(gh):
    run(gh.write_file(TOKEN, "octo", "playground", "a.py", "1", "add a"))
    run(gh.write_file(TOKEN, "octo", "playground", "b.py", "2", "add b"))
    history = run(gh.list_history(TOKEN, "octo", "playground", "a.py", limit=5))
    assert [c.message for c in history] == ["add a"]
    assert history[0].author == "Octo Cat"


def test_history_of_unknown_repo_is_empty(gh):
    assert run(gh.list_history(TOKEN, "octo", "missing")) == []


def test_delete_file(gh):
    run(gh.write_file(TOKEN, "octo", "playground", "tmp.py", "x", "add"))
    commit = run(gh.delete_file(TOKEN, "octo", "playground", "tmp.py", "remove"))
    assert commit.message == "remove"
    with pytest.raises(NotFoundError):
        run(gh.read_file(TOKEN, "octo", "playground", "tmp.py"))


def test_tree_lists_files(gh):
    run(gh.write_file(TOKEN, "octo", "playground", "a.py", "1", "add a"))
    run(gh.write_file(TOKEN, "octo", "playground", "lib/b.py", "22", "add b"))
    tree = run(gh.get_tree(TOKEN, "octo", "playground"))
    assert [(e.path, e.size) for e in tree] == [("a.py", 1), ("lib/b.py", 2)]


def test_rate_limit(gh, fake):
    fake.rate_limited = True
    with pytest.raises(RateLimitedError):
        run(gh.list_repositories(TOKEN))


def test_transport_failure_is_typed():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    gh = GitHubClient(transport=httpx.MockTransport(refuse))
    with pytest.raises(GitHubError) as err:
        run(gh.authenticate(TOKEN))
    assert err.value.status_code == 502
