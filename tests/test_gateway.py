import asyncio

from playground.sandbox.classify import ExecutionResult
from playground.sandbox.enums import Outcome
from playground.sandbox.gateway import ExecutionGateway
from conftest import requires


class StaticRunner:
    kind = "static"

    def __init__(self, result):
        self.result = result
        self.sources = []

    async def run(self, source):
        self.sources.append(source)
        return self.result


class ExplodingRunner:
    kind = "broken"

    async def run(self, source):
        raise KeyError("unexpected")


def test_dispatch_is_by_language_tag():
    py = StaticRunner(ExecutionResult(Outcome.success, "py"))
    js = StaticRunner(ExecutionResult(Outcome.success, "js"))
    gw = ExecutionGateway({"python": py, "javascript": js})

    result = asyncio.run(gw.execute("JavaScript", "console.log(1)"))

    assert result.text == "js"
    assert js.sources == ["console.log(1)"]
    assert py.sources == []


def test_unknown_language_is_unsupported():
    result = asyncio.run(ExecutionGateway({}).execute("brainfuck", "+++"))
    assert result.outcome is Outcome.unsupported
    assert "brainfuck" in result.text


def test_preview_languages_are_unsupported_with_hint():
    result = asyncio.run(ExecutionGateway({}).execute("html", "<h1>hi</h1>"))
    assert result.outcome is Outcome.unsupported
    assert "preview" in result.text


def test_runner_crash_becomes_internal_error(caplog):
    gw = ExecutionGateway({"python": ExplodingRunner()})
    result = asyncio.run(gw.execute("python", "print(1)"))
    assert result.outcome is Outcome.internal_error
    assert "runner crashed" in caplog.text


def test_languages_listing(gateway):
    listing = {item["language"]: item for item in gateway.languages()}
    assert listing["java"]["runner"] == "compiled"
    assert listing["python"]["runner"] == "interpreted"
    assert listing["python-inline"]["runner"] == "host-eval"
    assert listing["html"]["executable"] is False
    assert listing["css"]["executable"] is False


@requires("python3")
def test_python_scenario(gateway, scratch_root):
    result = asyncio.run(gateway.execute("python", "print('hi')"))
    assert result.outcome is Outcome.success
    assert result.text == "hi\n"
    assert list(scratch_root.iterdir()) == []


def test_host_eval_path_has_same_result_shape(gateway):
    inline = asyncio.run(gateway.execute("python-inline", "print('hi')"))
    assert inline == ExecutionResult(Outcome.success, "hi\n")
