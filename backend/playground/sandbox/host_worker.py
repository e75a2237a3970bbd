"""Evaluate a source string in a fresh namespace and report as JSON.

Launched as ``python -m playground.sandbox.host_worker`` with
``{"source": ...}`` on stdin. The result is a single JSON line on stdout:
``{"status": "succeeded" | "failed", "stdout": ..., "stderr": ...}``.
"""

import contextlib, io, json, sys, traceback


def evaluate(source: str) -> dict:
    stdout = io.StringIO()
    stderr = io.StringIO()
    ns = {"__name__": "__main__", "__builtins__": __builtins__}
    status = "succeeded"
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
        try:
            code = compile(source, "<playground>", "exec")
            exec(code, ns)
        except SystemExit as exc:
            if exc.code not in (None, 0):
                status = "failed"
                stderr.write(f"SystemExit: {exc.code}\n")
        except BaseException:
            status = "failed"
            etype, value, tb = sys.exc_info()
            # drop this module's own frame from the traceback
            stderr.write("".join(traceback.format_exception(etype, value, tb.tb_next)))
    return {"status": status, "stdout": stdout.getvalue(), "stderr": stderr.getvalue()}


def main():
    raw = sys.stdin.read()
    try:
        payload = json.loads(raw)
    except ValueError:
        result = {"status": "failed", "stdout": "", "stderr": "invalid json"}
    else:
        result = evaluate(payload.get("source", ""))
    sys.__stdout__.write("\n" + json.dumps(result) + "\n")
    sys.__stdout__.flush()


if __name__ == "__main__":
    main()
