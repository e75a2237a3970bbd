from dataclasses import dataclass

from playground.sandbox.enums import Outcome, Phase
from playground.sandbox.noise import NoiseFilter

TIMEOUT_TEXT = "Execution exceeded time budget."
NO_OUTPUT_TEXT = "Code executed successfully (no output)"


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    outcome: Outcome
    text: str

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.success


def classify(
    stdout: str,
    stderr: str,
    exit_status: int | None,
    timed_out: bool,
    phase: Phase = Phase.run,
    noise: NoiseFilter = NoiseFilter(),
) -> ExecutionResult:
    """Turn one finished (or killed) toolchain process into a result.

    A compile phase that exits 0 only produced warnings, so its leftover
    diagnostics never count as a compile error. A successful compile comes
    back as ``Outcome.success`` with the filtered diagnostics as text.
    """
    if timed_out:
        return ExecutionResult(Outcome.timeout, TIMEOUT_TEXT)

    diagnostics = noise.clean(stderr)
    if phase is Phase.compile:
        if exit_status != 0:
            return ExecutionResult(
                Outcome.compile_error,
                diagnostics or stderr.strip() or stdout.strip()
                or f"Compiler exited with status {exit_status}",
            )
        return ExecutionResult(Outcome.success, diagnostics)

    if diagnostics:
        return ExecutionResult(Outcome.runtime_error, diagnostics)
    if exit_status != 0:
        return ExecutionResult(
            Outcome.runtime_error,
            stdout or f"Process exited with status {exit_status}",
        )
    return ExecutionResult(Outcome.success, stdout or NO_OUTPUT_TEXT)
