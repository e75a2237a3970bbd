"""Line allowlists for known-benign toolchain chatter.

A line is dropped only when its whole content matches one of the patterns
and it carries no error signal. New banner variants go into the tables
below.
"""

import re
from dataclasses import dataclass, field

# diagnostic forms only; option text such as -XX:+ExitOnOutOfMemoryError is not one
ERROR_SIGNAL = re.compile(
    r"\b[Ee]rror:|\w*(?:Error|Exception)(?::|\s+in thread)|^Exception in thread"
)

JVM_LAUNCHER = (
    r"(NOTE: )?Picked up (_JAVA_OPTIONS|JAVA_TOOL_OPTIONS|JDK_JAVA_OPTIONS): .*",
    r"OpenJDK (64-Bit )?(Server|Client) VM warning: .*",
)

NOISE_PATTERNS: dict[str, dict[str, tuple[str, ...]]] = {
    "java": {
        "compile": JVM_LAUNCHER
        + (
            r"Note: .*",
            r"\S+\.java:\d+: warning: .*",
            r"warning: \[options\] .*",
            r"\d+ warnings?",
        ),
        "run": JVM_LAUNCHER,
    },
    "javascript": {
        "run": (
            r"\(node:\d+\) (\[\w+\] )?(ExperimentalWarning|DeprecationWarning): .*",
            r"\(Use `node --trace-(warnings|deprecation) \.\.\.` to show where the warning was created\)",
        ),
    },
}


@dataclass(frozen=True)
class NoiseFilter:
    patterns: tuple[str, ...] = ()
    _compiled: tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_compiled", tuple(re.compile(p) for p in self.patterns)
        )

    def is_noise(self, line: str) -> bool:
        stripped = line.strip()
        if not stripped:
            return False
        for pat in self._compiled:
            if pat.fullmatch(stripped):
                # "warning: ... error ..." is not benign
                return not ERROR_SIGNAL.search(stripped)
        return False

    def clean(self, text: str) -> str:
        kept = [line for line in text.splitlines() if not self.is_noise(line)]
        return "\n".join(kept).strip()


def noise_for(language: str, phase: str) -> NoiseFilter:
    return NoiseFilter(NOISE_PATTERNS.get(language, {}).get(phase, ()))
