import enum


class Outcome(str, enum.Enum):
    success = "Success"
    compile_error = "CompileError"
    runtime_error = "RuntimeError"
    timeout = "Timeout"
    unsupported = "Unsupported"
    internal_error = "InternalError"


class Phase(str, enum.Enum):
    compile = "compile"
    run = "run"
