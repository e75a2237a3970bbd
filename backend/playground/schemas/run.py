from pydantic import BaseModel, ConfigDict, Field
from playground.sandbox.enums import Outcome


class RunCreate(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str = Field(min_length=1)
    source: str


class RunOut(BaseModel):
    outcome: Outcome
    text: str
    wall_ms: int | None = None


class LegacyRunIn(BaseModel):
    code: str


class LegacyRunOut(BaseModel):
    output: str


class LanguageOut(BaseModel):
    language: str
    runner: str
    executable: bool


class PreviewIn(BaseModel):
    html: str = ""
    css: str = ""
    js: str = ""
