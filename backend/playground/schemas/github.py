from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class Account(BaseModel):
    login: str
    id: int
    name: str | None = None
    avatar_url: str | None = None


class Repository(BaseModel):
    id: int
    name: str
    full_name: str
    owner: str
    private: bool = False
    description: str | None = None
    default_branch: str | None = None
    html_url: str | None = None
    updated_at: datetime | None = None


class RepoCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = ""
    private: bool = False


class FileIn(BaseModel):
    path: str = Field(min_length=1)
    content: str
    message: str = Field(min_length=1)
    sha: str | None = None
    branch: str | None = None


class FileOut(BaseModel):
    path: str
    content: str
    sha: str | None = None


class FileDelete(BaseModel):
    path: str = Field(min_length=1)
    message: str = Field(min_length=1)
    sha: str | None = None
    branch: str | None = None


class Commit(BaseModel):
    sha: str
    message: str = ""
    author: str | None = None
    date: datetime | None = None
    html_url: str | None = None


class TreeEntry(BaseModel):
    path: str
    type: str
    sha: str
    size: int | None = None
