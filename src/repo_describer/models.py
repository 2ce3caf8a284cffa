from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class RepositoryContext(BaseModel):
    project_name: str
    project_description: str
    file_structure: list[str]


class ProjectContext(BaseModel):
    context: RepositoryContext
    current_code: dict[str, str]


class DescribeRequest(BaseModel):
    path: str
    output_dir: str | None = None  # relative to the configured output root


class DescribeResponse(BaseModel):
    project_name: str
    primary_language: str
    entry_point: str
    context_path: Path
    description_path: Path
    description: str


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
