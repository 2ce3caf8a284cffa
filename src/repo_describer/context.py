import json

from pydantic import ValidationError

from repo_describer.errors import SerializationError
from repo_describer.models import ProjectContext, RepositoryContext


def assemble_context(
    project_name: str,
    project_description: str,
    file_structure: list[str],
    current_code: dict[str, str],
) -> ProjectContext:
    if set(file_structure) != set(current_code):
        raise ValueError("file_structure and current_code must list the same paths")
    return ProjectContext(
        context=RepositoryContext(
            project_name=project_name,
            project_description=project_description,
            file_structure=list(file_structure),
        ),
        current_code=dict(current_code),
    )


def serialize_context(project_context: ProjectContext) -> bytes:
    """Encode the context as indented JSON with sorted keys.

    Equal values always produce identical bytes; the file structure keeps its
    traversal order since it is a list.
    """
    try:
        text = json.dumps(
            project_context.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
        )
        return (text + "\n").encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to serialize project context: {exc}") from exc


def load_context(data: bytes | str) -> ProjectContext:
    try:
        return ProjectContext.model_validate_json(data)
    except ValidationError as exc:
        raise SerializationError(f"Invalid project context: {exc}") from exc
