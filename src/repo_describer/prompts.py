SYSTEM_PROMPT = "You are a helpful assistant."

INITIAL_PROMPT_TEMPLATE = """\
Primary Language: {primary_language}

File Structure:
{file_structure}

Entry Point: {entry_point}

Based on the above information, please:
1. Describe the purpose of the project.
2. Provide a best guess description of the components and how they work with one another.
"""

FOLLOWUP_PREAMBLE = (
    "Take in the following json data, and attempt to write a detailed project "
    "description based off of the components and their interactions with one another:"
)


def build_initial_prompt(primary_language: str, file_structure: list[str], entry_point: str) -> str:
    return INITIAL_PROMPT_TEMPLATE.format(
        primary_language=primary_language,
        file_structure="\n".join(file_structure),
        entry_point=entry_point,
    )


def build_followup_prompt(serialized_context: bytes | str) -> str:
    if isinstance(serialized_context, bytes):
        serialized_context = serialized_context.decode("utf-8")
    return f"{FOLLOWUP_PREAMBLE}\n\n{serialized_context}"
