import enum
import logging
import time
from pathlib import Path
from typing import NamedTuple

from repo_describer import config, context, prompts
from repo_describer.errors import ArgumentError, WriteError
from repo_describer.ignore import compile_ignore
from repo_describer.llm import TextGenerationClient
from repo_describer.scanner import scan_repository

logger = logging.getLogger(__name__)

CONTEXT_FILE_NAME = "project_context.json"
DESCRIPTION_FILE_NAME = "project_description.md"


class PipelineState(enum.Enum):
    INIT = "init"
    SCANNED = "scanned"
    INITIAL_PROMPT_SENT = "initial_prompt_sent"
    CONTEXT_ASSEMBLED = "context_assembled"
    SERIALIZED = "serialized"
    FOLLOWUP_PROMPT_SENT = "followup_prompt_sent"
    DONE = "done"
    ABORTED = "aborted"


class PipelineResult(NamedTuple):
    project_name: str
    primary_language: str
    entry_point: str
    context_path: Path
    description_path: Path
    description: str


def safe_file_name(path: str) -> str:
    return path.replace("/", "_").replace("\\", "_")


def _write_artifact(path: Path, data: bytes) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise WriteError(f"Failed to write {path}: {exc}") from exc
    logger.info(f"Wrote {path} ({len(data)} bytes)")


class PipelineRun:
    """One scan-and-describe run over a directory.

    The run moves forward through ``PipelineState`` one step at a time. The
    first exception moves it to ``ABORTED`` and is re-raised; an artifact
    already on disk at that point is left in place.
    """

    def __init__(self, root: str | Path, cfg: config.Config, client: TextGenerationClient):
        self.root = Path(root)
        self.cfg = cfg
        self.client = client
        self.state = PipelineState.INIT
        self.output_dir = cfg.output_root / safe_file_name(str(root))

    def _advance(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline {self.state.value} -> {state.value}")
        self.state = state

    def _check_root(self) -> None:
        if not self.root.exists():
            raise ArgumentError(f"Directory not found: {self.root}")
        if not self.root.is_dir():
            raise ArgumentError(f"Not a directory: {self.root}")

    def run(self) -> PipelineResult:
        if self.state is not PipelineState.INIT:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value})")
        try:
            return self._run()
        except Exception:
            logger.error(f"Pipeline aborted after state '{self.state.value}'")
            self.state = PipelineState.ABORTED
            raise

    def _run(self) -> PipelineResult:
        self._check_root()
        project_name = self.root.resolve().name
        logger.info(f"Describing {project_name} at {self.root}")

        matcher = compile_ignore(self.root, self.cfg.scan.ignore_file_name)
        scan = scan_repository(self.root, matcher, vcs_dir=self.cfg.scan.vcs_dir)
        self._advance(PipelineState.SCANNED)

        initial_prompt = prompts.build_initial_prompt(
            scan.primary_language, scan.file_structure, scan.entry_point,
        )
        logger.debug(f"Initial prompt:\n{initial_prompt}")
        t0 = time.monotonic()
        overview = self.client.complete(initial_prompt)
        logger.info(f"Initial description generated in {time.monotonic() - t0:.1f}s")
        self._advance(PipelineState.INITIAL_PROMPT_SENT)

        project_context = context.assemble_context(
            project_name, overview, scan.file_structure, scan.current_code,
        )
        self._advance(PipelineState.CONTEXT_ASSEMBLED)

        serialized = context.serialize_context(project_context)
        context_path = self.output_dir / CONTEXT_FILE_NAME
        _write_artifact(context_path, serialized)
        self._advance(PipelineState.SERIALIZED)

        t0 = time.monotonic()
        description = self.client.complete(prompts.build_followup_prompt(serialized))
        logger.info(f"Project description generated in {time.monotonic() - t0:.1f}s")
        self._advance(PipelineState.FOLLOWUP_PROMPT_SENT)

        description_path = self.output_dir / DESCRIPTION_FILE_NAME
        _write_artifact(description_path, description.encode("utf-8"))
        self._advance(PipelineState.DONE)

        return PipelineResult(
            project_name=project_name,
            primary_language=scan.primary_language,
            entry_point=scan.entry_point,
            context_path=context_path,
            description_path=description_path,
            description=description,
        )


def run_pipeline(root: str | Path, cfg: config.Config, client: TextGenerationClient) -> PipelineResult:
    return PipelineRun(root, cfg, client).run()
