import logging
from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from repo_describer import config, core, errors, llm, models

logger = logging.getLogger(__name__)


app = FastAPI(title="Repository Describer")

_ERROR_STATUS = {
    errors.ArgumentError: 400,
    errors.IgnoreFileReadError: 422,
    errors.TraversalError: 422,
    errors.ServiceError: 502,
    errors.SerializationError: 500,
    errors.WriteError: 500,
}


def _resolve_output_root(base: Path, requested: str) -> Path:
    # Requests may only pick a directory beneath the configured output root.
    base = base.resolve()
    target = (base / requested).resolve()
    if not target.is_relative_to(base):
        raise errors.ArgumentError(f"output_dir must be inside {base}")
    return target


def get_client(cfg: config.Config = Depends(config.get_config)) -> llm.TextGenerationClient:
    return llm.OpenAIClient(cfg.llm)


@app.exception_handler(errors.DescriberError)
async def describer_error_handler(request: Request, exc: errors.DescriberError) -> JSONResponse:
    logger.error(f"{type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=_ERROR_STATUS.get(type(exc), 500),
        content=models.ErrorResponse(message=exc.message).model_dump(),
    )


@app.exception_handler(config.ConfigError)
async def config_error_handler(request: Request, exc: config.ConfigError) -> JSONResponse:
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=500,
        content=models.ErrorResponse(message=str(exc)).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content=models.ErrorResponse(message=messages).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content=models.ErrorResponse(message="Internal server error").model_dump(),
    )


@app.get("/")
async def root():
    return {
        "service": "Repository Describer",
        "usage": "POST /describe with {\"path\": \"/path/to/project\"}",
        "docs": "/docs",
    }


@app.post(
    "/describe",
    response_model=models.DescribeResponse,
)
def describe(
    request: models.DescribeRequest,
    cfg: config.Config = Depends(config.get_config),
    client: llm.TextGenerationClient = Depends(get_client),
) -> models.DescribeResponse:
    if request.output_dir:
        cfg = cfg.model_copy(
            update={"output_root": _resolve_output_root(cfg.output_root, request.output_dir)}
        )
    result = core.run_pipeline(request.path, cfg, client)
    return models.DescribeResponse(**result._asdict())
