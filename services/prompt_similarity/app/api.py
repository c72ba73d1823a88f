import json
import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictStr
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.config import DATABASE_URL
from app.db import get_session_factory, make_engine, make_session_factory
from app.embedding.base import EmbeddingProvider
from app.embedding.provider import make_embedder
from app.errors import ErrorKind, ProviderError, ScoringError, ValidationError
from app.scoring import score_guess


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Lifespan: process-wide clients
# ---------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        app.state.embedder = make_embedder()
    except Exception as e:
        raise RuntimeError(f"Embedding provider misconfigured: {e}") from e

    engine = make_engine(DATABASE_URL)
    app.state.session_factory = make_session_factory(engine)
    logger.info("prompt similarity ready model=%s", app.state.embedder.model_name)
    try:
        yield
    finally:
        engine.dispose()


app = FastAPI(title="Prompt Similarity", lifespan=lifespan)


def get_embedder(request: Request) -> EmbeddingProvider:
    return request.app.state.embedder


# ---------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------

class SimilarityRequest(BaseModel):
    guess: Optional[StrictStr] = None


class SimilarityResponse(BaseModel):
    id: str
    referenceText: str
    similarity: float


async def read_guess(request: Request) -> Optional[str]:
    """
    Pull the guess out of a JSON body. A missing body means no guess.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        payload = json.loads(raw)
        return SimilarityRequest.model_validate(payload).guess
    except (ValueError, PydanticValidationError) as e:
        raise ValidationError("Invalid request body") from e


# ---------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------

def error_response(status_code: int, kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers={"X-Error-Kind": kind.value},
    )


@app.exception_handler(ScoringError)
async def scoring_error_handler(request: Request, exc: ScoringError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed kind=%s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    else:
        logger.warning("%s %s rejected kind=%s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    return error_response(exc.status_code, exc.kind, exc.message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s crashed", request.method, request.url.path)
    return error_response(500, ErrorKind.PROVIDER, str(exc))


# ---------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------

@app.get("/health")
def health():
    return {"ok": True}


@app.post("/api/getSim", response_model=SimilarityResponse)
async def get_sim(
    request: Request,
    pid: Optional[str] = None,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    embedder: EmbeddingProvider = Depends(get_embedder),
):
    if not pid:
        raise ValidationError("No prompt id provided")

    guess = await read_guess(request)
    try:
        result = await score_guess(session_factory, embedder, pid, guess)
    except ScoringError:
        raise
    except Exception as e:
        logger.exception("scoring failed prompt_id=%s", pid)
        raise ProviderError(str(e)) from e

    return SimilarityResponse(
        id=result.id,
        referenceText=result.reference_text,
        similarity=result.similarity,
    )
