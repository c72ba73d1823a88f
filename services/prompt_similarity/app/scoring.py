from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from sqlalchemy.orm import Session

from app.config import EMBEDDING_TIMEOUT_SECS, STORE_TIMEOUT_SECS
from app.db import lookup_prompt
from app.embedding.base import EmbeddingProvider
from app.errors import (
    NotFoundError,
    ProviderError,
    ProviderTimeoutError,
    ScoringError,
    ValidationError,
)
from app.similarity import cosine_similarity


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimilarityResult:
    id: str
    reference_text: str
    similarity: float


async def _bounded(what: str, timeout: float, call: Callable[..., Any], *args) -> Any:
    """
    Run a blocking collaborator call in a worker thread under a timeout.

    Taxonomy errors pass through; anything else becomes a ProviderError
    carrying the original message.
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(call, *args), timeout)
    except ScoringError:
        raise
    except (asyncio.TimeoutError, TimeoutError) as e:
        raise ProviderTimeoutError(str(e) or f"{what} timed out after {timeout:g}s") from e
    except Exception as e:
        raise ProviderError(str(e) or f"{what} failed: {type(e).__name__}") from e


async def _embed(embedder: EmbeddingProvider, text: str, timeout: float) -> List[float]:
    vector = await _bounded("Embedding request", timeout, embedder.embed, text)
    if not vector:
        raise ProviderError("Embedding provider returned empty embedding")
    return vector


async def score_guess(
    session_factory: Callable[[], Session],
    embedder: EmbeddingProvider,
    prompt_id: Optional[str],
    guess: Optional[str],
    *,
    embedding_timeout: Optional[float] = None,
    store_timeout: Optional[float] = None,
) -> SimilarityResult:
    if embedding_timeout is None:
        embedding_timeout = EMBEDDING_TIMEOUT_SECS
    if store_timeout is None:
        store_timeout = STORE_TIMEOUT_SECS

    if not prompt_id:
        raise ValidationError("No prompt id provided")
    if not guess:
        raise ValidationError("No guess provided")

    t0 = time.time()

    prompt = await _bounded("Prompt lookup", store_timeout, lookup_prompt, session_factory, prompt_id)
    if prompt is None:
        raise NotFoundError(f"Prompt {prompt_id} not found")

    # The two embeddings are independent; fetch them concurrently.
    guess_vector, prompt_vector = await asyncio.gather(
        _embed(embedder, guess, embedding_timeout),
        _embed(embedder, prompt, embedding_timeout),
    )

    similarity = cosine_similarity(guess_vector, prompt_vector)

    logger.info(
        "scored guess prompt_id=%s model=%s similarity=%.4f timing_ms=%d",
        prompt_id,
        embedder.model_name,
        similarity,
        int((time.time() - t0) * 1000),
    )
    return SimilarityResult(id=prompt_id, reference_text=prompt, similarity=similarity)
