import openai
from openai import OpenAI

from app.config import (
    OPENAI_API_KEY,
    EMBEDDINGS_MODEL,
    EMBEDDING_ATTEMPT_TIMEOUT_SECS,
    EMBEDDING_MAX_RETRIES,
)
from app.embedding.base import EmbeddingProvider
from app.errors import ProviderError, ProviderTimeoutError


class OpenAIEmbeddingProvider(EmbeddingProvider):
    def __init__(self, api_key: str = OPENAI_API_KEY, model: str = EMBEDDINGS_MODEL):
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is not set")

        self._model = model
        # The client retries timeouts, connection errors, 429 and 5xx with
        # backoff; attempts are sized so retries fit the outer embedding timeout.
        self.client = OpenAI(
            api_key=api_key,
            timeout=EMBEDDING_ATTEMPT_TIMEOUT_SECS,
            max_retries=EMBEDDING_MAX_RETRIES,
        )

    @property
    def model_name(self) -> str:
        return self._model

    def embed(self, text: str) -> list[float]:
        try:
            resp = self.client.embeddings.create(
                model=self._model,
                input=text,
            )
        except openai.APITimeoutError as e:
            raise ProviderTimeoutError(f"OpenAI embedding timed out: {e}") from e
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenAI embedding failed: {e}") from e

        if not resp.data:
            raise ProviderError("OpenAI embedding response contained no data")
        return list(resp.data[0].embedding)
