import hashlib
import random

from app.config import STUB_EMBEDDING_DIMS
from app.embedding.base import EmbeddingProvider


class StubEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic pseudo-embedding for tests/dev.
    Components are drawn from [0, 1), so two different texts always score
    strictly between 0 and 1 and identical texts score 1.0.
    """

    def __init__(self, dims: int = STUB_EMBEDDING_DIMS, model_name: str = ""):
        if dims < 1:
            raise ValueError("dims must be >= 1")
        self._dims = dims
        self._model = model_name or f"stub-{dims}"

    @property
    def model_name(self) -> str:
        return self._model

    def embed(self, text: str) -> list[float]:
        h = hashlib.sha256(text.encode("utf-8")).digest()
        seed = int.from_bytes(h[:8], "big", signed=False)
        rng = random.Random(seed)
        return [rng.random() for _ in range(self._dims)]
