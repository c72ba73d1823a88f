from app.config import EMBEDDINGS_PROVIDER
from app.embedding.base import EmbeddingProvider
from app.embedding.openai_provider import OpenAIEmbeddingProvider
from app.embedding.stub_provider import StubEmbeddingProvider


def make_embedder(name: str = EMBEDDINGS_PROVIDER) -> EmbeddingProvider:
    """
    Build the configured provider. Called once per process by the app lifespan.
    """
    name = name.lower()
    if name == "stub":
        return StubEmbeddingProvider()
    if name == "openai":
        return OpenAIEmbeddingProvider()
    raise RuntimeError(f"Invalid EMBEDDINGS_PROVIDER={name}")
