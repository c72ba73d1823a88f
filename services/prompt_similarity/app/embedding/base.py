from abc import ABC, abstractmethod
from typing import List

class EmbeddingProvider(ABC):
    """
    Minimal embedding provider interface.
    Must return a fixed-length vector of floats for any non-empty text.
    Implementations are shared across requests and must not keep per-request state.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        ...

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        ...

