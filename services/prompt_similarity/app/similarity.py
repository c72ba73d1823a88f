import numpy as np

from app.errors import DegenerateVectorError, InvalidInputError


def _as_vector(v) -> np.ndarray:
    try:
        arr = np.asarray(v, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Embedding is not numeric: {e}") from e
    if arr.ndim != 1:
        raise InvalidInputError("Embedding vectors must be one-dimensional")
    return arr


def cosine_similarity(a, b) -> float:
    a = _as_vector(a)
    b = _as_vector(b)

    if a.shape != b.shape:
        raise InvalidInputError(
            f"Embedding dimensions differ: {a.shape[0]} != {b.shape[0]}"
        )
    if a.size == 0:
        raise InvalidInputError("Embedding vectors are empty")
    if not (np.isfinite(a).all() and np.isfinite(b).all()):
        raise InvalidInputError("Embedding vectors contain non-finite values")

    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na == 0.0 or nb == 0.0:
        raise DegenerateVectorError("Cannot compare a zero-magnitude embedding")

    # rounding can push |sim| slightly past 1
    return float(np.clip(np.dot(a, b) / (na * nb), -1.0, 1.0))
