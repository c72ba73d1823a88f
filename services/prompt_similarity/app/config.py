import os

DATABASE_URL = os.getenv("DATABASE_URL")

EMBEDDINGS_PROVIDER = os.getenv("EMBEDDINGS_PROVIDER", "openai").lower()
EMBEDDINGS_MODEL = os.getenv("EMBEDDINGS_MODEL", "text-embedding-ada-002")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# ada-002 dimension
STUB_EMBEDDING_DIMS = int(os.getenv("STUB_EMBEDDING_DIMS", "1536"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()

# --- External call limits ---
EMBEDDING_TIMEOUT_SECS = float(os.getenv("EMBEDDING_TIMEOUT_SECS", "20.0"))
EMBEDDING_MAX_RETRIES = int(os.getenv("EMBEDDING_MAX_RETRIES", "2"))
STORE_TIMEOUT_SECS = float(os.getenv("STORE_TIMEOUT_SECS", "10.0"))

# Per-attempt limit for the OpenAI client. Every attempt, retries included,
# has to fit inside EMBEDDING_TIMEOUT_SECS.
EMBEDDING_ATTEMPT_TIMEOUT_SECS = float(
    os.getenv(
        "EMBEDDING_ATTEMPT_TIMEOUT_SECS",
        str(EMBEDDING_TIMEOUT_SECS / (EMBEDDING_MAX_RETRIES + 1)),
    )
)

if EMBEDDING_TIMEOUT_SECS <= 0 or STORE_TIMEOUT_SECS <= 0 or EMBEDDING_ATTEMPT_TIMEOUT_SECS <= 0:
    raise RuntimeError("Timeouts must be positive")
if EMBEDDING_MAX_RETRIES < 0:
    raise RuntimeError("EMBEDDING_MAX_RETRIES must be >= 0")
