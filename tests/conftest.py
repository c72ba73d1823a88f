from __future__ import annotations

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def _try_load_env() -> None:
    """
    Load a repo-root .env if present so running live tests locally is easy.
    """
    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_try_load_env()


@pytest.fixture(scope="session")
def prompt_similarity_url() -> str:
    url = os.getenv("PROMPT_SIMILARITY_URL")
    if not url:
        pytest.skip("PROMPT_SIMILARITY_URL not set; live service tests skipped.")
    return url


@pytest.fixture(scope="session")
def live_prompt_id() -> str:
    # Must exist in the live service's prompt table.
    return os.getenv("LIVE_PROMPT_ID", "p1")


@pytest.fixture(scope="session")
def missing_prompt_id() -> str:
    return os.getenv("MISSING_PROMPT_ID", "p404")
