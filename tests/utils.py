from __future__ import annotations

import os
import time
from typing import Any, Dict, Optional, Tuple

import requests


DEFAULT_TIMEOUT = float(os.getenv("PS_TEST_HTTP_TIMEOUT_SECS", "30.0"))
RETRY_SECS = float(os.getenv("PS_TEST_RETRY_SECS", "0.5"))
RETRY_MAX = int(os.getenv("PS_TEST_RETRY_MAX", "20"))


class HttpError(RuntimeError):
    pass


def _join(base: str, path: str) -> str:
    if not base:
        raise ValueError("base url is empty")
    if not path.startswith("/"):
        path = "/" + path
    return base.rstrip("/") + path


def http_post_json(
    base_url: str,
    path: str,
    payload: Optional[Dict[str, Any]],
    *,
    params: Optional[Dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Tuple[int, Any, str]:
    r = requests.post(_join(base_url, path), params=params, json=payload, timeout=timeout)
    text = r.text or ""
    try:
        body = r.json()
    except ValueError:
        body = None
    return r.status_code, body, text


def get_sim(base_url: str, pid: Optional[str], guess: Optional[str]) -> Tuple[int, Any, str]:
    params = {"pid": pid} if pid is not None else None
    payload = {"guess": guess} if guess is not None else {}
    return http_post_json(base_url, "/api/getSim", payload, params=params)


def wait_for_health(base_url: str, health_path: str = "/health") -> None:
    url = _join(base_url, health_path)
    last_err: Optional[str] = None
    for _ in range(RETRY_MAX):
        try:
            r = requests.get(url, timeout=DEFAULT_TIMEOUT)
            if r.status_code < 400:
                return
            last_err = f"{r.status_code}: {r.text[:200]}"
        except requests.RequestException as e:
            last_err = str(e)
        time.sleep(RETRY_SECS)
    raise HttpError(f"Service not healthy at {url}. Last error: {last_err}")
