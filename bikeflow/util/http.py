# bikeflow/util/http.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any

from bikeflow.util.console import error


def is_url(source) -> bool:
    return str(source).lower().startswith(("http:", "https:"))


def http_get_json(url: str, timeout: int = 30) -> Any:
    """
    HTTP GET -> JSON.

    HTTP errors print the status and the start of the error body before
    re-raising, so a failed load says why it failed.
    """
    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": "bikeflow/1.0",
            "Accept": "application/json",
        },
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except urllib.error.HTTPError as e:
        body = ""
        try:
            body = e.read().decode("utf-8", errors="replace")
        except OSError:
            body = ""

        error(f"[http] HTTP ERROR: {e.code} {e.reason} ({url})")
        if body:
            error(f"[http] ERROR BODY (first 500 chars): {body[:500]}")
        raise

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Response from {url} is not valid JSON: {e}") from e
