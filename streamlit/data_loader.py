"""
data_loader.py - API access for the timeline page.
"""

import logging
import os
from typing import Any, Dict, Optional

import requests
import streamlit as st

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
API_BASE = os.getenv("FASTAPI_URL", "http://localhost:8000")


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def _api(path: str, params: Optional[Dict[str, Any]] = None, timeout: int = 30) -> Optional[Dict]:
    try:
        r = requests.get(f"{API_BASE}{path}", params=params, timeout=timeout)
        return r.json() if r.status_code == 200 else None
    except requests.RequestException as e:
        logger.warning(f"GET {path} failed: {e}")
        return None


@st.cache_data(ttl=10)
def load_timeline(viewport_height: float) -> Optional[Dict]:
    """Positioned celebrities for the given viewport height."""
    return _api("/api/v1/timeline", params={"viewport_height": viewport_height})


def submit_vote(celebrity_id: str, percent: float) -> Optional[Dict]:
    """
    POST a vote. Failures are logged and reported as None; the page treats a
    failed vote as a no-op and never retries.
    """
    try:
        r = requests.post(
            f"{API_BASE}/api/v1/celebrities/{celebrity_id}/votes",
            json={"percent": percent},
            timeout=15,
        )
    except requests.RequestException as e:
        logger.warning(f"Vote on {celebrity_id} failed: {e}")
        return None

    if r.status_code != 200:
        logger.warning(f"Vote on {celebrity_id} rejected: {r.status_code} {r.text[:200]}")
        return None
    load_timeline.clear()
    return r.json()
