"""
Tenor GIF search proxy.

Keeps the API key on the server. Returns Tenor's JSON untouched; errors
carry Tenor's status code back to the caller.
"""
import logging

import requests
from django.conf import settings

from apps.core.errors import RemoteFailure

logger = logging.getLogger(__name__)

DEFAULT_QUERY = 'funny meme'
DEFAULT_LIMIT = 20
MAX_LIMIT = 50


def search_gifs(query: str = '', limit: int = DEFAULT_LIMIT) -> dict:
    """
    Search Tenor. An empty query falls back to a popular term so the picker
    always has something to show.

    Raises:
        RemoteFailure: key missing (500), Tenor error (Tenor's status),
            network failure or a body that is not JSON (500)
    """
    api_key = getattr(settings, 'TENOR_API_KEY', '')
    if not api_key:
        logger.error("Tenor API key not configured")
        raise RemoteFailure("Tenor API key not configured", status_code=500)

    limit = max(1, min(int(limit), MAX_LIMIT))
    params = {
        'key': api_key,
        'client_key': settings.TENOR_CLIENT_KEY,
        'limit': limit,
        'media_filter': 'minimal',
        'q': query.strip() or DEFAULT_QUERY,
    }

    logger.info(f"Searching Tenor GIFs with query: {params['q']!r}")
    try:
        response = requests.get(
            f"{settings.TENOR_BASE_URL}/search",
            params=params,
            timeout=settings.TENOR_TIMEOUT,
        )
        if not response.ok:
            logger.error(f"Tenor API error: {response.status_code}")
            raise RemoteFailure(f"Tenor API error: {response.status_code}", status_code=response.status_code)
        # requests.JSONDecodeError is a RequestException
        data = response.json()
    except requests.RequestException as e:
        logger.error(f"Tenor API proxy error: {e}")
        raise RemoteFailure("Failed to fetch from Tenor API", status_code=500)

    logger.info(f"Tenor API response received, results: {len(data.get('results') or [])}")
    return data
