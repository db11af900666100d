"""
Media API endpoints: file uploads and the GIF search proxy.
"""
from typing import List

from django.http import HttpRequest
from ninja import File, Router, Schema
from ninja.files import UploadedFile

from apps.identity.session import session_auth
from .gif_service import DEFAULT_LIMIT, search_gifs
from .upload_service import upload_media

router = Router(tags=["Media"])


class UploadOut(Schema):
    urls: List[str]


@router.post("/upload", response=UploadOut, auth=session_auth)
def upload_media_api(request: HttpRequest, files: List[UploadedFile] = File(...)):
    """
    Upload images/videos and get back their public URLs.

    Everything is validated before the first byte is stored.
    """
    return {"urls": upload_media(files)}


@router.get("/gifs", auth=None)
def search_gifs_api(request: HttpRequest, q: str = '', limit: int = DEFAULT_LIMIT):
    """
    Proxy a Tenor search. Returns Tenor's raw payload.
    """
    return search_gifs(q, limit)
