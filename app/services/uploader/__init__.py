"""YouTube upload services.

This module provides services for relaying uploads to YouTube:
- UploadService: Validation and the single resumable upload call
- build_plan: Part list and request-body assembly
"""

from app.services.uploader.request_builder import (
    UploadPlan,
    UploadRequest,
    build_plan,
    extract_bearer_token,
    parse_upload_request,
)
from app.services.uploader.youtube_uploader import UploadOutcome, UploadService

__all__ = [
    "UploadOutcome",
    "UploadPlan",
    "UploadRequest",
    "UploadService",
    "build_plan",
    "extract_bearer_token",
    "parse_upload_request",
]
