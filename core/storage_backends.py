# core/storage_backends.py
from __future__ import annotations

import os

from storages.backends.s3boto3 import S3Boto3Storage


class MediaStorage(S3Boto3Storage):
    """
    Media bucket for product images and profile pictures.

    Selected through STORAGES["default"] when USE_S3=True; local dev and tests
    keep Django's filesystem / in-memory storage.
    """

    bucket_name = os.getenv("AWS_S3_MEDIA_BUCKET", "")
    default_acl = None
    file_overwrite = False
    location = "media"
    querystring_auth = False
