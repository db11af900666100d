"""
Storage configuration for KilledIt.
Media uploads go to a public S3 bucket in production and to local storage
in development.
"""
import os
from pathlib import Path

# Check if S3 should be used
USE_S3 = os.getenv('USE_S3_STORAGE', 'false').lower() == 'true'

DEFAULT_MEDIA_BUCKET = 'startup-logos'


def get_storage_settings(base_dir: Path) -> dict:
    """
    Returns storage-related settings based on environment configuration.

    Args:
        base_dir: The BASE_DIR from Django settings

    Returns:
        Dictionary of storage settings to be merged into Django settings
    """
    static_backend = {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    }

    if USE_S3:
        # Production: public-read bucket, obituary media is shown to everyone
        return {
            'USE_S3_STORAGE': True,
            'STORAGES': {
                'default': {'BACKEND': 'storages.backends.s3.S3Storage'},
                'staticfiles': static_backend,
            },
            'AWS_ACCESS_KEY_ID': os.getenv('AWS_ACCESS_KEY_ID'),
            'AWS_SECRET_ACCESS_KEY': os.getenv('AWS_SECRET_ACCESS_KEY'),
            'AWS_STORAGE_BUCKET_NAME': os.getenv('MEDIA_BUCKET', DEFAULT_MEDIA_BUCKET),
            'AWS_S3_REGION_NAME': os.getenv('AWS_S3_REGION_NAME', 'us-east-1'),
            'AWS_S3_FILE_OVERWRITE': False,
            'AWS_DEFAULT_ACL': 'public-read',
            'AWS_S3_CUSTOM_DOMAIN': os.getenv('AWS_S3_CUSTOM_DOMAIN') or None,
            'AWS_QUERYSTRING_AUTH': False,  # Public URLs, no signatures
            'AWS_S3_OBJECT_PARAMETERS': {
                'CacheControl': 'max-age=86400',  # 1 day cache
            },
            'MEDIA_URL': os.getenv('MEDIA_URL', '/media/'),
        }

    # Development: Use local file storage
    return {
        'USE_S3_STORAGE': False,
        'STORAGES': {
            'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
            'staticfiles': static_backend,
        },
        'MEDIA_URL': '/media/',
        'MEDIA_ROOT': base_dir / 'media',
    }
