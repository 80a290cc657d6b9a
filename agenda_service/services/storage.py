"""
Image storage on Cloudflare R2: PNG bytes + key in, public URL out.
"""

import asyncio
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import (
    R2_ACCESS_KEY_ID,
    R2_ACCOUNT_ID,
    R2_BUCKET_NAME,
    R2_CACHE_CONTROL,
    R2_PUBLIC_URL,
    R2_SECRET_ACCESS_KEY,
)

logger = logging.getLogger(__name__)


class StorageUploadError(Exception):
    """Upload to object storage failed"""


def get_r2_client():
    """Get configured boto3 client for Cloudflare R2"""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
        region_name="auto",
    )


def get_public_url(key: str) -> str:
    """Public URL of an object in the image bucket"""
    return f"{R2_PUBLIC_URL.rstrip('/')}/{key.lstrip('/')}"


def upload_image(image_bytes: bytes, key: str) -> str:
    """
    Upload a PNG (overwriting any object with the same key) and return its public URL.

    Raises:
        StorageUploadError: If R2 rejects the upload or is unreachable
    """
    logger.info(f"📤 Uploading image to R2: {key}")
    try:
        r2 = get_r2_client()
        r2.put_object(
            Bucket=R2_BUCKET_NAME,
            Key=key,
            Body=image_bytes,
            ContentType="image/png",
            CacheControl=R2_CACHE_CONTROL,
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"❌ R2 upload failed for {key}: {e}")
        raise StorageUploadError(f"Error uploading image: {e}") from e

    public_url = get_public_url(key)
    logger.info(f"✅ Image uploaded: {public_url}")
    return public_url


async def upload_image_async(image_bytes: bytes, key: str) -> str:
    # boto3 is blocking; keep it off the event loop
    return await asyncio.to_thread(upload_image, image_bytes, key)
