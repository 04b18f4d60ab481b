"""
MODULE OVERVIEW:
Environment auto-detection from the host name the client was served from.

WHAT IS HAPPENING HERE:
Exact host matches are checked before substring matches, and the first rule that
matches wins. A host that matches nothing keeps whatever environment was already
configured.
"""
from loguru import logger

from chat_client.models import Environment

LOCAL_HOSTS = ("localhost", "127.0.0.1")
PRODUCTION_HOST = "realtimechattt.netlify.app"
PRODUCTION_HOST_MARKERS = ("netlify.app", "netlify.com")
STAGING_HOST_MARKERS = ("staging", "dev")


def detect_environment(hostname: str, default: str = Environment.DEVELOPMENT.value) -> str:
    if hostname in LOCAL_HOSTS:
        return Environment.DEVELOPMENT.value
    if hostname == PRODUCTION_HOST:
        logger.info(f"Running on Netlify production: {hostname}")
        return Environment.PRODUCTION.value
    if any(marker in hostname for marker in PRODUCTION_HOST_MARKERS):
        return Environment.PRODUCTION.value
    if any(marker in hostname for marker in STAGING_HOST_MARKERS):
        return Environment.STAGING.value
    return default
