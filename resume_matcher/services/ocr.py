"""
Baidu OCR client for image uploads and scanned PDFs.
"""
import base64
import threading
import time
from typing import Optional, Tuple

import requests

from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import ConfigurationError, ServiceError
from resume_matcher.utils.logging_config import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "baidu_ocr"
TOKEN_URL = "https://aip.baidubce.com/oauth/2.0/token"
IMAGE_OCR_URL = "https://aip.baidubce.com/rest/2.0/ocr/v1/general_basic"
PDF_OCR_URL = "https://aip.baidubce.com/rest/2.0/ocr/v1/pdf"
REQUEST_TIMEOUT = 30
# refresh a minute before the token actually expires
TOKEN_EXPIRY_MARGIN = 60

# Process-wide, only ever touched by this module. (token, expires_at) is
# replaced as one tuple so lock-free readers never see a mismatched pair.
_cached_token: Tuple[Optional[str], float] = (None, 0.0)
_token_lock = threading.Lock()


def is_configured() -> bool:
    return bool(settings.BAIDU_API_KEY and settings.BAIDU_SECRET_KEY)


def reset_token_cache() -> None:
    global _cached_token
    with _token_lock:
        _cached_token = (None, 0.0)


def _unexpired_token() -> Optional[str]:
    token, expires_at = _cached_token
    if token and time.time() < expires_at:
        return token
    return None


def get_access_token() -> str:
    global _cached_token
    if not is_configured():
        raise ConfigurationError("Baidu OCR credentials are not configured", config_key="BAIDU_API_KEY")

    cached = _unexpired_token()
    if cached:
        return cached

    with _token_lock:
        # another thread may have refreshed it while this one waited
        cached = _unexpired_token()
        if cached:
            return cached

        now = time.time()
        try:
            resp = requests.post(
                TOKEN_URL,
                params={
                    "grant_type": "client_credentials",
                    "client_id": settings.BAIDU_API_KEY,
                    "client_secret": settings.BAIDU_SECRET_KEY,
                },
                timeout=REQUEST_TIMEOUT,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise ServiceError(f"Could not obtain OCR access token: {e}", service_name=SERVICE_NAME, cause=e) from e

        token = data.get("access_token")
        if not token:
            raise ServiceError(
                f"OCR token response missing access_token: {data.get('error_description', data)}",
                service_name=SERVICE_NAME,
            )
        _cached_token = (token, now + max(0, int(data.get("expires_in", 0)) - TOKEN_EXPIRY_MARGIN))
        logger.info("Obtained new OCR access token")
        return token


def _recognize(url: str, field: str, payload: bytes) -> str:
    token = get_access_token()
    try:
        resp = requests.post(
            url,
            params={"access_token": token},
            data={field: base64.b64encode(payload).decode("ascii")},
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        raise ServiceError(f"OCR request failed: {e}", service_name=SERVICE_NAME, cause=e) from e

    if "error_code" in data:
        raise ServiceError(
            f"OCR error {data.get('error_code')}: {data.get('error_msg')}",
            service_name=SERVICE_NAME,
        )
    words = data.get("words_result") or []
    return "\n".join(item.get("words", "") for item in words)


def ocr_image(image_bytes: bytes) -> str:
    return _recognize(IMAGE_OCR_URL, "image", image_bytes)


def ocr_pdf(pdf_bytes: bytes) -> str:
    return _recognize(PDF_OCR_URL, "pdf_file", pdf_bytes)
