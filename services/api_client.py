# -*- coding: utf-8 -*-
"""
Stellium API Client - Backend API access
=========================================

Subject creation, profile photo and subscription endpoints of the
Stellium backend.
"""

import json as _json
import requests
import urllib3
from typing import Optional, Dict, Any
from dataclasses import dataclass

from utils.logger import get_logger
from services.exceptions import ApiException, NetworkException

logger = get_logger(__name__)


@dataclass
class ApiConfig:
    """
    Backend connection settings.

    Reads from .env via Config when values are not given:
        API_BASE_URL=https://api.example.com
        API_TIMEOUT=30
    """
    base_url: str = None  # Will be loaded from Config
    timeout: int = None  # Will be loaded from Config
    verify_ssl: bool = None  # Will be loaded from Config
    access_token: Optional[str] = None

    def __post_init__(self):
        """Load from Config if not provided."""
        from app.config import Config

        if self.base_url is None:
            self.base_url = Config.API_BASE_URL
        if self.timeout is None:
            self.timeout = Config.API_TIMEOUT
        if self.verify_ssl is None:
            self.verify_ssl = Config.API_VERIFY_SSL


class StelliumApiClient:
    """
    Client for the Stellium backend.

    Features:
    - Bearer token from the signed-in account
    - Shared JSON request/response handling
    - ApiException / NetworkException error mapping

    Usage:
        client = StelliumApiClient(ApiConfig(base_url="http://localhost:3000"))
        subject = client.create_user(payload)
    """

    def __init__(self, config: ApiConfig):
        self.config = config
        self.base_url = (config.base_url or "").rstrip('/')
        self.access_token: Optional[str] = config.access_token

        if not config.verify_ssl:
            # Self-signed certificates in development
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ==================== Authentication ====================

    def set_access_token(self, token: Optional[str]):
        """
        Set the bearer token of the signed-in account.

        Args:
            token: ID token, or None to send unauthenticated requests
        """
        self.access_token = token
        logger.debug("Access token updated externally")

    def _headers(self) -> Dict[str, str]:
        """Request headers, with Authorization when a token is set."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json"
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "/createUser")
            json_data: JSON payload
            params: Query parameters

        Returns:
            Response JSON data (None for an empty body)
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data:
            try:
                logger.info(f"[API REQ] Body: {_json.dumps(json_data, indent=2, ensure_ascii=False, default=str)}")
            except (TypeError, ValueError):
                logger.info(f"[API REQ] Body: {json_data}")

        try:
            response = requests.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=self._headers(),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()

            result = None
            if response.text:
                try:
                    result = response.json()
                except ValueError:
                    raise ApiException(
                        message="Invalid JSON response",
                        status_code=response.status_code
                    )

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            if result:
                res_str = _json.dumps(result, indent=2, ensure_ascii=False, default=str)
                if len(res_str) > 1000:
                    logger.info(f"[API RES] Body (truncated): {res_str[:1000]}...")
                else:
                    logger.info(f"[API RES] Body: {res_str}")

            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            response_text = ''
            if e.response is not None:
                response_text = (e.response.text or '')[:500]
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data or response_text}")
            message = str(e)
            if isinstance(response_data, dict):
                message = response_data.get("error") or response_data.get("message") or message
            raise ApiException(
                message=message,
                status_code=status_code,
                response_data=response_data if isinstance(response_data, dict) else {}
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e
            )

    # ==================== Subjects ====================

    def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create the account holder's subject with a known birth time.

        Endpoint: POST /createUser
        """
        return self._request("POST", "/createUser", json_data=payload) or {}

    def create_user_unknown_time(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create the account holder's subject without a birth time.

        Endpoint: POST /createUserUnknownTime
        """
        return self._request("POST", "/createUserUnknownTime", json_data=payload) or {}

    def create_guest_subject(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a guest subject with a known birth time.

        Endpoint: POST /createGuestSubject
        """
        return self._request("POST", "/createGuestSubject", json_data=payload) or {}

    def create_guest_subject_unknown_time(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a guest subject without a birth time.

        Endpoint: POST /createGuestSubjectUnknownTime
        """
        return self._request("POST", "/createGuestSubjectUnknownTime", json_data=payload) or {}

    # ==================== Profile Photo ====================

    def get_presigned_upload_url(self, subject_id: str, content_type: str = "image/jpeg") -> Dict[str, Any]:
        """
        Request a presigned storage URL for a profile photo.

        Endpoint: POST /subjects/{subjectId}/profile-photo/presigned-url

        Returns:
            {"uploadUrl", "photoKey", "expiresIn"}
        """
        logger.debug(f"Requesting upload URL for subject {subject_id} ({content_type})")
        response = self._request(
            "POST",
            f"/subjects/{subject_id}/profile-photo/presigned-url",
            json_data={"contentType": content_type}
        ) or {}
        return {
            "uploadUrl": response.get("uploadUrl"),
            "photoKey": response.get("photoKey"),
            "expiresIn": response.get("expiresIn"),
        }

    def upload_to_presigned_url(self, upload_url: str, file_path: str, content_type: str) -> int:
        """
        PUT raw file bytes to a presigned storage URL.

        The caller decides what a non-2xx status means, so HTTP errors are
        returned as the status code rather than raised.

        Returns:
            HTTP status code of the storage response
        """
        logger.info(f"[API REQ] PUT <presigned upload> ({content_type})")
        try:
            with open(file_path, "rb") as f:
                response = requests.put(
                    upload_url,
                    data=f,
                    headers={"Content-Type": content_type},
                    timeout=self.config.timeout
                )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error during upload: {e}")
            raise NetworkException(message=str(e), original_error=e)
        except requests.exceptions.RequestException as e:
            logger.error(f"Upload request failed: {e}")
            raise NetworkException(message=str(e), original_error=e)

        logger.info(f"[API RES] {response.status_code} <presigned upload>")
        if not 200 <= response.status_code < 300:
            logger.error(f"[API ERR] Storage response: {(response.text or '')[:500]}")
        return response.status_code

    def confirm_profile_photo_upload(self, subject_id: str, photo_key: str) -> Dict[str, Any]:
        """
        Confirm a completed photo upload.

        Endpoint: POST /subjects/{subjectId}/profile-photo/confirm

        Returns:
            {"profilePhotoUrl", "profilePhotoKey", "updatedAt"}
        """
        response = self._request(
            "POST",
            f"/subjects/{subject_id}/profile-photo/confirm",
            json_data={"photoKey": photo_key}
        ) or {}
        return {
            "profilePhotoUrl": response.get("profilePhotoUrl"),
            "profilePhotoKey": response.get("profilePhotoKey"),
            "updatedAt": response.get("updatedAt"),
        }

    def delete_profile_photo(self, subject_id: str) -> Dict[str, Any]:
        """
        Remove a subject's profile photo.

        Endpoint: DELETE /subjects/{subjectId}/profile-photo
        """
        return self._request("DELETE", f"/subjects/{subject_id}/profile-photo") or {}

    # ==================== Subscription ====================

    def get_subscription_status(self, user_id: str) -> Dict[str, Any]:
        """
        Current subscription, usage counters and entitlements.

        Endpoint: GET /users/{userId}/subscription
        """
        return self._request("GET", f"/users/{user_id}/subscription") or {}


# ==================== Singleton Instance ====================

_api_client_instance: Optional[StelliumApiClient] = None


def get_api_client(config: Optional[ApiConfig] = None) -> StelliumApiClient:
    """
    Shared StelliumApiClient instance (Singleton).

    Args:
        config: API settings (only used on first call)
    """
    global _api_client_instance

    if _api_client_instance is None:
        if config is None:
            config = ApiConfig()
        _api_client_instance = StelliumApiClient(config)

    return _api_client_instance


def reset_api_client():
    """Reset the shared API client (for tests)."""
    global _api_client_instance
    _api_client_instance = None
