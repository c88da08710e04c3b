"""
Token-authenticated REST client for the Foody API
Logs in once, then reuses the bearer token for every request
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import httpx
import jwt

from foody_api.config import FoodyConfig, get_config
from foody_api.models import ApiResponseDTO, FoodDTO, LoginBody, PatchOperation, patch_document

logger = logging.getLogger(__name__)


class AuthenticationError(RuntimeError):
    """Raised when the login request does not yield a usable access token"""


@dataclass
class AccessToken:
    """Bearer token with expiration decoded from its claims when available"""
    value: str
    expires_at: Optional[datetime] = None

    @classmethod
    def from_raw(cls, value: str) -> "AccessToken":
        # The signature belongs to the server; only the claims are read here
        try:
            claims = jwt.decode(value, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            return cls(value)

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return cls(value)
        return cls(value, datetime.fromtimestamp(exp, tz=timezone.utc))

    def is_expired(self, buffer_seconds: int = 60) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= (self.expires_at - timedelta(seconds=buffer_seconds))

    def masked(self) -> str:
        return f"{self.value[:12]}..."


@dataclass
class ApiResult:
    """Status code and body of a single API call"""
    status_code: int
    text: str
    json_body: Any = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiResult":
        try:
            body = response.json()
        except ValueError:
            body = None
        return cls(status_code=response.status_code, text=response.text, json_body=body)

    @property
    def success(self) -> bool:
        return self.status_code < 400

    def message(self) -> ApiResponseDTO:
        """Body parsed as a msg/foodId envelope"""
        if not isinstance(self.json_body, dict):
            raise ValueError(f"Expected a JSON object in {self.status_code} response, got: {self.text!r}")
        return ApiResponseDTO.model_validate(self.json_body)

    def items(self) -> List[ApiResponseDTO]:
        """Body parsed as a list of food entries"""
        if not isinstance(self.json_body, list):
            raise ValueError(f"Expected a JSON array in {self.status_code} response, got: {self.text!r}")
        return [ApiResponseDTO.model_validate(item) for item in self.json_body]


class FoodyRestClient:
    """REST client for the Foody food-review API"""

    AUTH_ENDPOINT = "/api/User/Authentication"
    CREATE_ENDPOINT = "/api/Food/Create"
    EDIT_ENDPOINT = "/api/Food/Edit/{id}"
    LIST_ENDPOINT = "/api/Food/All"
    DELETE_ENDPOINT = "/api/Food/Delete/{id}"

    def __init__(self, config: Optional[FoodyConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or get_config()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.token: Optional[AccessToken] = None

    async def __aenter__(self) -> "FoodyRestClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def open(self):
        """Log in and create the authenticated HTTP client"""
        if self._client is not None:
            return

        self.token = await self.get_access_token(self.config.username, self.config.password)
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            transport=self._transport,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.token.value}",
            },
        )

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_access_token(self, username: str, password: str) -> AccessToken:
        """Exchange credentials for a bearer token"""
        login = LoginBody(username=username, password=password)

        async with httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        ) as auth_client:
            try:
                response = await auth_client.post(self.AUTH_ENDPOINT, json=login.model_dump())
            except httpx.RequestError as e:
                raise AuthenticationError(f"Authentication request error: {e}") from e

        if response.status_code != 200:
            raise AuthenticationError(f"Authentication failed with {response.status_code} and {response.text}")

        try:
            content = response.json()
        except ValueError as e:
            raise AuthenticationError(f"Authentication response is not JSON: {response.text!r}") from e

        access_token = content.get("accessToken") if isinstance(content, dict) else None
        if not isinstance(access_token, str) or not access_token.strip():
            raise AuthenticationError("Access Token is null or empty")

        token = AccessToken.from_raw(access_token)
        logger.info(f"Authenticated as {username}, token {token.masked()}")
        return token

    async def request(self, method: str, endpoint: str, data: Any = None) -> ApiResult:
        """Make an authenticated request"""
        if self._client is None:
            raise RuntimeError("Client is not authenticated; call open() or use 'async with'")

        response = await self._client.request(method.upper(), endpoint, json=data)
        logger.debug(f"{method.upper()} {endpoint} -> {response.status_code}")
        return ApiResult.from_response(response)

    async def create_food(self, food: FoodDTO) -> ApiResult:
        return await self.request("POST", self.CREATE_ENDPOINT, food.model_dump())

    async def edit_food_name(self, food_id: str, new_name: str) -> ApiResult:
        payload = patch_document(PatchOperation.replace("/name", new_name))
        return await self.request("PATCH", self.EDIT_ENDPOINT.format(id=food_id), payload)

    async def list_foods(self) -> ApiResult:
        return await self.request("GET", self.LIST_ENDPOINT)

    async def delete_food(self, food_id: str) -> ApiResult:
        return await self.request("DELETE", self.DELETE_ENDPOINT.format(id=food_id))

