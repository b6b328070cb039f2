"""HTTP client for the todo API"""

from datetime import date
from typing import Any, Dict, List, Optional, Union

import requests

from todoapp.utils.logger import get_logger

from .token_store import MemoryTokenStore, TokenStore

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class ApiError(Exception):
    """Non-2xx response or transport failure (status_code 0)"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class TodoApiClient:
    """
    Client that stores the bearer token from register/login and attaches it
    to every later request. A 401 clears the stored token so the caller
    falls back to the login form.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token_store: Optional[TokenStore] = None,
        session: Optional[Any] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or MemoryTokenStore()
        # requests.Session or anything with the same request() signature
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self,
        method: str,
        endpoint: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            ApiError: carrying the server's "error" message on non-2xx
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {}
        token = self.token_store.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.session.request(
                method,
                url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Request failed", method=method, url=url, error=str(e))
            raise ApiError(0, f"Could not reach server: {e}")

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            if response.status_code == 401:
                self.token_store.clear()
            message = "Request failed"
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            raise ApiError(response.status_code, message)
        return body

    def _store_token(self, body: Dict[str, Any]) -> Dict[str, Any]:
        if body.get("token"):
            self.token_store.set(body["token"])
        return body

    # Auth

    def register(self, email: str, password: str, name: str) -> Dict[str, Any]:
        body = self._request("POST", "/register", {"email": email, "password": password, "name": name})
        return self._store_token(body)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/login", {"email": email, "password": password})
        return self._store_token(body)

    def logout(self) -> None:
        self.token_store.clear()

    def is_authenticated(self) -> bool:
        return bool(self.token_store.get())

    def get_current_user(self) -> Dict[str, Any]:
        return self._request("GET", "/me")

    # Todos

    def fetch_todos(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/todos")

    def add_todo(self, text: str, day: Optional[Union[date, str]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"text": text}
        if day is not None:
            payload["date"] = day.isoformat() if isinstance(day, date) else day
        return self._request("POST", "/todos", payload)

    def update_todo(self, todo_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in fields.items()
        }
        return self._request("PUT", f"/todos/{todo_id}", payload)

    def delete_todo(self, todo_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/todos/{todo_id}")
