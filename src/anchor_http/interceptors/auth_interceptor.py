# src/anchor_http/interceptors/auth_interceptor.py

import base64
import threading
from typing import Optional

from .interceptor import RequestInterceptor
from ..core.request import Request

AUTH_TYPES = ("bearer", "basic", "api_key")


class AuthInterceptor(RequestInterceptor):
    """Interceptor для различных типов аутентификации"""

    def __init__(self, auth_type: str = "bearer", token: Optional[str] = None,
                 username: Optional[str] = None, password: Optional[str] = None,
                 api_key_header: str = "X-API-Key"):
        """
        Args:
            auth_type: Тип аутентификации ('bearer', 'basic', 'api_key')
            token: Токен для Bearer или API Key аутентификации
            username: Имя пользователя для Basic аутентификации
            password: Пароль для Basic аутентификации
            api_key_header: Заголовок для API Key

        Raises:
            ValueError: Неизвестный auth_type
        """
        auth_type = auth_type.lower()
        if auth_type not in AUTH_TYPES:
            raise ValueError(
                f"Unknown auth_type: {auth_type}. Available: {', '.join(AUTH_TYPES)}"
            )

        self.auth_type = auth_type
        self.token = token
        self.username = username
        self.password = password
        self.api_key_header = api_key_header
        self._lock = threading.Lock()

    def intercept(self, request: Request) -> None:
        """Добавляет заголовок аутентификации (если учетные данные заданы)"""
        with self._lock:
            token = self.token

        if self.auth_type == 'bearer' and token:
            request.add_header("Authorization", f"Bearer {token}")

        elif self.auth_type == 'api_key' and token:
            request.add_header(self.api_key_header, token)

        elif self.auth_type == 'basic' and self.username and self.password:
            credentials = f"{self.username}:{self.password}".encode('utf-8')
            request.add_header(
                "Authorization",
                f"Basic {base64.b64encode(credentials).decode('ascii')}"
            )

    def update_token(self, token: str):
        """Обновляет токен; следующие запросы используют новый"""
        with self._lock:
            self.token = token

    def __repr__(self) -> str:
        return f"AuthInterceptor(auth_type={self.auth_type!r})"
