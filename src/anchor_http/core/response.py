"""Response and Result types."""

import json
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import HTTPClientException


@dataclass(frozen=True)
class Response:
    """
    Ответ на успешно выполненный запрос.

    Attributes:
        status_code: HTTP статус (200-299)
        body: Тело ответа, декодированное как UTF-8
    """
    status_code: int
    body: str

    def json(self) -> Any:
        """Декодировать тело как JSON."""
        return json.loads(self.body)


@dataclass(frozen=True)
class Result:
    """
    Результат выполнения запроса: либо Response, либо ошибка.

    Ровно одно из полей `value` / `error` заполнено.

    Example:
        >>> result = client.execute_get(GetRequest("https://api.example.com/users"))
        >>> if result.is_success:
        ...     print(result.value.body)
        ... else:
        ...     print(result.error)
    """
    value: Optional[Response] = None
    error: Optional[HTTPClientException] = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("Result must hold exactly one of value or error")

    @classmethod
    def success(cls, response: Response) -> 'Result':
        return cls(value=response)

    @classmethod
    def failure(cls, error: HTTPClientException) -> 'Result':
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.value is not None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def get_or_raise(self) -> Response:
        """Вернуть Response или выбросить сохранённую ошибку."""
        if self.error is not None:
            raise self.error
        return self.value

    def get_or_none(self) -> Optional[Response]:
        return self.value
