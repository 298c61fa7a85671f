# src/anchor_http/interceptors/logging_interceptor.py

import logging
from typing import Optional

from .interceptor import RequestInterceptor
from ..core.request import BODY_REQUEST_TYPES, Request
from ..core.utils import sanitize_url
from ..utils.sanitizer import mask_headers


class LoggingInterceptor(RequestInterceptor):
    """
    Логирует запрос в том виде, в котором он уйдет на сервер.

    Регистрируйте последним, чтобы видеть изменения других interceptors.
    Значения чувствительных заголовков и query параметров маскируются.
    """

    def __init__(self, level: int = logging.INFO, logger: Optional[logging.Logger] = None,
                 log_body: bool = False):
        """
        Args:
            level: Уровень логирования
            logger: Логгер (по умолчанию anchor_http.interceptors)
            log_body: Логировать длину тела для POST/PUT
        """
        self.level = level
        self.log_body = log_body
        self.logger = logger or logging.getLogger("anchor_http.interceptors")

    def intercept(self, request: Request) -> None:
        if not self.logger.isEnabledFor(self.level):
            return

        headers = mask_headers((h.name, h.value) for h in request.headers)
        message = "Outgoing %s %s headers=%s"
        args = [request.method.value, sanitize_url(request.url), headers]

        if self.log_body and isinstance(request, BODY_REQUEST_TYPES):
            message += " body_length=%d"
            args.append(len(request.body.encode('utf-8')))

        self.logger.log(self.level, message, *args)
