"""Invocador com backoff para rate limit da plataforma.

Política única de retry do núcleo, deliberadamente estreita: só o
rate limit primário (403 + remaining=0 + reset) é retentado. Erros de
rede, 5xx e respostas malformadas propagam na primeira tentativa.

Uso:
    invoker = RateLimitedInvoker()
    data = await invoker.invoke(lambda: client.get_authenticated_app(token))
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, TypeVar

from app.domain.rate_limit import RateLimitSignal, extract_rate_limit_signal
from utils.errors import RateLimitExceeded

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
RESET_BUFFER_SECONDS = 1.0


class RateLimitedInvoker:
    """Executa operações remotas aguardando o reset do rate limit.

    Args:
        max_retries: Retentativas padrão após a primeira execução
        clock: Fonte de tempo em epoch segundos
        sleep: Primitiva de espera assíncrona (não bloqueia o event loop)
        max_wait_seconds: Teto opcional da espera; None mantém o reset
            informado pela plataforma sem limite
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        max_wait_seconds: float | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries deve ser >= 0")
        self._max_retries = max_retries
        self._clock = clock
        self._sleep = sleep
        self._max_wait_seconds = max_wait_seconds

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def compute_wait(self, signal: RateLimitSignal) -> float:
        """Segundos até o reset + buffer, limitado por max_wait_seconds."""
        wait = signal.wait_seconds(self._clock(), RESET_BUFFER_SECONDS)
        if self._max_wait_seconds is not None:
            wait = min(wait, self._max_wait_seconds)
        return wait

    async def invoke(
        self,
        operation: Callable[[], Awaitable[T]],
        max_retries: int | None = None,
    ) -> T:
        """Executa ``operation`` com retry apenas em rate limit.

        Args:
            operation: Fábrica sem argumentos da chamada remota
            max_retries: Sobrescreve o orçamento padrão

        Returns:
            Resultado da operação

        Raises:
            RateLimitExceeded: Rate limit persistiu após todas as retentativas
            Exception: Qualquer erro que não seja rate limit, sem alteração
        """
        budget = self._max_retries if max_retries is None else max_retries
        if budget < 0:
            raise ValueError("max_retries deve ser >= 0")

        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except Exception as exc:
                signal = extract_rate_limit_signal(exc)
                if signal is None:
                    raise

                retries_left = budget - (attempt - 1)
                if retries_left <= 0:
                    logger.warning(
                        "rate_limit_exhausted",
                        extra={"attempts": attempt, "reset_at": signal.reset_at},
                    )
                    raise RateLimitExceeded(
                        "rate_limit_exhausted",
                        signal=signal,
                        attempts=attempt,
                    ) from exc

                wait = self.compute_wait(signal)
                logger.info(
                    "rate_limit_backoff",
                    extra={
                        "attempt": attempt,
                        "retries_left": retries_left,
                        "wait_seconds": round(wait, 3),
                    },
                )
                await self._sleep(wait)
