"""Helper para chamadas HTTP à API OpenAI.

Implementação concreta de IO: pertence a app/infra.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from app.observability import record_token_usage
from utils.errors import TextStandardizationError

if TYPE_CHECKING:
    from ai.config.settings import AISettings

logger = logging.getLogger(__name__)

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

# Status que justificam nova tentativa (além de qualquer 5xx)
RETRYABLE_STATUS_CODES = frozenset({408, 409, 429})

# Alguns modelos (ex.: gpt-5*) não aceitam temperatura/top_p customizados.
_SAMPLING_LOCKED_PREFIXES = ("gpt-5",)


def _supports_custom_sampling(model_name: str) -> bool:
    """Retorna True se o modelo aceita temperatura/top_p customizados."""
    return not model_name.startswith(_SAMPLING_LOCKED_PREFIXES)


def build_payload(settings: AISettings, messages: list[dict[str, str]]) -> dict[str, Any]:
    """Monta o corpo da requisição chat completions."""
    model_cfg = settings.model
    # GPT-5+ usa max_completion_tokens em vez de max_tokens
    payload: dict[str, Any] = {
        "model": model_cfg.model,
        "max_completion_tokens": model_cfg.max_tokens,
        "messages": messages,
    }
    if _supports_custom_sampling(model_cfg.model):
        payload["temperature"] = model_cfg.temperature
        payload["top_p"] = model_cfg.top_p
    return payload


def _record_usage(data: dict[str, Any], point_name: str) -> None:
    usage = data.get("usage") or {}
    if not usage:
        return
    record_token_usage(
        component="text_standardizer",
        operation=point_name,
        prompt_tokens=int(usage.get("prompt_tokens", 0)),
        completion_tokens=int(usage.get("completion_tokens", 0)),
        total_tokens=int(usage.get("total_tokens", 0)),
    )


async def call_openai_api(
    *,
    http_client: httpx.AsyncClient,
    api_key: str,
    settings: AISettings,
    messages: list[dict[str, str]],
    point_name: str,
) -> str | None:
    """Executa chamada à API OpenAI.

    Args:
        http_client: Cliente HTTP async
        api_key: API key da OpenAI
        settings: Configurações de IA
        messages: Conversa (system, few-shot, usuário)
        point_name: Nome do ponto LLM (para logs)

    Returns:
        Conteúdo da resposta, ou None quando repetir não adianta (sem chave,
        4xx definitivo, resposta vazia ou ilegível).

    Raises:
        TextStandardizationError: Falha transitória (timeout, transporte,
            429 ou 5xx); o step do pipeline repete a chamada.
    """
    if not api_key:
        logger.error("openai_api_key_missing", extra={"point": point_name})
        return None

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = build_payload(settings, messages)

    try:
        response = await http_client.post(OPENAI_API_URL, headers=headers, json=payload)
        response.raise_for_status()
        data = response.json()

        _record_usage(data, point_name)
        choices = data.get("choices") or [{}]
        content = choices[0].get("message", {}).get("content")
        if content:
            logger.debug(
                "openai_call_success",
                extra={"point": point_name, "model": settings.model.model},
            )
            return content

        logger.warning("openai_empty_response", extra={"point": point_name})
        return None

    except httpx.TimeoutException as e:
        logger.warning(
            "openai_timeout",
            extra={"point": point_name, "timeout": settings.timeout.request_timeout},
        )
        raise TextStandardizationError("Timeout na chamada à OpenAI") from e

    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        try:
            err_message = e.response.json().get("error", {}).get("message")
        except ValueError:
            err_message = e.response.text[:1000]
        logger.warning(
            "openai_http_error",
            extra={"point": point_name, "status_code": status_code, "error": err_message},
        )
        if status_code in RETRYABLE_STATUS_CODES or status_code >= 500:
            raise TextStandardizationError(f"OpenAI respondeu {status_code}") from e
        return None

    except httpx.HTTPError as e:
        logger.warning(
            "openai_transport_error",
            extra={"point": point_name, "error_type": type(e).__name__},
        )
        raise TextStandardizationError("Falha de transporte na chamada à OpenAI") from e

    except ValueError:
        logger.warning("openai_invalid_response", extra={"point": point_name})
        return None
