import logging

from openai import AsyncAzureOpenAI

from glycoatlas.config import settings

log = logging.getLogger(__name__)

_client: AsyncAzureOpenAI | None = None
_deployment: str = settings.azure_openai.deployment

# Deployments provisioned on the Azure OpenAI endpoint.
AVAILABLE_MODELS = [
    "gpt-4o-mini",
    "gpt-4.1-mini",
    "gpt-5-mini",
    "gpt-5.2",
]

# Models that require max_completion_tokens instead of max_tokens.
_USES_MAX_COMPLETION_TOKENS = {"gpt-5", "gpt-5-mini", "gpt-5-nano", "gpt-5.1", "gpt-5.2",
                                "o1", "o1-mini", "o3", "o3-mini", "o4-mini"}


def _needs_max_completion_tokens(deployment: str) -> bool:
    d = deployment.lower()
    for prefix in _USES_MAX_COMPLETION_TOKENS:
        if d == prefix or d.startswith(prefix + "-"):
            return True
    return False


def get_client() -> AsyncAzureOpenAI:
    global _client
    if _client is None:
        cfg = settings.azure_openai
        if not cfg.is_configured:
            raise RuntimeError(
                "Azure OpenAI is not configured "
                "(set GLYCOATLAS_AZURE_OPENAI__ENDPOINT and GLYCOATLAS_AZURE_OPENAI__API_KEY)"
            )
        _client = AsyncAzureOpenAI(
            azure_endpoint=cfg.endpoint,
            api_key=cfg.api_key,
            api_version=cfg.api_version,
            timeout=cfg.timeout_s,
        )
    return _client


def get_deployment() -> str:
    return _deployment


def set_deployment(name: str) -> None:
    global _deployment
    if name not in AVAILABLE_MODELS:
        raise ValueError(f"Unknown model: {name}. Available: {', '.join(AVAILABLE_MODELS)}")
    _deployment = name
    log.info("Deployment changed to: %s", name)


async def chat(system_prompt: str, user_message: str) -> tuple[str, str]:
    """Send a JSON-mode chat completion request. Returns (text, finish_reason)."""
    client = get_client()
    max_tokens = settings.azure_openai.max_tokens

    kwargs: dict = {
        "model": _deployment,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        "response_format": {"type": "json_object"},
    }

    if _needs_max_completion_tokens(_deployment):
        # gpt-5 / o-series: max_completion_tokens, no temperature control
        kwargs["max_completion_tokens"] = max_tokens
    else:
        kwargs["max_tokens"] = max_tokens
        kwargs["temperature"] = 0.2

    resp = await client.chat.completions.create(**kwargs)
    choice = resp.choices[0]
    return choice.message.content or "", choice.finish_reason or "stop"
