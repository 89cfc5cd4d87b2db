"""Credential-acquisition hints keyed by provider catalog key.

The table is built once at import time and exposed read-only. Keys missing
from it fall back to a generic hint generated from the display name (see
:func:`lmi_providers.registry.lookup_hint`).
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_OPENAI_KEYS = "Get your API key from https://platform.openai.com/api-keys"
_ANTHROPIC_KEYS = "Get your API key from https://console.anthropic.com/"
_GOOGLE_KEYS = "Get your API key from https://makersuite.google.com/app/apikey"
_DASHSCOPE_KEYS = "Get your API key from https://dashscope.console.aliyun.com/"
_BIGMODEL_KEYS = "Get your API key from https://open.bigmodel.cn/"

CREDENTIAL_HINTS: Mapping[str, str] = MappingProxyType(
    {
        "openai": _OPENAI_KEYS,
        "anthropic": _ANTHROPIC_KEYS,
        "google": _GOOGLE_KEYS,
        "mistral": "Get your API key from https://console.mistral.ai/",
        "cohere": "Get your API key from https://dashboard.cohere.ai/",
        "huggingface": "Get your API key from https://huggingface.co/settings/tokens",
        "nvidia": "Get your API key from https://build.nvidia.com/",
        "xai": "Get your API key from https://console.x.ai/",
        "baidu": "Get your API key from https://console.bce.baidu.com/qianfan/",
        "alibaba": _DASHSCOPE_KEYS,
        "tencent": "Get your API key from https://console.cloud.tencent.com/hunyuan/",
        "bytedance": "Get your API key from https://console.volcengine.com/ark",
        "iflytek": "Get your API key from https://www.xfyun.cn/",
        "zhipu": _BIGMODEL_KEYS,
        "moonshot": "Get your API key from https://platform.moonshot.cn/",
        "deepseek": "Get your API key from https://platform.deepseek.com/",
        "qwen": _DASHSCOPE_KEYS,
        "yi": "Get your API key from https://platform.lingyiwanwu.com/",
        "glm": _BIGMODEL_KEYS,
        "claude": _ANTHROPIC_KEYS,
        "gemini": _GOOGLE_KEYS,
        "gpt4": _OPENAI_KEYS,
        "gpt3": _OPENAI_KEYS,
        "llama": "Get your API key from https://llama-api.com/",
        "palm": _GOOGLE_KEYS,
        "replicate": "Get your API key from https://replicate.com/account/api-tokens",
        "together": "Get your API key from https://api.together.xyz/settings/api-keys",
        "perplexity": "Get your API key from https://www.perplexity.ai/settings/api",
        "groq": "Get your API key from https://console.groq.com/keys",
        "fireworks": "Get your API key from https://fireworks.ai/",
        "openrouter": "Get your API key from https://openrouter.ai/keys",
    }
)

__all__ = ["CREDENTIAL_HINTS"]
