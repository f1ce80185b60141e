"""
Image analysis: ask a vision model to describe an image as a prompt for
image generation, then clean the boilerplate models like to add.
"""

import logging
import re
from typing import Optional

from relay.models.request import ChatOptions
from relay.providers.registry import OPENAI, create_chat_provider
from relay.utils.exceptions import EmptyResponseError
from relay.utils.http import HttpClient
from relay.utils.message_helpers import build_user_content

logger = logging.getLogger(__name__)

ANALYSIS_MODEL = "gpt-4o-mini"
ANALYSIS_TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 1000

FALLBACK_PROMPT = "无法生成提示词"

ANALYSIS_PROMPT = """请仔细分析这张图片的所有细节，然后直接输出一个用于 AI 图片生成的详细提示词。

要求：
1. 直接输出提示词内容，不要任何前缀、解释或额外说明
2. 描述要详细具体，包括：主体、风格、颜色、构图、光线、质感等
3. 使用中文输出

现在请直接输出提示词："""

# Checked in order; each match is stripped before the next one is checked
PREFIXES_TO_REMOVE = (
    "根据图片，",
    "这张图片",
    "图片显示",
    "提示词：",
    "提示词:",
    "Prompt:",
    "Prompt：",
    "生成提示词：",
    "以下是提示词：",
    "我生成的提示词是：",
    "这是提示词：",
)

_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']\Z")


def clean_generated_prompt(prompt: str) -> str:
    """Strip known lead-in phrases and one pair of surrounding quotes."""
    for prefix in PREFIXES_TO_REMOVE:
        if prompt.startswith(prefix):
            prompt = prompt[len(prefix):].strip()

    return _SURROUNDING_QUOTES.sub("", prompt).strip()


async def analyze_image(
    image_base64: str, api_key: str, http: Optional[HttpClient] = None
) -> str:
    """Describe a base64 JPEG as an image-generation prompt."""
    provider = create_chat_provider(OPENAI, api_key, http=http)
    content = build_user_content(
        ANALYSIS_PROMPT, f"data:image/jpeg;base64,{image_base64}", detail=None
    )

    try:
        prompt = await provider.chat(
            [{"role": "user", "content": content}],
            ChatOptions(
                model=ANALYSIS_MODEL,
                temperature=ANALYSIS_TEMPERATURE,
                max_tokens=ANALYSIS_MAX_TOKENS,
            ),
        )
    except EmptyResponseError:
        logger.warning("Image analysis returned no content, using fallback prompt")
        prompt = FALLBACK_PROMPT

    return clean_generated_prompt(prompt)
