# backend/suishi/services/ai_engine.py
"""AI 節氣詩詞服務

整合 Google Gemini 為節氣生成：
- 一首短詩
- 養生建議
- 時令食材

任何失敗（未設定 API Key、網路錯誤、回應格式錯誤）都返回固定的預設內容，
不向呼叫端拋出例外，也不自動重試。
"""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Optional

import google.generativeai as genai

from suishi.config import settings
from suishi.services.term_table import Term

logger = logging.getLogger(__name__)


# 生成配置
GENERATION_CONFIG = {
    "temperature": 0.7,
    "top_p": 0.95,
    "top_k": 40,
    "max_output_tokens": 1024,
    "response_mime_type": "application/json",
}


@dataclass(frozen=True)
class TermInsight:
    """節氣詩詞與建議"""
    poem: str
    advice: str
    food: str

    def to_dict(self) -> dict:
        return asdict(self)


# 未設定 API Key 時的內容
MISSING_KEY_INSIGHT = TermInsight(
    poem="请输入 API Key 以生成诗词。",
    advice="请输入 API Key 以获取养生建议。",
    food="暂无数据",
)

# 生成失敗時的預設內容
FALLBACK_INSIGHT = TermInsight(
    poem="春有百花秋有月，\n夏有凉风冬有雪。\n若无闲事挂心头，\n便是人间好时节。",
    advice="顺应天时，早睡早起，保持心情舒畅。",
    food="时令蔬菜与清茶。",
)


def _init_model() -> Optional[genai.GenerativeModel]:
    """初始化 Gemini 模型"""
    if not settings.gemini_api_key:
        return None

    try:
        genai.configure(api_key=settings.gemini_api_key)
        return genai.GenerativeModel(
            model_name=settings.gemini_model,
            generation_config=GENERATION_CONFIG,
        )
    except Exception as e:
        logger.warning("初始化 Gemini 失敗: %s", e)
        return None


# 延遲初始化模型
_model: Optional[genai.GenerativeModel] = None


def get_model() -> Optional[genai.GenerativeModel]:
    """取得模型實例（延遲初始化）"""
    global _model
    if _model is None:
        _model = _init_model()
    return _model


def is_ai_available() -> bool:
    """檢查 AI 服務是否可用"""
    return bool(settings.gemini_api_key) and get_model() is not None


def create_term_prompt(term: Term) -> str:
    """建立節氣詩詞的 Prompt"""
    return f"""你是一位精通中国传统文化、二十四节气和中医养生的专家。
用户正在查询节气：{term.name}（{term.translation}）。
节气简述：{term.description}

请提供以下内容（全部使用中文）：
1. 一首关于这个节气的简短诗词（五言或七言绝句，或者优美的短句），富有文学意境。
2. 针对现代生活节奏的"养生"建议，切实可行。
3. 这个节气推荐食用的一到两种时令食材或菜肴。

保持语气平和、智慧且富有美感。
请用 JSON 格式回应，包含 poem、advice、food 三个字符串字段。
"""


def parse_json_response(content: Optional[str]) -> Optional[dict]:
    """解析 JSON 格式的 AI 回應

    Args:
        content: AI 回應文字

    Returns:
        解析後的字典，或 None（解析失敗時）
    """
    if not content:
        return None

    content = content.strip()

    # 移除 markdown 代碼塊標記
    if content.startswith("```json"):
        content = content[7:]
    if content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    content = content.strip()

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        logger.warning("JSON 解析失敗: %s", content[:200])
        return None
    return data if isinstance(data, dict) else None


def insight_from_dict(data: Optional[dict]) -> Optional[TermInsight]:
    """由字典建立 TermInsight，欄位不齊全時返回 None"""
    if not data:
        return None
    fields = ("poem", "advice", "food")
    if not all(isinstance(data.get(f), str) and data[f].strip() for f in fields):
        return None
    return TermInsight(poem=data["poem"], advice=data["advice"], food=data["food"])


async def generate_term_insight(term: Term) -> TermInsight:
    """生成節氣詩詞與建議

    Args:
        term: 節氣

    Returns:
        TermInsight；AI 不可用或失敗時返回固定預設內容
    """
    model = get_model()
    if not model:
        return MISSING_KEY_INSIGHT

    try:
        response = await model.generate_content_async(create_term_prompt(term))
        insight = insight_from_dict(parse_json_response(response.text))
        if insight is not None:
            return insight
        logger.warning("節氣 %s 的 AI 回應格式不完整", term.name)
    except Exception as e:
        logger.warning("生成節氣詩詞失敗 (%s): %s", term.name, e)

    return FALLBACK_INSIGHT
