# backend/suishi/schemas/term.py
"""節氣 API Schema"""

from typing import Optional

from pydantic import BaseModel, Field

from suishi.services.term_table import Term


class TermResponse(BaseModel):
    """節氣回應"""
    id: int = Field(..., description="序號 (1-24)")
    name: str = Field(..., description="節氣名稱")
    pinyin: str = Field(..., description="拼音")
    translation: str = Field(..., description="釋義")
    season: str = Field(..., description="所屬季節")
    anchor: str = Field(..., description="公曆起始日 (Mon D)")
    month: int = Field(..., description="起始月 (1-12)")
    day: int = Field(..., description="起始日")
    color: str = Field(..., description="顯示顏色")
    description: str = Field(..., description="簡述")

    @classmethod
    def from_term(cls, term: Term) -> "TermResponse":
        return cls(
            id=term.id,
            name=term.name,
            pinyin=term.pinyin,
            translation=term.translation,
            season=term.season.value,
            anchor=term.anchor_text,
            month=term.month,
            day=term.day,
            color=term.color,
            description=term.description,
        )


class CurrentTermResponse(BaseModel):
    """當前節氣回應"""
    date: str = Field(..., description="查詢日期 (YYYY-MM-DD)")
    current: TermResponse = Field(..., description="當前所處的節氣")
    next: TermResponse = Field(..., description="下一個節氣")
    days_to_next: int = Field(..., description="距離下一個節氣的天數")
    today_is_term_day: bool = Field(..., description="今天是否為節氣起始日")


class InsightResponse(BaseModel):
    """節氣詩詞回應"""
    term_id: int = Field(..., description="節氣序號")
    term_name: str = Field(..., description="節氣名稱")
    poem: str = Field(..., description="詩詞")
    advice: str = Field(..., description="養生建議")
    food: str = Field(..., description="時令食材")


class InsightStatusResponse(BaseModel):
    """AI 狀態回應"""
    available: bool = Field(..., description="AI 服務是否可用")
    model: str = Field(..., description="使用的模型")
    message: str = Field(..., description="狀態訊息")


class PanelResponse(BaseModel):
    """詩詞面板狀態"""
    term_id: Optional[int] = Field(None, description="最新請求的節氣序號")
    loading: bool = Field(..., description="是否載入中")
    insight: Optional[dict] = Field(None, description="詩詞內容")
    message: Optional[str] = Field(None, description="提示訊息")
