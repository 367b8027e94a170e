# backend/suishi/services/insight_panel.py
"""節氣詩詞面板狀態

同一時間只關心最新一次請求：新的請求發出後，先前尚未完成的請求結果一律丟棄。
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from suishi.services.ai_engine import TermInsight, generate_term_insight
from suishi.services.term_table import Term

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "暂无数据"

InsightGenerator = Callable[[Term], Awaitable[TermInsight]]


class InsightPanel:
    """詩詞面板

    Attributes:
        term_id: 最新請求的節氣序號
        loading: 是否正在等待回應
        insight: 最新請求的結果
        message: 連預設內容都無法取得時的提示
    """

    def __init__(self, generator: InsightGenerator = generate_term_insight):
        self._generator = generator
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self.term_id: Optional[int] = None
        self.loading = False
        self.insight: Optional[TermInsight] = None
        self.message: Optional[str] = None

    def is_current(self, token: int) -> bool:
        return token == self._generation

    async def load(self, term: Term) -> Optional[TermInsight]:
        """請求節氣詩詞

        Returns:
            結果；若在完成前已被新的請求取代則返回 None
        """
        self._generation += 1
        token = self._generation
        self.term_id = term.id
        self.loading = True
        self.insight = None
        self.message = None

        try:
            insight: Optional[TermInsight] = await self._generator(term)
        except Exception as e:
            logger.error("取得節氣詩詞失敗 (%s): %s", term.name, e)
            insight = None

        if not self.is_current(token):
            logger.debug("丟棄過期的詩詞結果：%s", term.name)
            return None

        self.loading = False
        self.insight = insight
        if insight is None:
            self.message = NO_DATA_MESSAGE
        return insight

    def request(self, term: Term) -> asyncio.Task:
        """在背景發出請求，並取消仍在進行的前一個請求"""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self.load(term))
        return self._task

    def snapshot(self) -> dict:
        return {
            "term_id": self.term_id,
            "loading": self.loading,
            "insight": self.insight.to_dict() if self.insight else None,
            "message": self.message,
        }
