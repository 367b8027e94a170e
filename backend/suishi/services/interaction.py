# backend/suishi/services/interaction.py
"""互動狀態

記錄滑鼠懸停的月份與使用者選取的節氣，
並推導環形佈局應展開的月份。
"""

import logging
import threading
from collections import OrderedDict
from datetime import date
from typing import Optional, Sequence

from suishi.services.clock import Clock
from suishi.services.insight_panel import InsightPanel
from suishi.services.ring_layout import MONTH_COUNT, RingLayout, build_ring_layout, select_tick
from suishi.services.term_resolver import resolve_current_term
from suishi.services.term_table import Term, get_term_by_id

logger = logging.getLogger(__name__)


class InteractionState:
    """懸停與選取狀態

    所有轉換都在同一把鎖內進行，確保 (hover, selected_term_id) 不會交錯成不一致的組合。
    """

    def __init__(self, selected_term_id: int):
        self._lock = threading.Lock()
        self.hover: Optional[int] = None
        self.selected_term_id = selected_term_id

    def on_hover_enter(self, month: int) -> None:
        if not 0 <= month < MONTH_COUNT:
            raise ValueError(f"月份索引超出範圍：{month}")
        with self._lock:
            self.hover = month

    def on_hover_leave(self, month: int) -> None:
        with self._lock:
            if self.hover == month:
                self.hover = None

    def on_select_term(self, term: Term) -> None:
        with self._lock:
            self.selected_term_id = term.id

    def snapshot(self) -> tuple[Optional[int], int]:
        with self._lock:
            return self.hover, self.selected_term_id

    def effective_focus_month(
        self,
        current_term: Term,
        today_month: int,
        table: Sequence[Term],
    ) -> int:
        """推導展開月份

        優先順序：懸停月份 > 與當前節氣不同的選取節氣所在月份 > 今日月份。
        """
        hover, selected_id = self.snapshot()
        if hover is not None:
            return hover
        if selected_id != current_term.id:
            selected = get_term_by_id(selected_id, tuple(table))
            if selected is not None:
                return selected.month_index
        return today_month


class ViewSession:
    """單一檢視的完整狀態：資料表、時鐘、當前節氣與互動狀態"""

    def __init__(self, table: Sequence[Term], clock: Clock):
        self.table = tuple(table)
        self.clock = clock
        self.today: date = clock.now().date()
        self.current_term = resolve_current_term(self.today, self.table)
        self.state = InteractionState(self.current_term.id)
        self.panel = InsightPanel()

    def refresh(self) -> bool:
        """重新讀取時鐘；跨日時重新判定當前節氣

        Returns:
            當前節氣是否改變
        """
        today = self.clock.now().date()
        if today == self.today:
            return False
        self.today = today
        term = resolve_current_term(today, self.table)
        changed = term.id != self.current_term.id
        if changed:
            logger.info("當前節氣更新：%s → %s", self.current_term.name, term.name)
            # 使用者未改過的選取跟著當前節氣走
            _, selected_id = self.state.snapshot()
            if selected_id == self.current_term.id:
                self.state.on_select_term(term)
        self.current_term = term
        return changed

    @property
    def selected_term(self) -> Term:
        _, selected_id = self.state.snapshot()
        term = get_term_by_id(selected_id, self.table)
        return term if term is not None else self.current_term

    @property
    def focus_month(self) -> int:
        return self.state.effective_focus_month(
            self.current_term, self.today.month - 1, self.table
        )

    def hover(self, month: int) -> None:
        self.state.on_hover_enter(month)

    def leave(self, month: int) -> None:
        self.state.on_hover_leave(month)

    def select(self, term: Term) -> None:
        self.state.on_select_term(term)

    def layout(self) -> RingLayout:
        return build_ring_layout(
            self.table,
            self.focus_month,
            self.today.month - 1,
            self.today.day,
            self.selected_term.id,
        )

    def click_tick(self, month: int, day: int) -> Optional[Term]:
        """點選展開月份的刻度；節氣日刻度會更新選取並返回該節氣"""
        term_id = select_tick(self.layout(), month, day)
        if term_id is None:
            return None
        term = get_term_by_id(term_id, self.table)
        if term is not None:
            self.select(term)
        return term


class SessionRegistry:
    """以 session id 保存檢視狀態（僅存於記憶體）

    最多保留 max_sessions 個 session，超過時淘汰最久未使用者。
    """

    def __init__(self, table: Sequence[Term], clock: Clock, max_sessions: int = 256):
        if max_sessions < 1:
            raise ValueError(f"max_sessions 必須為正數：{max_sessions}")
        self._lock = threading.Lock()
        self._sessions: OrderedDict[str, ViewSession] = OrderedDict()
        self.table = tuple(table)
        self.clock = clock
        self.max_sessions = max_sessions

    def get(self, session_id: str) -> ViewSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = ViewSession(self.table, self.clock)
                self._sessions[session_id] = session
                logger.debug("建立檢視 session：%s", session_id)
                while len(self._sessions) > self.max_sessions:
                    evicted, _ = self._sessions.popitem(last=False)
                    logger.debug("淘汰檢視 session：%s", evicted)
            else:
                self._sessions.move_to_end(session_id)
        session.refresh()
        return session

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
