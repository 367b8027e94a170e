# backend/suishi/services/term_table.py
"""二十四節氣資料表

提供節氣靜態資料：
- 節氣名稱、拼音與釋義
- 所屬季節與顯示顏色
- 公曆起始日（固定月日，不做天文計算）

資料表於啟動時解析一次，之後整個程序生命週期內不變。
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


# 月份英文縮寫 → 月份數字
MONTH_ABBR = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

# 每月天數（固定平年，二月恆為 28 天）
MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class TermTableError(ValueError):
    """節氣資料表設定錯誤"""


class Season(str, Enum):
    """季節"""
    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"


@dataclass(frozen=True)
class Term:
    """單一節氣"""
    id: int                      # 序號 (1-24)，自立春起算
    name: str                    # 節氣名稱
    pinyin: str                  # 拼音
    translation: str             # 釋義
    season: Season               # 所屬季節
    anchor_text: str             # 起始日原文 ("Feb 4")
    month: int                   # 起始月 (1-12)
    day: int                     # 起始日 (1-31)
    color: str                   # 顯示顏色
    description: str             # 簡述

    @property
    def anchor(self) -> tuple[int, int]:
        return (self.month, self.day)

    @property
    def canonical_value(self) -> int:
        """月 * 100 + 日，用於同一年內的先後比較"""
        return self.month * 100 + self.day

    @property
    def month_index(self) -> int:
        """所在月份索引 (0 = 一月)"""
        return self.month - 1


# 原始資料（依節氣順序，自立春開始）
RAW_TERMS: list[dict] = [
    # 春
    {"id": 1, "name": "立春", "pinyin": "Lìchūn", "translation": "春季开始", "season": "Spring", "anchor": "Feb 4", "color": "#bef264", "description": "春回大地，万物复苏。"},
    {"id": 2, "name": "雨水", "pinyin": "Yǔshuǐ", "translation": "降雨开始", "season": "Spring", "anchor": "Feb 19", "color": "#a3e635", "description": "降雨增多，草木萌动。"},
    {"id": 3, "name": "惊蛰", "pinyin": "Jīngzhé", "translation": "春雷乍动", "season": "Spring", "anchor": "Mar 5", "color": "#84cc16", "description": "春雷始鸣，惊醒蛰伏昆虫。"},
    {"id": 4, "name": "春分", "pinyin": "Chūnfēn", "translation": "昼夜平分", "season": "Spring", "anchor": "Mar 20", "color": "#65a30d", "description": "昼夜等长，春色正浓。"},
    {"id": 5, "name": "清明", "pinyin": "Qīngmíng", "translation": "气清景明", "season": "Spring", "anchor": "Apr 4", "color": "#4d7c0f", "description": "天朗气清，春耕开始。"},
    {"id": 6, "name": "谷雨", "pinyin": "Gǔyǔ", "translation": "雨生百谷", "season": "Spring", "anchor": "Apr 20", "color": "#3f6212", "description": "雨水充足，利于谷物生长。"},
    # 夏
    {"id": 7, "name": "立夏", "pinyin": "Lìxià", "translation": "夏季开始", "season": "Summer", "anchor": "May 5", "color": "#fca5a5", "description": "万物生长，夏日初长。"},
    {"id": 8, "name": "小满", "pinyin": "Xiǎomǎn", "translation": "物致于此小得盈满", "season": "Summer", "anchor": "May 21", "color": "#f87171", "description": "麦类灌浆，小得盈满。"},
    {"id": 9, "name": "芒种", "pinyin": "Mángzhòng", "translation": "有芒之谷不可不种", "season": "Summer", "anchor": "Jun 5", "color": "#ef4444", "description": "有芒作物开始播种。"},
    {"id": 10, "name": "夏至", "pinyin": "Xiàzhì", "translation": "白昼最长", "season": "Summer", "anchor": "Jun 21", "color": "#dc2626", "description": "炎热将至，白昼最长。"},
    {"id": 11, "name": "小暑", "pinyin": "Xiǎoshǔ", "translation": "小热", "season": "Summer", "anchor": "Jul 7", "color": "#b91c1c", "description": "天气开始炎热，但未极点。"},
    {"id": 12, "name": "大暑", "pinyin": "Dàshǔ", "translation": "大热", "season": "Summer", "anchor": "Jul 22", "color": "#991b1b", "description": "一年中最热的时期。"},
    # 秋
    {"id": 13, "name": "立秋", "pinyin": "Lìqiū", "translation": "秋季开始", "season": "Autumn", "anchor": "Aug 7", "color": "#fcd34d", "description": "凉风至，秋季开始。"},
    {"id": 14, "name": "处暑", "pinyin": "Chǔshǔ", "translation": "出暑", "season": "Autumn", "anchor": "Aug 23", "color": "#fbbf24", "description": "炎热暑气即将结束。"},
    {"id": 15, "name": "白露", "pinyin": "Báilù", "translation": "露凝而白", "season": "Autumn", "anchor": "Sep 7", "color": "#f59e0b", "description": "天气转凉，夜间露水凝结。"},
    {"id": 16, "name": "秋分", "pinyin": "Qiūfēn", "translation": "昼夜平分", "season": "Autumn", "anchor": "Sep 23", "color": "#d97706", "description": "昼夜平分，秋意渐浓。"},
    {"id": 17, "name": "寒露", "pinyin": "Hánlù", "translation": "露水寒冷", "season": "Autumn", "anchor": "Oct 8", "color": "#b45309", "description": "露水寒冷，将欲凝结。"},
    {"id": 18, "name": "霜降", "pinyin": "Shuāngjiàng", "translation": "气肃而凝", "season": "Autumn", "anchor": "Oct 23", "color": "#92400e", "description": "天气渐冷，初霜出现。"},
    # 冬
    {"id": 19, "name": "立冬", "pinyin": "Lìdōng", "translation": "冬季开始", "season": "Winter", "anchor": "Nov 7", "color": "#93c5fd", "description": "万物收藏，冬季开始。"},
    {"id": 20, "name": "小雪", "pinyin": "Xiǎoxuě", "translation": "小雪纷飞", "season": "Winter", "anchor": "Nov 22", "color": "#60a5fa", "description": "气温下降，开始降雪。"},
    {"id": 21, "name": "大雪", "pinyin": "Dàxuě", "translation": "瑞雪兆丰年", "season": "Winter", "anchor": "Dec 7", "color": "#3b82f6", "description": "降雪量增多，地面积雪。"},
    {"id": 22, "name": "冬至", "pinyin": "Dōngzhì", "translation": "极致之冬", "season": "Winter", "anchor": "Dec 21", "color": "#2563eb", "description": "白昼最短，寒冷将至。"},
    {"id": 23, "name": "小寒", "pinyin": "Xiǎohán", "translation": "寒冷", "season": "Winter", "anchor": "Jan 5", "color": "#1d4ed8", "description": "气候开始寒冷。"},
    {"id": 24, "name": "大寒", "pinyin": "Dàhán", "translation": "极寒", "season": "Winter", "anchor": "Jan 20", "color": "#1e40af", "description": "一年中最寒冷的时候。"},
]


def parse_anchor(text: str) -> tuple[int, int]:
    """解析起始日字串

    Args:
        text: 月份縮寫加日期，如 "Feb 4"

    Returns:
        (月, 日)

    Raises:
        TermTableError: 格式錯誤、月份未知或日期超出該月範圍
    """
    parts = text.split() if isinstance(text, str) else []
    if len(parts) != 2:
        raise TermTableError(f"起始日格式錯誤：{text!r}")

    month_str, day_str = parts
    month = MONTH_ABBR.get(month_str)
    if month is None:
        raise TermTableError(f"未知的月份縮寫：{text!r}")
    if not day_str.isdigit():
        raise TermTableError(f"日期不是數字：{text!r}")

    day = int(day_str)
    if not 1 <= day <= MONTH_DAYS[month - 1]:
        raise TermTableError(f"日期超出範圍：{text!r}")
    return month, day


def _build_term(record: dict) -> Term:
    """將單筆原始資料轉為 Term"""
    try:
        month, day = parse_anchor(record["anchor"])
        return Term(
            id=int(record["id"]),
            name=record["name"],
            pinyin=record.get("pinyin", ""),
            translation=record["translation"],
            season=Season(record["season"]),
            anchor_text=record["anchor"],
            month=month,
            day=day,
            color=record.get("color", "#cccccc"),
            description=record.get("description", ""),
        )
    except KeyError as e:
        raise TermTableError(f"節氣資料缺少欄位 {e}：{record!r}") from e
    except ValueError as e:
        if isinstance(e, TermTableError):
            raise
        raise TermTableError(f"節氣資料格式錯誤：{record!r}") from e


def load_term_table(records: Iterable[dict]) -> tuple[Term, ...]:
    """解析並驗證節氣資料表

    Args:
        records: 原始節氣資料（依儲存順序）

    Returns:
        不可變的節氣元組，保持儲存順序

    Raises:
        TermTableError: 資料表為空、序號重複或起始日重複
    """
    terms = tuple(_build_term(r) for r in records)
    if not terms:
        raise TermTableError("節氣資料表為空")

    ids = [t.id for t in terms]
    if len(set(ids)) != len(ids):
        raise TermTableError("節氣序號重複")

    anchors = [t.anchor for t in terms]
    if len(set(anchors)) != len(anchors):
        raise TermTableError("節氣起始日重複")

    return terms


@lru_cache(maxsize=1)
def get_term_table() -> tuple[Term, ...]:
    """取得全域節氣資料表（僅載入一次）"""
    table = load_term_table(RAW_TERMS)
    logger.info("已載入 %d 個節氣", len(table))
    return table


def get_term_by_id(term_id: int, table: Optional[tuple[Term, ...]] = None) -> Optional[Term]:
    """依序號取得節氣，找不到則返回 None"""
    table = table if table is not None else get_term_table()
    return next((t for t in table if t.id == term_id), None)


def get_term_by_name(name: str, table: Optional[tuple[Term, ...]] = None) -> Optional[Term]:
    """依名稱取得節氣，找不到則返回 None"""
    table = table if table is not None else get_term_table()
    return next((t for t in table if t.name == name), None)


def terms_for_month(table: Iterable[Term], month_index: int) -> list[Term]:
    """取得某月份（0 = 一月）內的節氣，保持儲存順序"""
    return [t for t in table if t.month_index == month_index]


def get_terms_by_season(season: Season, table: Optional[tuple[Term, ...]] = None) -> list[Term]:
    """取得指定季節的所有節氣"""
    table = table if table is not None else get_term_table()
    return [t for t in table if t.season == season]
