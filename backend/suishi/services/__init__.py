"""服務模組

包含節氣資料、節氣判定、環形佈局與互動狀態等服務。
"""

from suishi.services.ring_layout import RingLayout, build_ring_layout
from suishi.services.term_resolver import resolve_current_term
from suishi.services.term_table import Term, get_term_table

__all__ = ["RingLayout", "Term", "build_ring_layout", "get_term_table", "resolve_current_term"]
