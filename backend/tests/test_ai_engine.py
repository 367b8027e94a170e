"""AI 節氣詩詞服務測試"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from suishi.services.ai_engine import (
    FALLBACK_INSIGHT,
    MISSING_KEY_INSIGHT,
    TermInsight,
    create_term_prompt,
    generate_term_insight,
    insight_from_dict,
    parse_json_response,
)
from suishi.services.insight_panel import NO_DATA_MESSAGE, InsightPanel
from suishi.services.term_table import get_term_by_id


def _mock_model(text=None, error=None):
    model = MagicMock()
    if error is not None:
        model.generate_content_async = AsyncMock(side_effect=error)
    else:
        model.generate_content_async = AsyncMock(return_value=MagicMock(text=text))
    return model


class TestParseJsonResponse:
    """測試 JSON 回應解析"""

    def test_plain_json(self):
        """測試一般 JSON"""
        assert parse_json_response('{"poem": "a"}') == {"poem": "a"}

    def test_code_fence(self):
        """測試 markdown 代碼塊"""
        content = '```json\n{"poem": "a", "advice": "b", "food": "c"}\n```'
        assert parse_json_response(content)["food"] == "c"

    def test_invalid(self):
        """測試無法解析"""
        assert parse_json_response("not json") is None
        assert parse_json_response("") is None
        assert parse_json_response("[1, 2]") is None

    def test_incomplete_fields(self):
        """測試欄位不齊全"""
        assert insight_from_dict({"poem": "a", "advice": "b"}) is None
        assert insight_from_dict({"poem": "a", "advice": "b", "food": " "}) is None
        assert insight_from_dict({"poem": "a", "advice": "b", "food": "c"}) == TermInsight("a", "b", "c")


class TestGenerateTermInsight:
    """測試節氣詩詞生成"""

    @pytest.fixture
    def term(self):
        return get_term_by_id(1)

    def test_prompt_mentions_term(self, term):
        """測試 Prompt 內容"""
        prompt = create_term_prompt(term)
        assert "立春" in prompt
        assert "poem" in prompt

    @pytest.mark.asyncio
    async def test_missing_key(self, term):
        """測試未設定 API Key"""
        with patch("suishi.services.ai_engine.get_model", return_value=None):
            assert await generate_term_insight(term) == MISSING_KEY_INSIGHT

    @pytest.mark.asyncio
    async def test_success(self, term):
        """測試正常回應"""
        model = _mock_model('{"poem": "东风解冻", "advice": "早睡早起", "food": "春饼"}')
        with patch("suishi.services.ai_engine.get_model", return_value=model):
            insight = await generate_term_insight(term)

        assert insight == TermInsight("东风解冻", "早睡早起", "春饼")
        model.generate_content_async.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_network_error(self, term):
        """測試網路錯誤返回預設內容"""
        model = _mock_model(error=ConnectionError("offline"))
        with patch("suishi.services.ai_engine.get_model", return_value=model):
            assert await generate_term_insight(term) == FALLBACK_INSIGHT

    @pytest.mark.asyncio
    async def test_malformed_response(self, term):
        """測試格式錯誤返回預設內容"""
        model = _mock_model("今天天气很好")
        with patch("suishi.services.ai_engine.get_model", return_value=model):
            assert await generate_term_insight(term) == FALLBACK_INSIGHT


class TestInsightPanel:
    """測試詩詞面板"""

    @pytest.mark.asyncio
    async def test_load(self):
        """測試正常載入"""
        async def generator(term):
            return TermInsight(term.name, "b", "c")

        panel = InsightPanel(generator)
        result = await panel.load(get_term_by_id(4))

        assert result.poem == "春分"
        assert panel.term_id == 4
        assert panel.loading is False
        assert panel.snapshot()["insight"]["poem"] == "春分"

    @pytest.mark.asyncio
    async def test_stale_result_discarded(self):
        """測試被取代的請求結果不會寫入面板"""
        gate = asyncio.Event()

        async def generator(term):
            if term.id == 1:
                await gate.wait()
                return TermInsight("old", "old", "old")
            return TermInsight("new", "new", "new")

        panel = InsightPanel(generator)
        first = asyncio.create_task(panel.load(get_term_by_id(1)))
        await asyncio.sleep(0)
        assert panel.loading is True

        second = await panel.load(get_term_by_id(2))
        gate.set()

        assert await first is None
        assert second.poem == "new"
        assert panel.insight.poem == "new"
        assert panel.term_id == 2
        assert panel.loading is False

    @pytest.mark.asyncio
    async def test_request_cancels_previous(self):
        """測試新請求取消仍在進行的請求"""
        gate = asyncio.Event()

        async def generator(term):
            if term.id == 1:
                await gate.wait()
            return TermInsight(term.name, "b", "c")

        panel = InsightPanel(generator)
        first = panel.request(get_term_by_id(1))
        await asyncio.sleep(0)
        second = panel.request(get_term_by_id(2))

        assert (await second).poem == "雨水"
        with pytest.raises(asyncio.CancelledError):
            await first
        assert panel.insight.poem == "雨水"

    @pytest.mark.asyncio
    async def test_no_data_message(self):
        """測試連預設內容都失敗時顯示無資料"""
        async def generator(term):
            raise RuntimeError("boom")

        panel = InsightPanel(generator)
        assert await panel.load(get_term_by_id(1)) is None
        assert panel.message == NO_DATA_MESSAGE
        assert panel.loading is False
