"""應用程式設定模組

使用 pydantic-settings 管理應用程式配置，
支援從環境變數和 .env 檔案載入設定。
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """應用程式設定類別

    Attributes:
        app_name: 應用程式名稱
        debug: 是否啟用除錯模式
        gemini_api_key: Gemini API Key（未設定時使用預設內容）
        gemini_model: 生成節氣詩詞所用的模型
        utc_offset_hours: 「今天」與時鐘所用的時區偏移
        cors_origins: 允許的前端來源
        max_view_sessions: 記憶體中最多保留的檢視 session 數
    """

    app_name: str = "岁时 · 节气 API"
    debug: bool = False
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    utc_offset_hours: int = 8
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    max_view_sessions: int = 256

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# 全域設定實例
settings = Settings()
