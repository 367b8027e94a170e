# backend/suishi/main.py
"""FastAPI 應用程式入口"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from suishi.api.v1 import clock, insight, ring, terms, view
from suishi.config import settings
from suishi.services.term_table import get_term_table

app = FastAPI(
    title=settings.app_name,
    description="二十四節氣環形日曆 API",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def configure_logging():
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.on_event("startup")
async def startup():
    """啟動時設定日誌並載入節氣資料表；資料表錯誤會讓啟動失敗"""
    configure_logging()
    get_term_table()


@app.get("/health")
async def health_check():
    """健康檢查端點"""
    return {"status": "ok", "version": "0.1.0"}


# 註冊 API 路由
app.include_router(
    terms.router,
    prefix="/api/v1/terms",
    tags=["terms"]
)
app.include_router(
    ring.router,
    prefix="/api/v1/ring",
    tags=["ring"]
)
app.include_router(
    view.router,
    prefix="/api/v1/view",
    tags=["view"]
)
app.include_router(
    insight.router,
    prefix="/api/v1/insight",
    tags=["insight"]
)
app.include_router(
    clock.router,
    prefix="/api/v1/clock",
    tags=["clock"]
)
