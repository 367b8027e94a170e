# backend/suishi/schemas/common.py
"""共用 API Schema"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """API 回應包裝"""

    success: bool = Field(True, description="請求是否成功")
    data: Optional[T] = Field(None, description="回應資料")
    error: Optional[str] = Field(None, description="錯誤訊息")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "data": {},
                "error": None
            }
        }
    }
