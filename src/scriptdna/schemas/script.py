"""Platform and script schema definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

ScriptMode = Literal["create", "rewrite"]


class Platform(str, Enum):
    """Target publishing destinations. Fixed at build time."""

    DOUYIN = "Douyin (TikTok China)"
    KUAISHOU = "Kuaishou"
    REDNOTE = "RedNote (Xiaohongshu)"
    WECHAT_CHANNELS = "WeChat Channels"
    WECHAT_OFFICIAL = "WeChat Official Account"
    BILIBILI = "Bilibili"
    YOUTUBE = "YouTube"


DEFAULT_PLATFORM = Platform.DOUYIN


class ScriptRequest(BaseModel):
    """A single script generation request. Never persisted."""

    platform: Platform = DEFAULT_PLATFORM
    persona_id: str
    topic_or_content: str = ""
    mode: ScriptMode = "create"


class GeneratedScript(BaseModel):
    """Markdown output of one generation, kept only for display."""

    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    error: Optional[str] = None  # set when content is the failure text

    @property
    def succeeded(self) -> bool:
        return self.error is None
