from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class SentenceOut(BaseModel):
    id: str
    text: str
    category: str
    word_count: int
    emotion: Optional[str] = None
    context: Optional[str] = None
    min_duration: int
    model_config = {"from_attributes": True}


class ProfileOut(BaseModel):
    id: str
    display_name: Optional[str] = None
    age: Optional[str] = None
    gender: Optional[str] = None
    tokens: int
    recordings_count: int
    milestone1_claimed: bool
    milestone2_claimed: bool
    created_at: Optional[datetime] = None
    model_config = {"from_attributes": True}


class TransactionOut(BaseModel):
    id: int
    amount: int
    type: str
    description: str
    created_at: Optional[datetime] = None
    model_config = {"from_attributes": True}


class MilestoneProgressOut(BaseModel):
    total_recorded: int
    prev_milestone: int
    next_milestone: int
    progress_percent: float


class SessionOut(BaseModel):
    sentences: list[SentenceOut]
    anchors_pending: int
    fresh_pool_remaining: int
    progress: MilestoneProgressOut


class RecordingIn(BaseModel):
    sentence_id: str
    duration: float = Field(ge=0)  # seconds; fractions are truncated
    file_size: int = Field(default=0, ge=0)


class RecordingResultOut(BaseModel):
    success: bool = True
    recording_id: int
    recordings_count: int
    tokens: int
    milestone: Optional[int] = None
    milestone_reward: int = 0


class StatsOut(BaseModel):
    total_users: int
    total_recordings: int
    total_hours: int


class ProfileUpdateIn(BaseModel):
    age: Optional[str] = Field(default=None, max_length=3)
    gender: Optional[Literal["male", "female"]] = None
    display_name: Optional[str] = Field(default=None, max_length=100)


class ShopItemOut(BaseModel):
    id: str
    name: str
    cost: int
    activation_date: str
    model_config = {"from_attributes": True}


class VoucherIn(BaseModel):
    item_id: str


class VoucherOut(BaseModel):
    id: int
    item_name: str
    token_cost: int
    activation_date: str
    status: str
    created_at: Optional[datetime] = None
    model_config = {"from_attributes": True}
