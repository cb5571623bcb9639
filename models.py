from pydantic import BaseModel


class UsageWindow(BaseModel):
    utilization: float | None = None  # percent consumed, 0-100
    resets_at: str | None = None  # ISO timestamp


class UsageData(BaseModel):
    five_hour: UsageWindow | None = None
    seven_day: UsageWindow | None = None
    seven_day_oauth_apps: UsageWindow | None = None
    seven_day_opus: UsageWindow | None = None
    seven_day_sonnet: UsageWindow | None = None


class CacheEntry(BaseModel):
    timestamp: int  # epoch ms
    jitter: int  # ms added to the TTL
    data: UsageData


class OutputResult(BaseModel):
    five_hour_pct: int | None = None
    seven_day_pct: int | None = None
    five_hour_reset: str | None = None
    seven_day_reset: str | None = None
    seven_day_budget: int | None = None
    opus_pct: int | None = None
    error: str | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)
