from pydantic import BaseModel


class HealthTip(BaseModel):
    id: int
    title: str
    content: str
    category: str


class HealthTipResponse(BaseModel):
    tip: HealthTip
