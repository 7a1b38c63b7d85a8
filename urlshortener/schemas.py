from pydantic import BaseModel


class SaveRequest(BaseModel):
    # both optional here so missing fields get our own validation messages
    url: str = ""
    alias: str | None = None


class StatusOut(BaseModel):
    status: str = "OK"


class SaveResponse(StatusOut):
    alias: str


class HealthOut(BaseModel):
    status: str
    env: str
