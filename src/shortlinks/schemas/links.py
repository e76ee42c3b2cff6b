from pydantic import BaseModel
from datetime import datetime

class CreateLinkRequest(BaseModel):
    # not checked for well-formedness; blank values are rejected by LinkService
    long_url: str

class LinkCreated(BaseModel):
    code: str
    short_url: str
    long_url: str

class LinkStats(LinkCreated):
    times_followed: int
    created_at: datetime
