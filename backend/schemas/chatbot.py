from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

class ChatRequest(BaseModel):
    message: Optional[str] = None

class ChatResponse(BaseModel):
    success: bool = True
    response: str
    timestamp: datetime

class SuggestionsResponse(BaseModel):
    success: bool = True
    suggestions: List[str]
