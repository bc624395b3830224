from pydantic import BaseModel


class ChatHistoryQuery(BaseModel):
    user_id: str
    page: int = 1
    limit: int = 20


class ChatSuggestionsQuery(BaseModel):
    user_id: str
