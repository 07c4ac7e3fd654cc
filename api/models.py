from typing import Any, Dict, Optional
from pydantic import BaseModel
from lib.error_handler import GenericProcessingError

HELP_COMMAND = "/help"
RECORD_SOURCE = "telegram"

# Telegram may deliver the message under any of these keys
MESSAGE_FIELDS = ('message', 'edited_message', 'channel_post')

class InboundUpdate(BaseModel):
    chat_id: int
    user_id: Optional[int] = None
    kind: str
    text: Optional[str] = None
    voice_file_id: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> Optional["InboundUpdate"]:
        """Build an update from a webhook body, or None when it carries no message"""
        message = None
        for field in MESSAGE_FIELDS:
            if payload.get(field):
                message = payload[field]
                break
        if message is None:
            return None

        chat = message.get('chat') or {}
        if 'id' not in chat:
            raise GenericProcessingError(f"Update message has no chat id: {message}")

        sender = message.get('from') or {}
        text = message.get('text')
        voice = message.get('voice') or {}

        if text and text.startswith(HELP_COMMAND):
            kind = 'command'
        elif text:
            kind = 'text'
        elif message.get('voice') is not None:
            kind = 'voice'
        else:
            kind = 'other'

        return cls(
            chat_id=chat['id'],
            user_id=sender.get('id'),
            kind=kind,
            text=text,
            voice_file_id=voice.get('file_id')
        )

class IdeaRecord(BaseModel):
    title: str = ""
    summary: str = ""
    tags: str = ""
    raw_idea: str
    source: str = RECORD_SOURCE
    user_id: str = ""

    def to_fields(self) -> Dict[str, str]:
        """Airtable column names for this record"""
        return {
            'Title': self.title,
            'Summary': self.summary,
            'Tags': self.tags,
            'RawIdea': self.raw_idea,
            'Source': self.source,
            'UserId': self.user_id
        }
