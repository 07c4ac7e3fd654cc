import json
import logging
from typing import Any, Dict, Optional
from api.models import IdeaRecord
from lib.airtable_client import AirtableClient
from lib.error_handler import ErrorHandler, JsonParseError
from lib.openai_client import OpenAIClient
from lib.telegram_client import TelegramClient

logger = logging.getLogger(__name__)

FALLBACK_TITLE_LENGTH = 50

def extract_json_candidate(output: str) -> str:
    """
    Cut the model output down to the span between the first '{' and the last
    '}' so that any text around the JSON object is dropped. Without a usable
    pair of braces the whole output is returned.
    """
    first_brace = output.find('{')
    last_brace = output.rfind('}')
    if first_brace == -1 or last_brace < first_brace:
        return output
    return output[first_brace:last_brace + 1]

def _load_json_object(candidate: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(candidate)
    except ValueError as e:
        raise JsonParseError(f"Completion is not valid JSON: {str(e)}") from e
    if not isinstance(parsed, dict):
        raise JsonParseError(f"Completion JSON is a {type(parsed).__name__}, not an object")
    return parsed

def parse_idea_output(output: str, text: str) -> Dict[str, Any]:
    """Parse the completion, falling back to a record built from the input"""
    try:
        return _load_json_object(extract_json_candidate(output))
    except JsonParseError as e:
        logger.warning(f"Using fallback record: {e.message}")
        return {
            'title': text[:FALLBACK_TITLE_LENGTH],
            'summary': text,
            'tags': [],
            'raw_idea': text
        }

def _format_tags(tags: Any) -> str:
    if isinstance(tags, list):
        return ", ".join("" if tag is None else str(tag) for tag in tags)
    if not tags:
        return ""
    return str(tags)

def build_idea_record(parsed: Dict[str, Any], text: str, user_id: Optional[Any]) -> IdeaRecord:
    return IdeaRecord(
        title=str(parsed.get('title') or ""),
        summary=str(parsed.get('summary') or ""),
        tags=_format_tags(parsed.get('tags')),
        raw_idea=str(parsed.get('raw_idea') or text),
        user_id=str(user_id) if user_id is not None else ""
    )

def format_confirmation(record: IdeaRecord) -> str:
    return f"Thanks, I saved your idea.\n\nTitle: {record.title or '-'}\n\n{record.summary}"

class IdeaProcessor:
    def __init__(self, openai_client: OpenAIClient, airtable_client: AirtableClient,
                 telegram_client: TelegramClient):
        self.openai = openai_client
        self.airtable = airtable_client
        self.telegram = telegram_client
        self.error_handler = ErrorHandler()

    async def process(self, text: str, chat_id: int, user_id: Optional[int] = None) -> Optional[IdeaRecord]:
        """
        Structure an idea, store it and confirm to the user.

        Every failure is logged and answered with one generic message, so this
        never raises. Returns the stored record, or None on failure.
        """
        try:
            logger.info(f"Processing idea from user {user_id}: {text[:50]}...")
            output = await self.openai.complete_idea(text)
            record = build_idea_record(parse_idea_output(output, text), text, user_id)

            # Single create, the stored row is not read back
            await self.airtable.create_record(record.to_fields())
        except Exception as e:
            await self.telegram.send_message(chat_id, self.error_handler.handle_processing_error(e))
            return None

        # Delivery result is not checked
        await self.telegram.send_message(chat_id, format_confirmation(record))
        return record
