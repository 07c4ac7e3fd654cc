import logging
from typing import Dict, Any
from api.idea_processor import IdeaProcessor
from api.models import InboundUpdate
from api.transcription import VoiceTranscriber
from lib.error_handler import AppError, ErrorHandler
from lib.telegram_client import TelegramClient

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Send me an idea as a text message or a voice memo and I'll structure it "
    "and save it for you."
)

class TelegramWebhookHandler:
    def __init__(self, telegram_client: TelegramClient, idea_processor: IdeaProcessor,
                 voice_transcriber: VoiceTranscriber):
        self.telegram = telegram_client
        self.idea_processor = idea_processor
        self.voice_transcriber = voice_transcriber
        self.error_handler = ErrorHandler()

    async def handle_update(self, payload: Dict[str, Any]) -> None:
        """Handle one Telegram update. Outcomes reach the user only through chat replies."""
        update = InboundUpdate.from_payload(payload)
        if update is None:
            logger.info("Ignoring update without a message")
            return

        logger.info(f"Received {update.kind} message from chat {update.chat_id}")

        if update.kind == 'command':
            await self.telegram.send_message(update.chat_id, HELP_TEXT)
        elif update.kind == 'text':
            await self.idea_processor.process(update.text, update.chat_id, update.user_id)
        elif update.kind == 'voice':
            await self.handle_voice_message(update)
        else:
            logger.info(f"Ignoring unsupported message in chat {update.chat_id}")

    async def handle_voice_message(self, update: InboundUpdate) -> None:
        try:
            transcript = await self.voice_transcriber.transcribe_voice(update.voice_file_id)
        except AppError as e:
            await self.telegram.send_message(update.chat_id, self.error_handler.handle_voice_error(e))
            return

        await self.idea_processor.process(transcript, update.chat_id, update.user_id)
