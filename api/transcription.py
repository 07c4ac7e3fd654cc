import logging
from typing import Optional
from lib.error_handler import FileResolutionError
from lib.openai_client import OpenAIClient
from lib.telegram_client import TelegramClient

logger = logging.getLogger(__name__)

VOICE_FILENAME = "voice.oga"

class VoiceTranscriber:
    def __init__(self, telegram_client: TelegramClient, openai_client: OpenAIClient):
        self.telegram = telegram_client
        self.openai = openai_client

    async def transcribe_voice(self, file_id: Optional[str]) -> str:
        """Look up, download and transcribe a Telegram voice message"""
        if not file_id:
            raise FileResolutionError("Voice message has no file_id")

        logger.info(f"Resolving voice file {file_id}")
        file_path = await self.telegram.get_file_path(file_id)

        audio_data = await self.telegram.download_file(file_path)

        transcript = await self.openai.transcribe_audio(audio_data, filename=VOICE_FILENAME)
        logger.info(f"Voice transcribed: {transcript[:50]}...")
        return transcript
