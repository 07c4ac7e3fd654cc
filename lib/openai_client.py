import asyncio
import logging
import openai
from openai import OpenAI
from lib.config import Settings
from lib.error_handler import CompletionError, TranscriptionError

logger = logging.getLogger(__name__)

COMPLETION_MODEL = "gpt-4o-mini"
TRANSCRIPTION_MODEL = "whisper-1"
# Kept low so the model sticks to the requested JSON shape
TEMPERATURE = 0.2

IDEA_SYSTEM_PROMPT = (
    "You are an assistant that structures content ideas. "
    "Always answer with a single JSON object in exactly this format:\n"
    "{\n"
    '  "title": "",\n'
    '  "summary": "",\n'
    '  "tags": [],\n'
    '  "raw_idea": ""\n'
    "}"
)

class OpenAIClient:
    def __init__(self, settings: Settings):
        self.client = OpenAI(api_key=settings.openai_api_key)

    async def complete_idea(self, text: str) -> str:
        """
        Ask the chat model to structure an idea and return the raw text of the
        first choice. The output is not parsed here.
        """
        messages = [
            {"role": "system", "content": IDEA_SYSTEM_PROMPT},
            {"role": "user", "content": text}
        ]

        try:
            # The SDK call is blocking, run it off the event loop
            loop = asyncio.get_event_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self.client.chat.completions.create(
                    model=COMPLETION_MODEL,
                    messages=messages,
                    temperature=TEMPERATURE
                )
            )
        except openai.APIStatusError as e:
            raise CompletionError(f"OpenAI chat error: {e.response.text}") from e

        if not response.choices or response.choices[0].message.content is None:
            raise CompletionError("OpenAI chat returned no content")

        content = response.choices[0].message.content
        logger.info(f"Completion received: {content[:50]}...")
        return content

    async def transcribe_audio(self, audio_data: bytes, filename: str = "voice.oga") -> str:
        """
        Transcribe audio bytes using OpenAI Whisper API
        """
        logger.info(f"Transcribing {len(audio_data)} bytes with OpenAI...")
        try:
            loop = asyncio.get_event_loop()
            transcript = await loop.run_in_executor(
                None,
                lambda: self.client.audio.transcriptions.create(
                    model=TRANSCRIPTION_MODEL,
                    file=(filename, audio_data, "audio/ogg")
                )
            )
        except openai.APIStatusError as e:
            raise TranscriptionError(f"Whisper error: {e.response.text}") from e

        logger.info(f"Transcription complete: {transcript.text[:50]}...")
        return transcript.text
