from typing import Optional
import asyncio
import logging
import sys
from dotenv import load_dotenv
from flask import Flask, request

from api.idea_processor import IdeaProcessor
from api.transcription import VoiceTranscriber
from api.webhook_handler import TelegramWebhookHandler
from lib.airtable_client import AirtableClient
from lib.config import Settings, get_settings
from lib.openai_client import OpenAIClient
from lib.telegram_client import TelegramClient

load_dotenv()

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    # Handlers are only added when the host has not configured any
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logging.getLogger().setLevel(level.upper())

def build_webhook_handler(settings: Settings) -> TelegramWebhookHandler:
    telegram_client = TelegramClient(settings)
    openai_client = OpenAIClient(settings)
    airtable_client = AirtableClient(settings)

    return TelegramWebhookHandler(
        telegram_client=telegram_client,
        idea_processor=IdeaProcessor(openai_client, airtable_client, telegram_client),
        voice_transcriber=VoiceTranscriber(telegram_client, openai_client)
    )

def create_app(settings: Optional[Settings] = None,
               webhook_handler: Optional[TelegramWebhookHandler] = None) -> Flask:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Loaded configuration: {settings.describe()}")
    webhook_handler = webhook_handler or build_webhook_handler(settings)

    app = Flask(__name__)

    @app.route("/", methods=['GET'])
    def root():
        """Liveness check"""
        return "Telegram idea bot alive", 200

    @app.route("/telegram", methods=['POST'])
    def telegram_webhook():
        """Handle update webhooks from Telegram.

        The response only acknowledges receipt; Telegram discards the body and
        retries on 5xx.
        """
        try:
            update = request.get_json(force=True, silent=True)
            if not isinstance(update, dict):
                update = {}
            asyncio.run(webhook_handler.handle_update(update))
            return "OK", 200
        except Exception as e:
            logger.error(f"Error handling update: {str(e)}", exc_info=True)
            return "Internal Server Error", 500

    return app

if __name__ == "__main__":
    settings = get_settings()
    app = create_app(settings)
    logger.info(f"Starting Flask server on port {settings.port}...")
    app.run(host="0.0.0.0", port=settings.port)
