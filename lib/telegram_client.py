import aiohttp
import logging
from lib.config import Settings
from lib.error_handler import AppError, FileResolutionError, FileDownloadError

logger = logging.getLogger(__name__)

class TelegramClient:
    def __init__(self, settings: Settings):
        self.bot_url = settings.telegram_bot_url
        self.file_url = settings.telegram_file_url

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message to a chat.

        Delivery is fire-and-forget: failures are logged and never raised, so a
        lost reply cannot fail the update that triggered it.
        """
        try:
            logger.info(f"Sending message to chat {chat_id}: {text[:20]}...")
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    f"{self.bot_url}/sendMessage",
                    json={'chat_id': chat_id, 'text': text}
                ) as response:
                    if response.status != 200:
                        logger.error(f"Telegram sendMessage failed ({response.status}): {await response.text()}")
        except aiohttp.ClientError as e:
            logger.error(f"Failed to send message to chat {chat_id}: {str(e)}")

    async def get_file_path(self, file_id: str) -> str:
        """Resolve a file id to the path used by the file download endpoint"""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                f"{self.bot_url}/getFile",
                params={'file_id': file_id}
            ) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    raise FileResolutionError(f"Telegram getFile returned invalid JSON: {await response.text()}")

        if not isinstance(data, dict):
            data = {}
        result = data.get('result')
        if not data.get('ok') or not isinstance(result, dict) or not result.get('file_path'):
            logger.error(f"Telegram getFile failed: {data}")
            raise FileResolutionError(f"Telegram getFile failed for {file_id}: {data}")

        return result['file_path']

    async def download_file(self, file_path: str) -> bytes:
        async with aiohttp.ClientSession() as session:
            async with session.get(f"{self.file_url}/{file_path}") as response:
                if response.status != 200:
                    raise FileDownloadError(
                        f"Failed to download {file_path} ({response.status}): {await response.text()}"
                    )
                data = await response.read()

        logger.info(f"Voice file downloaded: {len(data)} bytes")
        return data

    async def set_webhook(self, url: str) -> dict:
        """Register the webhook URL the Bot API pushes updates to"""
        async with aiohttp.ClientSession() as session:
            async with session.post(
                f"{self.bot_url}/setWebhook",
                json={'url': url}
            ) as response:
                data = await response.json(content_type=None)
                if response.status != 200 or not data.get('ok'):
                    raise AppError(f"Telegram setWebhook failed: {data}")
                return data
