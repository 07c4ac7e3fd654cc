import asyncio
from dotenv import load_dotenv
from lib.config import get_settings
from lib.telegram_client import TelegramClient

def set_webhook():
    """Point the Telegram bot at this service's /telegram endpoint"""
    try:
        load_dotenv()
        settings = get_settings()
        if not settings.webhook_url:
            print("WEBHOOK_URL is not set.")
            raise SystemExit(1)

        url = f"{settings.webhook_url.rstrip('/')}/telegram"
        print(f"Registering webhook {url}...")
        result = asyncio.run(TelegramClient(settings).set_webhook(url))
        print(f"Webhook registered: {result.get('description', 'ok')}")

    except Exception as e:
        print(f"Error registering webhook: {str(e)}")
        raise

if __name__ == "__main__":
    set_webhook()
