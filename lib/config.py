from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True, extra='ignore')

    # Telegram settings
    telegram_token: str = ''
    telegram_api_base: str = 'https://api.telegram.org'

    # Airtable settings
    airtable_api_key: str = ''
    airtable_base_id: str = ''
    airtable_table_name: str = 'Content Ideas'
    airtable_api_base: str = 'https://api.airtable.com/v0'

    # OpenAI settings
    openai_api_key: str = ''

    # Server settings
    port: int = 3000
    log_level: str = 'INFO'
    webhook_url: str = ''

    @property
    def telegram_bot_url(self) -> str:
        return f"{self.telegram_api_base.rstrip('/')}/bot{self.telegram_token}"

    @property
    def telegram_file_url(self) -> str:
        return f"{self.telegram_api_base.rstrip('/')}/file/bot{self.telegram_token}"

    def describe(self) -> dict:
        """Summary of the loaded configuration with secrets cut to a short prefix"""
        return {
            'telegram_token': _mask(self.telegram_token),
            'telegram_api_base': self.telegram_api_base,
            'airtable_api_key': _mask(self.airtable_api_key),
            'airtable_base_id': self.airtable_base_id,
            'airtable_table_name': self.airtable_table_name,
            'openai_api_key': _mask(self.openai_api_key),
            'port': self.port,
        }

def _mask(secret: str) -> str:
    if not secret:
        return '<missing>'
    return f"{secret[:8]}..."

def get_settings() -> Settings:
    return Settings()
