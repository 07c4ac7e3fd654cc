import pytest
from unittest.mock import AsyncMock, MagicMock
import sys
from pathlib import Path

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
sys.path.append(project_root)

from lib.config import Settings

@pytest.fixture
def settings():
    return Settings(
        telegram_token="test-token",
        telegram_api_base="https://telegram.test",
        airtable_api_key="key-test",
        airtable_base_id="appTEST",
        airtable_table_name="Content Ideas",
        airtable_api_base="https://airtable.test/v0",
        openai_api_key="sk-test"
    )

@pytest.fixture
def mock_telegram():
    telegram = MagicMock()
    telegram.send_message = AsyncMock()
    telegram.get_file_path = AsyncMock(return_value="voice/file_1.oga")
    telegram.download_file = AsyncMock(return_value=b"OggS-fake-audio")
    return telegram

@pytest.fixture
def mock_openai():
    openai_client = MagicMock()
    openai_client.complete_idea = AsyncMock()
    openai_client.transcribe_audio = AsyncMock(return_value="Transcribed idea")
    return openai_client

@pytest.fixture
def mock_airtable():
    airtable = MagicMock()
    airtable.create_record = AsyncMock(return_value={'id': 'rec123'})
    return airtable
