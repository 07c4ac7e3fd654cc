import pytest
import aiohttp
from unittest.mock import patch
from lib.error_handler import AppError, FileDownloadError, FileResolutionError
from lib.telegram_client import TelegramClient
from aiohttp_fakes import FakeResponse, FakeSession

@pytest.fixture
def client(settings):
    return TelegramClient(settings)

@pytest.mark.asyncio
async def test_send_message_posts_chat_and_text(client):
    session = FakeSession(FakeResponse(status=200, json_data={'ok': True}))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        await client.send_message(100, "hello")

    method, url, kwargs = session.calls[0]
    assert method == 'POST'
    assert url == "https://telegram.test/bottest-token/sendMessage"
    assert kwargs['json'] == {'chat_id': 100, 'text': "hello"}

@pytest.mark.asyncio
async def test_send_message_failure_is_logged_not_raised(client, caplog):
    session = FakeSession(FakeResponse(status=403, text='{"ok":false,"description":"bot was blocked"}'))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        await client.send_message(100, "hello")

    assert "bot was blocked" in caplog.text

@pytest.mark.asyncio
async def test_send_message_connection_error_is_swallowed(client):
    with patch('lib.telegram_client.aiohttp.ClientSession', side_effect=aiohttp.ClientError("refused")):
        await client.send_message(100, "hello")

@pytest.mark.asyncio
async def test_get_file_path(client):
    session = FakeSession(FakeResponse(json_data={'ok': True, 'result': {'file_path': 'voice/file_1.oga'}}))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        file_path = await client.get_file_path('abc')

    assert file_path == 'voice/file_1.oga'
    method, url, kwargs = session.calls[0]
    assert url == "https://telegram.test/bottest-token/getFile"
    assert kwargs['params'] == {'file_id': 'abc'}

@pytest.mark.asyncio
@pytest.mark.parametrize('body', [
    {'ok': False, 'description': 'Bad Request: invalid file_id'},
    {'ok': True, 'result': {'file_id': 'abc'}},
    {'ok': True},
])
async def test_get_file_path_without_location_raises(client, body):
    session = FakeSession(FakeResponse(json_data=body))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        with pytest.raises(FileResolutionError):
            await client.get_file_path('abc')

@pytest.mark.asyncio
async def test_download_file(client):
    session = FakeSession(FakeResponse(body=b"OggS-data"))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        data = await client.download_file('voice/file_1.oga')

    assert data == b"OggS-data"
    assert session.calls[0][1] == "https://telegram.test/file/bottest-token/voice/file_1.oga"

@pytest.mark.asyncio
async def test_download_file_failure(client):
    session = FakeSession(FakeResponse(status=404, text="Not Found"))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        with pytest.raises(FileDownloadError):
            await client.download_file('voice/missing.oga')

@pytest.mark.asyncio
async def test_set_webhook_posts_url(client):
    session = FakeSession(FakeResponse(json_data={'ok': True, 'result': True, 'description': 'Webhook was set'}))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        result = await client.set_webhook("https://bot.example.com/telegram")

    assert result['description'] == 'Webhook was set'
    method, url, kwargs = session.calls[0]
    assert method == 'POST'
    assert url == "https://telegram.test/bottest-token/setWebhook"
    assert kwargs['json'] == {'url': "https://bot.example.com/telegram"}

@pytest.mark.asyncio
@pytest.mark.parametrize('status,body', [
    (200, {'ok': False, 'description': 'Bad Request: bad webhook'}),
    (401, {'ok': False, 'description': 'Unauthorized'}),
    (502, {'ok': True}),
])
async def test_set_webhook_failure_raises(client, status, body):
    session = FakeSession(FakeResponse(status=status, json_data=body))

    with patch('lib.telegram_client.aiohttp.ClientSession', return_value=session):
        with pytest.raises(AppError):
            await client.set_webhook("https://bot.example.com/telegram")
