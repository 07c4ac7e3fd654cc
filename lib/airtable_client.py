import logging
from typing import Dict, Any
from urllib.parse import quote
import aiohttp
from lib.config import Settings
from lib.error_handler import StoreWriteError

logger = logging.getLogger(__name__)

class AirtableClient:
    def __init__(self, settings: Settings):
        self.api_key = settings.airtable_api_key
        self.table_name = settings.airtable_table_name
        self.table_url = (
            f"{settings.airtable_api_base.rstrip('/')}/"
            f"{settings.airtable_base_id}/{quote(settings.airtable_table_name, safe='')}"
        )
        logger.info(f"Airtable client initialized for table: {self.table_name}")

    async def create_record(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Append one row to the table and return the created record"""
        headers = {'Authorization': f"Bearer {self.api_key}"}
        payload = {'records': [{'fields': fields}]}

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.table_url, json=payload, headers=headers) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f"Airtable error: {error_text}")
                        raise StoreWriteError(f"Airtable create failed ({response.status}): {error_text}")
                    data = await response.json()
        except aiohttp.ClientError as e:
            raise StoreWriteError(f"Airtable request failed: {str(e)}") from e

        records = data.get('records') or [{}]
        logger.info(f"Stored record {records[0].get('id')} in {self.table_name}")
        return records[0]
