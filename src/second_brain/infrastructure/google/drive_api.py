"""
Google Drive REST client.

Finds files by exact name and uploads JSON content as multipart/related
requests carrying file metadata and body together.
"""

import json
from typing import Any

import httpx

from second_brain.config import get_logger, get_settings
from second_brain.config.settings import BackupSettings
from second_brain.core.exceptions import RemoteCallFailedError
from second_brain.core.interfaces import IFileStore, RemoteFile
from second_brain.infrastructure.google.responses import json_object

logger = get_logger(__name__)

MULTIPART_BOUNDARY = "-------314159265358979323846"


def build_multipart_body(name: str, content: str) -> bytes:
    """Metadata part followed by the JSON content part."""
    metadata = {"name": name, "mimeType": "application/json"}
    delimiter = f"\r\n--{MULTIPART_BOUNDARY}\r\n"
    close_delimiter = f"\r\n--{MULTIPART_BOUNDARY}--"
    body = (
        delimiter
        + "Content-Type: application/json; charset=UTF-8\r\n\r\n"
        + json.dumps(metadata)
        + delimiter
        + "Content-Type: application/json\r\n\r\n"
        + content
        + close_delimiter
    )
    return body.encode("utf-8")


def _escape_query_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


class GoogleDriveClient(IFileStore):
    """Drive v3 files API client."""

    def __init__(self, settings: BackupSettings | None = None):
        self.settings = settings or get_settings().backup
        self.timeout = self.settings.timeout

    async def find_by_name(self, access_token: str, name: str) -> list[RemoteFile]:
        """List non-trashed files with exactly this name."""
        data = await self._request(
            "GET",
            f"{self.settings.api_url}/files",
            "find_by_name",
            access_token,
            params={
                "q": f"name = '{_escape_query_value(name)}' and trashed = false",
                "fields": "files(id, name, mimeType)",
                "spaces": "drive",
            },
        )
        entries = data.get("files", [])
        if not isinstance(entries, list):
            raise RemoteCallFailedError("drive", "find_by_name", "response has no file list")
        files = [
            RemoteFile(id=f["id"], name=f.get("name", name), mime_type=f.get("mimeType"))
            for f in entries
            if isinstance(f, dict) and f.get("id")
        ]
        logger.debug("drive_files_found", name=name, count=len(files))
        return files

    async def create_file(self, access_token: str, name: str, content: str) -> str:
        """Upload a new JSON file and return its id."""
        data = await self._request(
            "POST",
            f"{self.settings.upload_url}/files",
            "create_file",
            access_token,
            params={"uploadType": "multipart"},
            content=build_multipart_body(name, content),
        )
        file_id = data.get("id")
        if not file_id:
            raise RemoteCallFailedError("drive", "create_file", "response has no file id")
        logger.info("drive_file_created", file_id=file_id, name=name, size=len(content))
        return file_id

    async def update_file(
        self, access_token: str, file_id: str, name: str, content: str
    ) -> str:
        """Replace an existing file's content and return its id."""
        await self._request(
            "PATCH",
            f"{self.settings.upload_url}/files/{file_id}",
            "update_file",
            access_token,
            params={"uploadType": "multipart"},
            content=build_multipart_body(name, content),
        )
        logger.info("drive_file_updated", file_id=file_id, name=name, size=len(content))
        return file_id

    async def _request(
        self,
        method: str,
        url: str,
        operation: str,
        access_token: str,
        params: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> dict[str, Any]:
        """Make an authorized request and return the decoded JSON body."""
        headers = {"Authorization": f"Bearer {access_token}"}
        if content is not None:
            headers["Content-Type"] = f'multipart/related; boundary="{MULTIPART_BOUNDARY}"'

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, url, params=params, content=content, headers=headers
                )
        except httpx.HTTPError as e:
            raise RemoteCallFailedError("drive", operation, str(e) or e.__class__.__name__) from e

        if response.status_code != 200:
            raise RemoteCallFailedError(
                "drive", operation, f"HTTP {response.status_code}: {response.text[:200]}"
            )
        return json_object(response, "drive", operation)
