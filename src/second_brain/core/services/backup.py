"""
Backup Bridge.

Upserts the full dataset as a single named JSON file in a remote file
store. The file name is the only identity: zero matches create a file,
one match is overwritten in place, more than one is refused.
"""

import json

from second_brain.config import get_logger
from second_brain.core.entities import Dataset
from second_brain.core.exceptions import AmbiguousTargetError
from second_brain.core.interfaces import IFileStore, IOAuthProvider, TokenSet

logger = get_logger(__name__)

DEFAULT_BACKUP_FILE = "mnd-data.json"


class BackupService:
    """Snapshot upload with name-based create-or-update."""

    def __init__(
        self,
        oauth: IOAuthProvider,
        file_store: IFileStore,
        file_name: str = DEFAULT_BACKUP_FILE,
    ) -> None:
        self._oauth = oauth
        self._file_store = file_store
        self.file_name = file_name

    def authorization_url(self, state: str | None = None) -> str:
        return self._oauth.authorization_url(state)

    async def exchange_auth_code(self, code: str) -> TokenSet:
        """Exchange the consent screen's authorization code for tokens."""
        return await self._oauth.exchange_code(code)

    async def save_snapshot(self, access_token: str, dataset: Dataset) -> str:
        """
        Upload the dataset and return the remote file id.

        Raises:
            AmbiguousTargetError: If several remote files share the name
            RemoteCallFailedError: If the search or upload fails
        """
        content = json.dumps(dataset.to_wire(), indent=2)

        matches = await self._file_store.find_by_name(access_token, self.file_name)
        if len(matches) > 1:
            raise AmbiguousTargetError(self.file_name, [f.id for f in matches])

        if matches:
            file_id = await self._file_store.update_file(
                access_token, matches[0].id, self.file_name, content
            )
            created = False
        else:
            file_id = await self._file_store.create_file(access_token, self.file_name, content)
            created = True

        logger.info(
            "backup_saved",
            file_id=file_id,
            created=created,
            records=dataset.total_records,
            size=len(content),
        )
        return file_id
