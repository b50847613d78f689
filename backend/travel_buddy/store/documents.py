"""Upload directory holding itinerary source documents."""

import logging
import stat
from pathlib import Path

from backend.travel_buddy.errors import PurgeError

logger = logging.getLogger(__name__)


class DocumentStore:
    """Flat directory of uploaded files.

    Only regular files directly inside ``upload_dir`` belong to the store;
    subdirectories are left alone.
    """

    def __init__(self, upload_dir: Path | str) -> None:
        self.upload_dir = Path(upload_dir)

    def exists(self) -> bool:
        return self.upload_dir.exists()

    def list_files(self) -> list[str]:
        """Names of regular files in the store, sorted. Empty if the directory is missing."""
        if not self.upload_dir.is_dir():
            return []
        return sorted(path.name for path in self.upload_dir.iterdir() if path.is_file())

    def purge(self) -> int:
        """Delete every regular file in the store.

        A missing directory counts as already empty. The first failure aborts
        the purge; files deleted before it stay deleted.

        Returns:
            Number of files deleted

        Raises:
            PurgeError: If checking the directory, listing, stat or unlink fails
        """
        try:
            self.upload_dir.stat()
        except FileNotFoundError:
            logger.debug("Upload directory %s missing, nothing to purge", self.upload_dir)
            return 0
        except OSError as e:
            raise PurgeError(self.upload_dir, e) from e

        try:
            entries = sorted(self.upload_dir.iterdir())
        except OSError as e:
            raise PurgeError(self.upload_dir, e) from e

        deleted = 0
        for path in entries:
            try:
                if stat.S_ISREG(path.stat().st_mode):
                    path.unlink()
                    deleted += 1
            except OSError as e:
                raise PurgeError(path, e) from e

        return deleted
