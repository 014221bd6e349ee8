"""Export operations for the activity store.

The export is a complete SQLite database image. Loading an image back is
left to the caller (sqlite3.Connection.deserialize or a plain file open).
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from focus_timer.store.core import ActivityStore

logger = logging.getLogger(__name__)


def export_data(store: ActivityStore) -> bytes:
    """Serialize the whole database.

    Args:
        store: The ActivityStore instance.

    Returns:
        The database image; a valid SQLite file when written to disk.
    """
    with store._reading() as conn:
        image = conn.serialize()
    logger.debug(f"Exported activity database ({len(image)} bytes)")
    return image


def export_to_file(store: ActivityStore, output_path: Path) -> int:
    """Write a database image to disk atomically.

    The image goes to a temporary file in the target directory first and is
    then renamed over output_path, so readers never see a partial file.

    Args:
        store: The ActivityStore instance.
        output_path: Destination file.

    Returns:
        Number of bytes written.
    """
    image = export_data(store)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(image)
        os.replace(tmp_name, output_path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Exported activity database to {output_path} ({len(image)} bytes)")
    return len(image)
