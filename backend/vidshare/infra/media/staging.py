"""Stage multipart request files on local disk before relaying them."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from werkzeug.datastructures import FileStorage, MultiDict
from werkzeug.utils import secure_filename

log = logging.getLogger(__name__)


def _first_file(files: MultiDict[str, FileStorage], field: str) -> FileStorage | None:
    for storage in files.getlist(field):
        if storage and storage.filename:
            return storage
    return None


@contextmanager
def stage_uploads(
    files: MultiDict[str, FileStorage],
    fields: Iterable[str],
    upload_dir: str | Path,
) -> Iterator[dict[str, Path | None]]:
    """
    Save the first file of each multipart ``field`` into ``upload_dir``.

    Yields a mapping ``field -> Path`` (``None`` when the field carried no
    file). Files the media relay did not consume are removed on exit.
    """
    target = Path(upload_dir)
    target.mkdir(parents=True, exist_ok=True)

    staged: dict[str, Path | None] = {}
    try:
        for field in fields:
            storage = _first_file(files, field)
            if storage is None:
                staged[field] = None
                continue
            name = secure_filename(storage.filename or "") or "upload"
            path = target / f"{uuid.uuid4().hex}-{name}"
            storage.save(path)
            staged[field] = path
        yield staged
    finally:
        for path in staged.values():
            if path is not None and path.exists():
                path.unlink(missing_ok=True)
                log.debug("media.staged_file_removed")
