# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Safe filesystem operations for the release tools.

Every file these tools rewrite (CHANGELOG.md, SDK generator configs) is
committed straight back by CI, so a half-written file is worse than no write
at all. Writes go to a temporary file in the target's directory and are then
renamed over the target. Rename on the same filesystem is atomic on POSIX.
"""

import tempfile
from pathlib import Path

TEMP_PREFIX: str = ".sdkrelease_tmp_"


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write content to a file atomically.

    The content lands in a temp file next to the target, which is then renamed
    onto the target path. If anything fails along the way the target is left
    untouched and the temp file is removed.

    Args:
        target_path: Where the final file should end up.
        content: The string content to write.
        encoding: Text encoding to use.

    Raises:
        OSError: If the write or rename fails.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    # delete=False so the file survives close() and can be renamed.
    temp_fd = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        newline="",
        dir=str(target_path.parent),
        prefix=TEMP_PREFIX,
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        temp_fd.write(content)
        temp_fd.flush()
        temp_fd.close()
        temp_path.replace(target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise


def safe_read(file_path: Path, encoding: str = "utf-8") -> str:
    """
    Read a text file with proper error context.

    Args:
        file_path: Path to the file to read.
        encoding: Text encoding, defaults to UTF-8.

    Returns:
        The file contents as a string.

    Raises:
        FileNotFoundError: If the path doesn't exist.
        IsADirectoryError: If the path is a directory.
        OSError: For other I/O errors.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Expected a file, got a directory: {file_path}")
    return file_path.read_text(encoding=encoding)
