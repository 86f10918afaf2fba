# stylish_mapped/utils/file_utils.py

"""
Filesystem helpers for stylish-mapped.

The resolver only needs two synchronous operations, "does this path exist"
and "read this file as text". They are exposed both as plain functions and
through `LocalFileSystem`, the object the resolver holds, so tests can swap
in a counting or in-memory implementation.
"""

import os


def path_exists(path: str) -> bool:
    """
    Return True if `path` points to an existing regular file.

    :param path: File path to check
    """
    return os.path.isfile(path)


def read_text_file(path: str, encoding: str = "utf-8") -> str:
    """
    Read and return the entire contents of a text file.

    Raises FileNotFoundError if the file does not exist.

    :param path: Path to the text file
    :param encoding: Encoding to use (default: utf-8)
    :return: File contents as a single string
    """
    with open(path, mode="r", encoding=encoding) as f:
        return f.read()


def write_text_file(path: str, content: str, encoding: str = "utf-8") -> None:
    """
    Write the given content to a text file, creating parent directories if needed.

    :param path: Path to the output text file
    :param content: String content to write
    :param encoding: Encoding to use (default: utf-8)
    """
    directory = os.path.dirname(path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)
    with open(path, mode="w", encoding=encoding) as f:
        f.write(content)


class LocalFileSystem:
    """Filesystem collaborator backed by the local disk."""

    def exists(self, path: str) -> bool:
        return path_exists(path)

    def read_text(self, path: str) -> str:
        return read_text_file(path)
