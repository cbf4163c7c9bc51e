# movies_backend/utils/messages.py
import json
import logging
import os
import re
from pathlib import Path

from fastapi import Request

logger = logging.getLogger("movies_backend.messages")

PLACEHOLDER = re.compile(r"\{(\w+)\}")


class MessageCatalog:
    """
    User-facing strings loaded from a nested JSON file.
    Keys are dotted paths, e.g. "errors.auth.invalidCredentials".
    Reloading is explicit: call reload() or reload_if_modified().
    """

    def __init__(self, path):
        self.path = Path(path)
        self._messages = {}
        self._mtime = None
        self.reload()

    def reload(self) -> bool:
        """Re-read the file. Keeps the previous table if the file can't be read or parsed."""
        try:
            mtime = os.stat(self.path).st_mtime
            with open(self.path, encoding="utf-8") as fh:
                messages = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading messages from {self.path}: {e}")
            return False
        if not isinstance(messages, dict):
            logger.error(f"Messages file {self.path} must contain a JSON object")
            return False
        self._messages = messages
        self._mtime = mtime
        logger.info(f"Messages loaded from {self.path}")
        return True

    def reload_if_modified(self) -> bool:
        try:
            mtime = os.stat(self.path).st_mtime
        except OSError as e:
            logger.error(f"Cannot stat messages file {self.path}: {e}")
            return False
        if mtime == self._mtime:
            return False
        return self.reload()

    def get(self, key: str, **params) -> str:
        node = self._messages
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return f"Message not found: {key}"
            node = node[part]
        if not isinstance(node, str):
            return f"Message not found: {key}"
        if params:
            return PLACEHOLDER.sub(lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0), node)
        return node


def get_messages(request: Request) -> MessageCatalog:
    return request.app.state.messages
