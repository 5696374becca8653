"""uid -> user name mapping loaded once from the system user database."""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping

logger = logging.getLogger(__name__)


class UserNameCache:
    """
    Read-only mapping from uid to user name.

    Loaded from a passwd-format file at construction and never refreshed,
    so it can be shared between worker threads without locking.
    """

    def __init__(self, mapping: Mapping[int, str]):
        self._uid_to_user: Mapping[int, str] = MappingProxyType(dict(mapping))

    @classmethod
    def load(cls, passwd_path: Path = Path("/etc/passwd")) -> "UserNameCache":
        """
        Load `name:x:uid:...` entries from a passwd-format file.

        A missing or unreadable file yields an empty cache, in which case
        every uid resolves to its numeric form.
        """
        mapping: Dict[int, str] = {}
        try:
            with open(passwd_path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    line = line.rstrip("\n")
                    if not line or line.startswith("#"):
                        continue
                    parts = line.split(":")
                    if len(parts) >= 3 and parts[2].isascii() and parts[2].isdigit():
                        mapping[int(parts[2])] = parts[0]
        except OSError as e:
            logger.warning(f"User database {passwd_path} unavailable, uids stay numeric: {e}")

        logger.info(f"Loaded {len(mapping)} user names from {passwd_path}")
        return cls(mapping)

    def resolve(self, uid: int) -> str:
        return self._uid_to_user.get(uid, str(uid))

    def __len__(self) -> int:
        return len(self._uid_to_user)
