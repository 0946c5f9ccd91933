"""Provider API keys persisted as a flat JSON mapping."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .exceptions import ConfigUnreadable, ConfigWriteFailed


class CredentialStore:
    """In-memory view of the provider-name -> API-key file.

    The file is read once by `load` and written back in full by `persist`.
    Mutations through `set` stay in memory until persisted.
    """

    def __init__(self, path: Path, credentials: dict[str, str] | None = None) -> None:
        self.path = path
        self._credentials: dict[str, str] = dict(credentials or {})

    @classmethod
    def load(cls, path: Path) -> CredentialStore:
        """Read the store from disk; a missing file yields an empty store."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigUnreadable(f"Failed to open conf file {path}: {exc}") from exc

        if not text.strip():
            return cls(path)

        try:
            payload: Any = json.loads(text)
        except ValueError as exc:
            raise ConfigUnreadable(f"Conf file {path} is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise ConfigUnreadable(
                f"Conf file {path} must contain a JSON object, got {type(payload).__name__}."
            )
        for key, value in payload.items():
            if not isinstance(value, str):
                raise ConfigUnreadable(
                    f"Conf file {path} has a non-string value for provider '{key}'."
                )
        return cls(path, payload)

    def get(self, provider_name: str) -> str | None:
        return self._credentials.get(provider_name.strip())

    def set(self, provider_name: str, api_key: str) -> None:
        self._credentials[provider_name.strip()] = api_key.strip()

    def providers(self) -> list[str]:
        """Return configured provider names in sorted order."""
        return sorted(self._credentials)

    def persist(self) -> None:
        """Atomically replace the file with the current mapping."""
        directory = self.path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(self._credentials, fh, indent=2, sort_keys=True)
                fh.write("\n")
                fh.flush()
                os.fsync(fh.fileno())
            if os.name == "posix":
                os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise ConfigWriteFailed(f"Failed writing conf file {self.path}: {exc}") from exc

    def __len__(self) -> int:
        return len(self._credentials)

    def __contains__(self, provider_name: object) -> bool:
        return isinstance(provider_name, str) and provider_name.strip() in self._credentials
