"""Settings repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.settings import AppSetting


class SettingsRepository(Protocol):
    """Repository for key/value application settings."""

    def get(self, key: str) -> Optional[AppSetting]:
        ...

    def get_float(self, key: str, default: float = 0.0) -> float:
        ...

    def set(self, key: str, value: str, description: str | None = None) -> AppSetting:
        ...

    def delete(self, key: str) -> None:
        ...
