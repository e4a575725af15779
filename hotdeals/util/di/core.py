"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from hotdeals.config import LedgerSettings, Settings
from hotdeals.util.di.base import ProviderBase
from hotdeals.util.locking import KeyedLocks


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_ledger_settings(self, settings: Settings) -> LedgerSettings:
        """Provide ledger settings."""
        return settings.ledger

    @provide(scope=Scope.APP)
    def provide_locks(self, ledger_settings: LedgerSettings) -> KeyedLocks:
        """Provide the process-wide lock registry."""
        return KeyedLocks(default_timeout=ledger_settings.lock_timeout_seconds)
