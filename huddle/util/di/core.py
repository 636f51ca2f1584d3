"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from huddle.config import (
    ActivitySettings,
    AuthSettings,
    ProfileSettings,
    Settings,
)
from huddle.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_activity_settings(self, settings: Settings) -> ActivitySettings:
        """Provide activity defaults."""
        return settings.activity

    @provide(scope=Scope.APP)
    def provide_profile_settings(self, settings: Settings) -> ProfileSettings:
        """Provide profile settings."""
        return settings.profile
