"""Centralized branding constants: single source of truth for version and URLs."""


class AppBranding:
    """Application identity constants."""

    APP_NAME = "KeyStore Explorer"
    PUBLISHER = "KeyStore Explorer"
    VERSION = "5.6.0"

    # Plain-text file holding the latest released version, e.g. "5.6.0\n"
    LATEST_VERSION_URL = "https://keystore-explorer.org/downloads/latest.txt"
    DOWNLOADS_URL = "https://keystore-explorer.org/downloads.html"

    @classmethod
    def window_title(cls) -> str:
        return f"{cls.APP_NAME} {cls.VERSION}"

    @classmethod
    def user_agent(cls) -> str:
        return f"KeyStoreExplorer/{cls.VERSION}"
