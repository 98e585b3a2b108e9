"""Version of the flagparse package, also reported by ``flagparse --version``."""

__version__ = "1.0.0"

__version_display__ = f"flagparse v{__version__}"
