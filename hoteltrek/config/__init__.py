from hoteltrek.config.settings import settings

__all__ = ["settings"]
