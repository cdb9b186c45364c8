from .i18n import i18n_resolve, available_langs, reload_cache

__all__ = ["i18n_resolve", "available_langs", "reload_cache"]
