"""Config module - loads settings, opens the configured gateway lazily."""

_config = None
_gateway = None


def get_config():
    global _config
    if _config is None:
        from todocli.settings import load_config
        _config = load_config()
    return _config


def get_gateway():
    """Return the process-wide gateway, creating it on first access."""
    global _gateway
    if _gateway is None:
        from todostore.gateway import create_gateway
        _gateway = create_gateway(get_config())
    return _gateway


def reset():
    """Close the gateway and forget loaded settings."""
    global _config, _gateway
    if _gateway is not None:
        _gateway.close()
    _config = None
    _gateway = None


# Lazy proxy so `from todocli.config import config` works before settings are loaded
class _LazyConfig:
    def __getitem__(self, key):
        return get_config()[key]

    def __contains__(self, key):
        return key in get_config()

    def get(self, key, default=None):
        return get_config().get(key, default)


config = _LazyConfig()
