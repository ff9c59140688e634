import logging

LOG_FORMAT = "[%(asctime)s{prefix}] %(levelname)s %(name)s: %(message)s"

_LOGGER_CONFIGURED = False


def configure_logger(prefix: str = "", level=logging.INFO):
    """Set up root logging once; `forwarding.*` loggers show up by module name."""
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    _LOGGER_CONFIGURED = True

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT.format(prefix=prefix),
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
