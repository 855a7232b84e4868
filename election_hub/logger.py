import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(app):
    """Attach a single console handler to the ``election_hub`` logger tree."""
    logger = logging.getLogger("election_hub")
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if not any(getattr(h, "_election_hub", False) for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        console._election_hub = True
        logger.addHandler(console)

    logger.propagate = False
    return logger
