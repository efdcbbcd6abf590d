from bob_config.observability.logging import JsonFormatter, TextFormatter, configure_logging

__all__ = ["JsonFormatter", "TextFormatter", "configure_logging"]
