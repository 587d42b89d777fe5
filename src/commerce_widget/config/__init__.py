from commerce_widget.config.settings import Settings  # noqa: F401
