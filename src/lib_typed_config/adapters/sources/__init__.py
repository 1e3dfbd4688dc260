"""Configuration sources backing :class:`lib_typed_config.core.TypedConfig`."""
