"""Social API — minimal REST bootstrap: config, route table, handlers, record store."""

__version__ = "0.0.1"
