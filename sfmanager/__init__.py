"""sfmanager: dual-pane terminal file manager."""

__version__ = "0.4.0"
