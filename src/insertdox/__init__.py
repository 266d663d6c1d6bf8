"""Insert Doxygen comment blocks into C sources."""

__version__ = "0.9.1"
