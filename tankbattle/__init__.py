"""A top-down tank battle arcade game on pygame: tanks, bullets, menus and the main loop."""

__version__ = "3.0.0"