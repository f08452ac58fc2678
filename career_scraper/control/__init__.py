"""Operator start/stop control."""

from career_scraper.control.keyboard import (
    KeyboardControl,
    install_signal_handlers,
    remove_signal_handlers,
)

__all__ = ["KeyboardControl", "install_signal_handlers", "remove_signal_handlers"]
