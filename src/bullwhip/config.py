"""
Configuration Module
====================
Settings of the live session and the console scripts. The engine constants
(horizon, baseline demand, bullwhip sample floor) live in their modules.
"""

import logging
import os


class Config:
    """Configuration parameters for the bullwhip simulator"""
    def __init__(self):
        # Live mode
        self.history_window = 120
        self.initial_inventory = 60
        self.speed_ms = 250

        # Saved runs
        self.runs_dir = os.getenv("BULLWHIP_RUNS_DIR", "saved_runs")
        self.log_level = os.getenv("BULLWHIP_LOG_LEVEL", "WARNING")


# Global config instance
config = Config()


def configure_logging(level=None):
    """Attach a console handler to the package logger."""
    logger = logging.getLogger("bullwhip")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel((level or config.log_level).upper())
    return logger
