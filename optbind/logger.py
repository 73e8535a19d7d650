# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Optbind."""
import logging

logger: logging.Logger = logging.getLogger("optbind")
