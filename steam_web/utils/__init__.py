"""
Utility Functions and Classes
"""

from steam_web.utils.data_exporter import DataExporter
from steam_web.utils.logging_config import setup_logging

__all__ = ['DataExporter', 'setup_logging']
