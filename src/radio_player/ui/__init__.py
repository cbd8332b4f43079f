"""
Textual player UI
"""

from .app import RadioPlayerApp
from .station_modal import StationFormModal

__all__ = ["RadioPlayerApp", "StationFormModal"]
