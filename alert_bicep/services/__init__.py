"""
Services package for the alert template API.

Contains data access that sits beside the pure compiler, such as loading
the form's selection lists from packaged JSON files.
"""

from alert_bicep.services.option_loader import clear_option_cache, load_options

__all__ = ["clear_option_cache", "load_options"]
