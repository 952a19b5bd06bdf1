"""
Directory Module

Customer, vendor and inventory record shaping.
"""

from .records import ContactRecord, DirectoryError, InventoryRecord, blank_to_none

__all__ = [
    "ContactRecord",
    "DirectoryError",
    "InventoryRecord",
    "blank_to_none",
]
