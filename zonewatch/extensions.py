"""
Flask Extensions
"""

from zonewatch.storage import ZoneFileStore

# Flat-file backing store for /api/zones
zone_file_store = ZoneFileStore()
