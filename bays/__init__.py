"""Bay expansion and location codes."""

from .generator import Bay, count_bays, generate_bays, location_code

__all__ = ['Bay', 'count_bays', 'generate_bays', 'location_code']
