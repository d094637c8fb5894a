"""
Chefsito - Cook with what you have.

Services:
- Ranking: order recipes by how well they use the ingredients on hand
- Cache: expiring local cache for recipe API responses
- Chat: turn spoken/typed phrases into ingredient lists
- Clients: recipe search, vision scanning, grocery handoff
"""

__version__ = "1.0.0"
