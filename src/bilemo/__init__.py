"""BileMo API.

Phone catalogue and client user management over HTTP, with a tagged
read-through cache for the paginated collections.
"""

__version__ = "0.1.0"
