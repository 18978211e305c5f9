"""
Persistence adapters.

Services depend on MovieRepository rather than opening sessions themselves.
"""
