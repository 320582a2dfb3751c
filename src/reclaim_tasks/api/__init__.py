"""
Reclaim API access.

Components:
- client.py: ReclaimClient (HTTP transport, payload mapping, time scheme cache)
- time_schemes.py: name/alias/UUID -> time scheme id resolution
"""
