"""Application layer: ports and use-case services.

May import from the domain layer only.
"""
