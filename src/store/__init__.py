"""Storage and query layer.

This module persists JSON collections and evaluates queries over them.
It powers the model layer and relationship resolution for the SDK.
"""
