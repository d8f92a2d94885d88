"""Collaborators of the cart: inventory client, notification sinks, money helpers."""
