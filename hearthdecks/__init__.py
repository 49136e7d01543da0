"""Hearthstone deck code decoder, card lookups and deck statistics."""
