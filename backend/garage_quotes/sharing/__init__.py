"""Composition des messages de partage et transport."""
