"""Modèle de document et génération PDF des devis."""
