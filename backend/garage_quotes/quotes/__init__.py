"""Modèle de devis, brouillon et construction."""
