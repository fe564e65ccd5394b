"""Catalogues statiques des prestations et des véhicules."""
