"""
Module Core - Composants principaux du suivi d'inventaire

Ce module contient les fonctionnalités de base :
- Configuration
- Logging
- Types d'enregistrements et persistance fichier
- Recherche et export
"""
