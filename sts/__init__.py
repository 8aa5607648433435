"""
STS - Spindle Takip Sistemi

Ce module principal fournit un petit suivi d'inventaire web pour les spindles
et les pièces de rechange (yedek), enregistrés dans des fichiers texte
délimités par des virgules.

Author: STS Team
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "STS Team"

# Imports principaux pour faciliter l'utilisation
from .core.config import TrackerConfig
from .core.logger import TrackerLogger
from .core.store import RecordStore

__all__ = ['TrackerConfig', 'TrackerLogger', 'RecordStore']
