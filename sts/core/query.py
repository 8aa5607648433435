"""
Recherche en mémoire sur les enregistrements lus depuis un store
"""

from typing import Iterable, List, Optional

from .records import Record


def filter_by_reference(records: Iterable[Record], query: Optional[str],
                        attribute: str = 'reference_id') -> List[Record]:
    """
    Filtre les enregistrements dont le champ contient la recherche

    La comparaison ignore la casse. Une recherche vide ou composée
    d'espaces retourne tous les enregistrements, dans leur ordre d'origine.

    Args:
        records: Enregistrements à filtrer
        query: Texte recherché
        attribute: Champ comparé (référence par défaut)

    Returns:
        list: Enregistrements retenus
    """
    needle = (query or '').strip().lower()
    if not needle:
        return list(records)
    return [
        record for record in records
        if needle in (getattr(record, attribute, '') or '').lower()
    ]
