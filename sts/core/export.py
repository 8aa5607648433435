"""
Export combiné des spindles et des yedeks

Le fichier produit est destiné à être ouvert dans un tableur : une section
étiquetée par type, sans colonne d'identifiant.
"""

from typing import Iterable, Sequence, Tuple

from .records import SpindleRecord, YedekRecord
from .store import DELIMITER, sanitize


EXPORT_FILENAME = 'takip_export.csv'

# (libellé exporté, attribut)
SPINDLE_EXPORT_COLUMNS = (
    ('Referans ID', 'reference_id'),
    ('Saat', 'operating_hours'),
    ('Takılı Olduğu Makine', 'machine'),
    ('Takıldığı Tarih', 'installed_on'),
    ('Son Güncelleme', 'last_updated'),
)

YEDEK_EXPORT_COLUMNS = (
    ('Referans ID', 'reference_id'),
    ('Açıklama', 'description'),
    ('Tamirde', 'in_repair'),
    ('Gönderildi', 'sent_to_repair_on'),
    ('Dönen', 'returned_on'),
    ('Söküldüğü Makine', 'removed_from'),
    ('Sökülme Tarihi', 'removed_on'),
    ('Son Güncelleme', 'last_updated'),
)


def _section(title: str, columns: Sequence[Tuple[str, str]], records: Iterable) -> str:
    header = DELIMITER.join(label for label, _ in columns)
    lines = [
        DELIMITER.join(sanitize(getattr(record, attribute)) for _, attribute in columns)
        for record in records
    ]
    return f"--- {title} ---\n{header}\n" + '\n'.join(lines)


def build_export(spindles: Iterable[SpindleRecord], yedeks: Iterable[YedekRecord]) -> str:
    """
    Construit le texte de l'export combiné

    Args:
        spindles: Enregistrements du store des spindles
        yedeks: Enregistrements du store des yedeks

    Returns:
        str: Contenu de l'export (sans saut de ligne final)
    """
    return (
        _section('Spindle Takip', SPINDLE_EXPORT_COLUMNS, spindles)
        + '\n\n'
        + _section('Yedek Takip', YEDEK_EXPORT_COLUMNS, yedeks)
    )
