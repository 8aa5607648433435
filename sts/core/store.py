"""
Module de persistance des enregistrements

Chaque RecordStore possède un fichier texte délimité par des virgules :
- Première ligne : en-tête (libellés de colonnes)
- Une ligne par enregistrement, valeurs dans l'ordre de l'en-tête

Chaque modification relit le fichier entier, calcule le nouvel état en mémoire
puis réécrit le fichier entier. Il n'y a ni verrou ni fichier temporaire :
deux modifications entrelacées peuvent perdre une mise à jour (la dernière
écriture gagne). C'est une limite connue de ce format.
"""

import logging
import re
from collections import namedtuple
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type

from .logger import get_logger
from .records import Record, SpindleRecord, YedekRecord


DELIMITER = ','

_LINE_BREAK = re.compile(r'\r?\n')
_UNSAFE = re.compile(r'\r\n|[\r\n,]')


def sanitize(value: Any) -> str:
    """
    Prépare une valeur pour l'écriture

    Le délimiteur et les sauts de ligne sont remplacés par un espace
    (conversion avec perte, pas d'échappement).
    """
    if value is None:
        return ''
    return _UNSAFE.sub(' ', str(value))


def parse_rows(raw: str) -> List[Dict[str, str]]:
    """
    Découpe le contenu d'un fichier en lignes indexées par libellé de colonne

    Args:
        raw: Contenu complet du fichier

    Returns:
        list: Une entrée par ligne de données (vide si le fichier est vide
        ou ne contient que l'en-tête)
    """
    lines = [line for line in _LINE_BREAK.split(raw) if line.strip()]
    if not lines:
        return []

    header = lines[0].split(DELIMITER)
    rows = []
    for line in lines[1:]:
        values = line.split(DELIMITER)
        rows.append({
            name: values[index] if index < len(values) else ''
            for index, name in enumerate(header)
        })
    return rows


def serialize(headers: List[str], rows: List[List[str]]) -> str:
    lines = [DELIMITER.join(headers)]
    lines.extend(DELIMITER.join(sanitize(value) for value in row) for row in rows)
    return '\n'.join(lines) + '\n'


def next_id(records: List[Record]) -> int:
    """Prochain identifiant : 1 + le plus grand identifiant numérique, ou 1"""
    ids = []
    for record in records:
        try:
            ids.append(int(record.id))
        except ValueError:
            continue
    return max(ids) + 1 if ids else 1


class RecordStore:
    """
    Collection persistante d'enregistrements d'un même type

    Les identifiants sont des chaînes décimales attribuées par add().
    Les erreurs d'entrée/sortie (OSError) sont remontées telles quelles.
    """

    def __init__(self, path, record_class: Type[Record], logger: Optional[logging.Logger] = None):
        """
        Initialise le store et crée le fichier (en-tête seul) s'il est absent

        Args:
            path: Chemin du fichier de données
            record_class: Type d'enregistrement stocké
            logger: Logger à utiliser (par défaut 'STS.store')
        """
        self.path = Path(path)
        self.record_class = record_class
        self.headers = record_class.headers()
        self.logger = logger or get_logger('STS.store')

        self.ensure_file()

    def ensure_file(self):
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._save([])
        self.logger.info(f"Fichier de données créé: {self.path}")

    def list(self) -> List[Record]:
        """
        Lit tous les enregistrements dans l'ordre du fichier

        Returns:
            list: Enregistrements (vide si aucune ligne de données)
        """
        raw = self.path.read_text(encoding='utf-8-sig')
        return [self.record_class.from_row(row) for row in parse_rows(raw)]

    def get(self, record_id) -> Optional[Record]:
        record_id = str(record_id)
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def add(self, values: Mapping[str, Any]) -> str:
        """
        Ajoute un enregistrement et réécrit le fichier

        Args:
            values: Valeurs indexées par nom d'attribut (un 'id' fourni est ignoré)

        Returns:
            str: Identifiant attribué
        """
        values = self.record_class.check_fields(values)
        values.pop('id', None)

        records = self.list()
        record_id = str(next_id(records))
        records.append(self.record_class(id=record_id, **values))
        self._save(records)

        self.logger.debug(f"{self.record_class.__name__} {record_id} ajouté dans {self.path.name}")
        return record_id

    def update(self, record_id, partial: Mapping[str, Any]) -> bool:
        """
        Remplace les champs fournis d'un enregistrement existant

        Args:
            record_id: Identifiant de l'enregistrement
            partial: Champs à remplacer (les autres sont conservés)

        Returns:
            bool: False si l'identifiant est absent (fichier inchangé)
        """
        self.record_class.check_fields(partial)
        record_id = str(record_id)

        records = self.list()
        for index, record in enumerate(records):
            if record.id == record_id:
                records[index] = record.merged(partial)
                self._save(records)
                self.logger.debug(f"{self.record_class.__name__} {record_id} mis à jour")
                return True

        self.logger.debug(f"Mise à jour ignorée, identifiant {record_id} introuvable")
        return False

    def delete(self, record_id) -> bool:
        """
        Supprime un enregistrement

        Returns:
            bool: False si aucun enregistrement ne correspond (fichier inchangé)
        """
        record_id = str(record_id)

        records = self.list()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            return False

        self._save(remaining)
        self.logger.debug(f"{self.record_class.__name__} {record_id} supprimé")
        return True

    def _save(self, records: List[Record]):
        content = serialize(self.headers, [record.to_row() for record in records])
        with open(self.path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)


StoreSet = namedtuple('StoreSet', ['spindles', 'yedeks'])


def open_stores(config, logger: Optional[logging.Logger] = None) -> StoreSet:
    """
    Ouvre les deux stores décrits par la configuration

    Args:
        config: Instance de TrackerConfig
        logger: Logger parent (un enfant 'store' en est dérivé)

    Returns:
        StoreSet: Store des spindles et store des yedeks
    """
    storage = config.get_storage_config()
    store_logger = logger.getChild('store') if logger else None
    return StoreSet(
        spindles=RecordStore(storage['spindle_path'], SpindleRecord, store_logger),
        yedeks=RecordStore(storage['yedek_path'], YedekRecord, store_logger)
    )
