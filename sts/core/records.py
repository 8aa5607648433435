"""
Types d'enregistrements de l'inventaire

Chaque type déclare ses champs dans l'ordre exact des colonnes du fichier.
Le libellé de colonne utilisé sur disque est porté par les métadonnées du
champ (voir column()), ce qui fixe la table d'en-tête de chaque type.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping


def column(header: str, default: str = ''):
    """Déclare un champ texte avec son libellé de colonne sur disque"""
    return field(default=default, metadata={'header': header})


@dataclass
class Record:
    """
    Enregistrement de base : un identifiant synthétique suivi des champs
    propres au type, tous des chaînes.
    """
    id: str = column('id')

    @classmethod
    def attributes(cls) -> List[str]:
        """Noms d'attributs dans l'ordre des colonnes"""
        return [f.name for f in fields(cls)]

    @classmethod
    def headers(cls) -> List[str]:
        """Libellés de colonnes dans l'ordre du fichier"""
        return [f.metadata.get('header', f.name) for f in fields(cls)]

    @classmethod
    def check_fields(cls, values: Mapping[str, Any]) -> Dict[str, str]:
        """
        Vérifie les noms de champs et convertit les valeurs en texte

        Args:
            values: Valeurs indexées par nom d'attribut

        Returns:
            dict: Valeurs converties (None devient une chaîne vide)

        Raises:
            ValueError: Si un nom de champ est inconnu pour ce type
        """
        unknown = sorted(set(values) - set(cls.attributes()))
        if unknown:
            raise ValueError(f"Champ(s) inconnu(s) pour {cls.__name__}: {', '.join(unknown)}")
        return {name: '' if value is None else str(value) for name, value in values.items()}

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> 'Record':
        """
        Construit un enregistrement à partir d'une ligne indexée par libellé

        Les colonnes absentes de la ligne sont lues comme chaînes vides.
        """
        return cls(**{
            f.name: row.get(f.metadata.get('header', f.name), '')
            for f in fields(cls)
        })

    def to_row(self) -> List[str]:
        """Valeurs dans l'ordre des colonnes"""
        return [getattr(self, name) for name in self.attributes()]

    def merged(self, partial: Mapping[str, Any]) -> 'Record':
        """
        Retourne une copie avec les champs de partial remplacés

        L'identifiant n'est jamais modifié.
        """
        changes = self.check_fields(partial)
        changes.pop('id', None)
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in self.attributes()}


@dataclass
class SpindleRecord(Record):
    """Spindle monté sur une machine"""
    reference_id: str = column('Referans ID')
    operating_hours: str = column('Çalışma Saati')
    machine: str = column('Takılı Olduğu Makine')
    installed_on: str = column('Makinaya Takıldığı Tarih')
    last_updated: str = column('Son Güncelleme')


@dataclass
class YedekRecord(Record):
    """Pièce de rechange, éventuellement en réparation"""
    reference_id: str = column('Referans ID')
    description: str = column('Açıklama')
    in_repair: str = column('Tamirde mi')
    sent_to_repair_on: str = column('Bakıma Gönderilme')
    returned_on: str = column('Geri Dönme')
    removed_from: str = column('Söküldüğü Makine')
    removed_on: str = column('Sökülme Tarihi')
    last_updated: str = column('Son Güncelleme')
