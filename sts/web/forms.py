"""
Description des pages par type d'enregistrement et lecture des formulaires

Les deux types (spindle, yedek) partagent les mêmes routes et les mêmes
gabarits ; seuls les champs, libellés et valeurs par défaut changent.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple, Type

from ..core.records import Record, SpindleRecord, YedekRecord


DATE_FORMAT = '%d.%m.%Y'
DATE_PLACEHOLDER = 'gg-aa-yyyy'


def today() -> str:
    """Date du jour au format court turc (jj.mm.aaaa)"""
    return datetime.now().strftime(DATE_FORMAT)


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    required: bool = False
    # Pré-rempli avec la date du jour à l'ajout
    date: bool = False
    choices: Tuple[str, ...] = ()
    # Valeur enregistrée quand le champ est soumis vide
    fallback: str = ''


@dataclass(frozen=True)
class RecordKind:
    """
    Description d'un type pour l'interface web

    name sert de préfixe d'URL et de préfixe des noms de routes Flask.
    """
    name: str
    record_class: Type[Record]
    title: str
    add_title: str
    edit_title: str
    fields: Tuple[FormField, ...]
    columns: Tuple[Tuple[str, str], ...]


SPINDLE_KIND = RecordKind(
    name='spindles',
    record_class=SpindleRecord,
    title='Spindle Takip Sistemi',
    add_title='Spindle Ekle',
    edit_title='Spindle Düzenle',
    fields=(
        FormField('reference_id', 'Referans ID', required=True),
        FormField('operating_hours', 'Çalışma Saati'),
        FormField('machine', 'Takılı Olduğu Makine'),
        FormField('installed_on', 'Makinaya Takıldığı Tarih', date=True),
    ),
    columns=(
        ('id', 'ID'),
        ('reference_id', 'Referans ID'),
        ('operating_hours', 'Çalışma Saati'),
        ('machine', 'Takılı Olduğu Makine'),
        ('installed_on', 'Makinaya Takıldığı Tarih'),
        ('last_updated', 'Son Güncelleme'),
    ),
)

YEDEK_KIND = RecordKind(
    name='yedeks',
    record_class=YedekRecord,
    title='Yedek Takip Sistemi',
    add_title='Yedek Ekle',
    edit_title='Yedek Düzenle',
    fields=(
        FormField('reference_id', 'Referans ID', required=True),
        FormField('description', 'Açıklama'),
        FormField('in_repair', 'Tamirde mi', choices=('Evet', 'Hayır'), fallback='Hayır'),
        FormField('sent_to_repair_on', 'Bakıma Gönderilme', date=True),
        FormField('returned_on', 'Geri Dönme', date=True),
        FormField('removed_from', 'Söküldüğü Makine'),
        FormField('removed_on', 'Sökülme Tarihi', date=True),
    ),
    columns=(
        ('id', 'ID'),
        ('reference_id', 'Referans ID'),
        ('description', 'Açıklama'),
        ('in_repair', 'Tamirde mi'),
        ('sent_to_repair_on', 'Bakıma Gönderilme'),
        ('returned_on', 'Geri Dönme'),
        ('removed_from', 'Söküldüğü Makine'),
        ('removed_on', 'Sökülme Tarihi'),
        ('last_updated', 'Son Güncelleme'),
    ),
)

KINDS = (SPINDLE_KIND, YEDEK_KIND)


def missing_required(kind: RecordKind, form: Mapping[str, str]) -> List[str]:
    """Libellés des champs obligatoires soumis vides"""
    return [f.label for f in kind.fields if f.required and not form.get(f.name)]


def read_form(kind: RecordKind, form: Mapping[str, str], adding: bool, date: str) -> Dict[str, str]:
    """
    Construit les valeurs à enregistrer depuis un formulaire soumis

    Un champ vide prend sa valeur de repli ; à l'ajout, les champs de date
    vides prennent la date du jour. 'last_updated' vaut toujours la date
    du jour.

    Args:
        kind: Type d'enregistrement
        form: Données du formulaire
        adding: True pour un ajout, False pour une modification
        date: Date du jour formatée

    Returns:
        dict: Valeurs indexées par nom d'attribut
    """
    values = {}
    for f in kind.fields:
        value = form.get(f.name, '')
        if not value:
            value = date if (adding and f.date) else f.fallback
        values[f.name] = value
    values['last_updated'] = date
    return values


def form_values(kind: RecordKind, record: Optional[Record], date: str) -> Dict[str, str]:
    """Valeurs affichées dans le formulaire (enregistrement existant ou défauts d'ajout)"""
    if record is not None:
        return record.as_dict()
    return {f.name: date if f.date else f.fallback for f in kind.fields}
