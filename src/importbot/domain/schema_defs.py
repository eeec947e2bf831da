from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

PARENT_ENTITY = "prospect"
CHILD_ENTITY = "contact"

IDENTIFYING_KEY = "nom"
IDENTIFYING_FIELD = f"{PARENT_ENTITY}.{IDENTIFYING_KEY}"

IDENTIFIER_KEY = "siret"
EMAIL_KEY = "email"

IGNORE = ""


@dataclass(frozen=True)
class FieldDef:
    path: str
    label: str


FIELDS: List[FieldDef] = [
    FieldDef(IGNORE, "(ignore)"),
    FieldDef("prospect.nom", "Prospect · Name *"),
    FieldDef("prospect.siret", "Prospect · SIRET"),
    FieldDef("prospect.metier", "Prospect · Trade"),
    FieldDef("prospect.statut", "Prospect · Status"),
    FieldDef("prospect.retour", "Prospect · Feedback"),
    FieldDef("prospect.email", "Prospect · Email"),
    FieldDef("prospect.telephone", "Prospect · Phone"),
    FieldDef("prospect.site_web", "Prospect · Website"),
    FieldDef("prospect.adresse", "Prospect · Address"),
    FieldDef("prospect.commentaire", "Prospect · Comment"),
    FieldDef("contact.nom", "Contact · Last name"),
    FieldDef("contact.prenom", "Contact · First name"),
    FieldDef("contact.email", "Contact · Email"),
    FieldDef("contact.telephone", "Contact · Phone"),
    FieldDef("contact.role_employe", "Contact · Role"),
]

FIELD_PATHS: frozenset[str] = frozenset(f.path for f in FIELDS)

# Ordered (pattern, field path) pairs, matched against normalized headers.
# First match wins.
DEFAULT_RULES: List[Tuple[str, str]] = [
    (r"nom|raison_sociale|entreprise", "prospect.nom"),
    (r"siret", "prospect.siret"),
    (r"metier|secteur|activite", "prospect.metier"),
    (r"statut", "prospect.statut"),
    (r"retour", "prospect.retour"),
    (r"email", "prospect.email"),
    (r"telephone|tel", "prospect.telephone"),
    (r"site_web|site|web", "prospect.site_web"),
    (r"adresse", "prospect.adresse"),
    (r"commentaire|notes", "prospect.commentaire"),
    (r"contact_nom|nom_contact", "contact.nom"),
    (r"contact_prenom|prenom_contact", "contact.prenom"),
    (r"contact_email", "contact.email"),
    (r"contact_tel|contact_telephone", "contact.telephone"),
    (r"contact_role|fonction|poste", "contact.role_employe"),
]


def label_for(path: str) -> str:
    for f in FIELDS:
        if f.path == path:
            return f.label
    return path
