from __future__ import annotations

from .models import Campaign, AdGroup, Ad, Program, PROGRAM_IMPORT_COLUMNS

CAMPAIGN_FIELDS = [
    "id",
    "nombre_campania",
    "medio",
    "programa_interes",
    "tipo_campana",
    "facultad",
    "linea",
    "modalidad_estudio",
    "lista_pardot",
    "url_programa",
    "nomenclatura_programa",
    "nomenclatura_modalidad",
    "nomenclatura_linea",
    "nomenclatura_tipo_campana",
    "nomenclatura_modalidad3",
    "nombre_sf",
]

AD_GROUP_FIELDS = [
    "id",
    "campaign_id",
    "nombre_grupo",
    "numero_grupo",
    "fsa",
    "cohorte",
    "tipo_publico",
    "nomenclatura_pardot",
]

AD_FIELDS = [
    "id",
    "ad_group_id",
    "nombre_anuncio",
    "tipo_anuncio",
    "numero_grupo",
    "nomenclatura_pardot",
]

PROGRAM_FIELDS = ["id", *PROGRAM_IMPORT_COLUMNS]


def _row(obj, fields):
    out = {f: getattr(obj, f) for f in fields}
    out["created_at"] = obj.created_at.isoformat() if obj.created_at else None
    out["updated_at"] = obj.updated_at.isoformat() if obj.updated_at else None
    return out


def serialize_campaign(c: Campaign, with_hierarchy: bool = False):
    data = _row(c, CAMPAIGN_FIELDS)
    if with_hierarchy:
        data["adGroups"] = [serialize_ad_group(g, with_ads=True) for g in c.ad_groups]
    return data


def serialize_ad_group(g: AdGroup, with_ads: bool = False):
    data = _row(g, AD_GROUP_FIELDS)
    if with_ads:
        data["ads"] = [serialize_ad(a) for a in g.ads]
    return data


def serialize_ad(a: Ad):
    return _row(a, AD_FIELDS)


def serialize_program(p: Program):
    return _row(p, PROGRAM_FIELDS)


def serialize_search_result(r):
    data = serialize_campaign(r.campaign)
    data["grupo_count"] = r.grupo_count
    data["anuncio_count"] = r.anuncio_count
    return data
