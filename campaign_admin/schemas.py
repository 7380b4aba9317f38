"""Input schemas for the JSON API.

Each entity has a ``*Create`` schema (used by POST) and a ``*Patch`` schema
(used by PUT). Patches declare every field optional and are applied with
``model_dump(exclude_unset=True)`` so only the keys the client sent are merged.
Required text fields may be left out of a patch but never blanked.
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

RequiredText = Annotated[str, Field(min_length=1)]


class _Schema(BaseModel):
    # Unknown keys (id, created_at, ...) are dropped, not rejected
    model_config = ConfigDict(extra="ignore")


# ---------------- Campaign ----------------

class _CampaignFields(_Schema):
    facultad: Optional[str] = None
    linea: Optional[str] = None
    modalidad_estudio: Optional[str] = None
    lista_pardot: Optional[str] = None
    url_programa: Optional[str] = None
    nomenclatura_programa: Optional[str] = None
    nomenclatura_modalidad: Optional[str] = None
    nomenclatura_linea: Optional[str] = None
    nomenclatura_tipo_campana: Optional[str] = None
    nomenclatura_modalidad3: Optional[str] = None
    nombre_sf: Optional[str] = None


class CampaignCreate(_CampaignFields):
    nombre_campania: RequiredText
    medio: RequiredText
    programa_interes: RequiredText
    tipo_campana: RequiredText


class CampaignPatch(_CampaignFields):
    nombre_campania: RequiredText = None
    medio: RequiredText = None
    programa_interes: RequiredText = None
    tipo_campana: RequiredText = None


# ---------------- Ad Group ----------------

class _AdGroupFields(_Schema):
    nombre_grupo: Optional[str] = None
    numero_grupo: Optional[int] = None
    fsa: Optional[str] = None
    cohorte: Optional[str] = None
    tipo_publico: Optional[str] = None
    nomenclatura_pardot: Optional[str] = None


class AdGroupCreate(_AdGroupFields):
    campaign_id: int


class AdGroupPatch(_AdGroupFields):
    campaign_id: int = None


# ---------------- Ad ----------------

class _AdFields(_Schema):
    nombre_anuncio: Optional[str] = None
    tipo_anuncio: Optional[str] = None
    numero_grupo: Optional[int] = None
    nomenclatura_pardot: Optional[str] = None


class AdCreate(_AdFields):
    ad_group_id: int


class AdPatch(_AdFields):
    ad_group_id: int = None


# ---------------- Program ----------------

class _ProgramFields(_Schema):
    nomenclatura_programa: Optional[str] = None
    linea_negocio: Optional[str] = None
    modalidad: Optional[str] = None
    facultad: Optional[str] = None
    nomenclatura_facultad: Optional[str] = None
    codigo_banner: Optional[str] = None
    lista_pardot: Optional[str] = None
    periodo: Optional[str] = None
    codigo_carrera: Optional[str] = None
    nombre_programa2: Optional[str] = None
    link_programa: Optional[str] = None
    pp1: Optional[str] = None
    pp1d: Optional[str] = None
    pp2: Optional[str] = None
    pp2d: Optional[str] = None
    pp3: Optional[str] = None
    pp3d: Optional[str] = None
    pp4: Optional[str] = None
    pp4d: Optional[str] = None


class ProgramCreate(_ProgramFields):
    nombre_programa: RequiredText


class ProgramPatch(_ProgramFields):
    nombre_programa: RequiredText = None


# ---------------- Search ----------------

class CampaignSearchFilters(_Schema):
    nombre_campania: Optional[str] = None    # case-insensitive substring
    medio: Optional[str] = None              # exact
    programa_interes: Optional[str] = None   # case-insensitive substring
    facultad: Optional[str] = None           # exact
    tipo_campana: Optional[str] = None       # exact

    def active(self) -> dict[str, str]:
        """Filters that were actually provided; empty strings count as unset."""
        return {k: v for k, v in self.model_dump().items() if v}
