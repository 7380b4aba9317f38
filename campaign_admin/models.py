from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String,
    Text,
    Integer,
    ForeignKey,
    DateTime,
)

from .extensions import db, utcnow

# ---------------- Core Entities ----------------

class Campaign(db.Model):
    __tablename__ = "campaigns"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nombre_campania: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    medio: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    programa_interes: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tipo_campana: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    facultad: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    linea: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    modalidad_estudio: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    lista_pardot: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    url_programa: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Nomenclature fields used to build tracking names
    nomenclatura_programa: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nomenclatura_modalidad: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nomenclatura_linea: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nomenclatura_tipo_campana: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nomenclatura_modalidad3: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nombre_sf: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    ad_groups: Mapped[list["AdGroup"]] = relationship(
        back_populates="campaign",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [AdGroup.numero_grupo, AdGroup.id],
    )


class AdGroup(db.Model):
    __tablename__ = "ad_groups"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    campaign_id: Mapped[int] = mapped_column(
        ForeignKey("campaigns.id", ondelete="CASCADE"), index=True, nullable=False
    )
    nombre_grupo: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    numero_grupo: Mapped[Optional[int]] = mapped_column(Integer, index=True, nullable=True)
    fsa: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    cohorte: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tipo_publico: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nomenclatura_pardot: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    campaign: Mapped["Campaign"] = relationship(back_populates="ad_groups")
    ads: Mapped[list["Ad"]] = relationship(
        back_populates="ad_group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [Ad.numero_grupo, Ad.id],
    )


class Ad(db.Model):
    __tablename__ = "ads"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ad_group_id: Mapped[int] = mapped_column(
        ForeignKey("ad_groups.id", ondelete="CASCADE"), index=True, nullable=False
    )
    nombre_anuncio: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tipo_anuncio: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    numero_grupo: Mapped[Optional[int]] = mapped_column(Integer, index=True, nullable=True)
    nomenclatura_pardot: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    ad_group: Mapped["AdGroup"] = relationship(back_populates="ads")


# --- Reference data ---

class Program(db.Model):
    """Academic program catalogue. Campaigns copy the name, they do not link to it."""
    __tablename__ = "programs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nombre_programa: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nomenclatura_programa: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    linea_negocio: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    modalidad: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    facultad: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    nomenclatura_facultad: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    codigo_banner: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    lista_pardot: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    periodo: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    codigo_carrera: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nombre_programa2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    link_programa: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp1: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp1d: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp2: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp2d: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp3: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp3d: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp4: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pp4d: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )


# Column order of the programs spreadsheet (see importer.import_programs)
PROGRAM_IMPORT_COLUMNS = [
    "nombre_programa",
    "nomenclatura_programa",
    "linea_negocio",
    "modalidad",
    "facultad",
    "nomenclatura_facultad",
    "codigo_banner",
    "lista_pardot",
    "periodo",
    "codigo_carrera",
    "nombre_programa2",
    "link_programa",
    "pp1",
    "pp1d",
    "pp2",
    "pp2d",
    "pp3",
    "pp3d",
    "pp4",
    "pp4d",
]
