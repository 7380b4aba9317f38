"""Storage layer: CRUD per entity plus the search and hierarchy read models.

Repositories are bound to an explicit SQLAlchemy session. Inside a request
use ``get_storage()``; elsewhere build ``Storage(session)`` directly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import pydantic
from sqlalchemy import select, func, distinct
from sqlalchemy.orm import Session, selectinload

from .errors import ValidationError
from .extensions import db, utcnow
from .models import Campaign, AdGroup, Ad, Program
from .schemas import (
    CampaignCreate,
    CampaignPatch,
    AdGroupCreate,
    AdGroupPatch,
    AdCreate,
    AdPatch,
    ProgramCreate,
    ProgramPatch,
    CampaignSearchFilters,
)

logger = logging.getLogger(__name__)


def _validate(schema: type[pydantic.BaseModel], data: Any) -> pydantic.BaseModel:
    if not isinstance(data, Mapping):
        raise ValidationError.for_field("body", "Expected a JSON object")
    try:
        return schema.model_validate(dict(data))
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e


@dataclass
class CampaignSearchResult:
    campaign: Campaign
    grupo_count: int
    anuncio_count: int


class _Repository:
    """Generic list/get/create/update/delete over one mapped class."""

    model: type = None
    create_schema: type[pydantic.BaseModel] = None
    patch_schema: type[pydantic.BaseModel] = None

    def __init__(self, session: Session):
        self.session = session

    def list(self) -> list:
        stmt = select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
        return self.session.execute(stmt).scalars().all()

    def get(self, obj_id: int):
        return self.session.get(self.model, obj_id)

    def create(self, data: Mapping[str, Any]):
        values = _validate(self.create_schema, data).model_dump()
        self._check_references(values)
        now = utcnow()
        obj = self.model(**values, created_at=now, updated_at=now)
        self.session.add(obj)
        self.session.commit()
        logger.info("Created %s id=%s", self.model.__name__, obj.id)
        return obj

    def update(self, obj_id: int, data: Mapping[str, Any]):
        changes = _validate(self.patch_schema, data).model_dump(exclude_unset=True)
        obj = self.get(obj_id)
        if obj is None:
            return None
        self._check_references(changes)
        for key, value in changes.items():
            setattr(obj, key, value)
        obj.updated_at = utcnow()
        self.session.commit()
        logger.info("Updated %s id=%s fields=%s", self.model.__name__, obj_id, sorted(changes))
        return obj

    def delete(self, obj_id: int) -> bool:
        obj = self.get(obj_id)
        if obj is None:
            return False
        self.session.delete(obj)
        self.session.commit()
        logger.info("Deleted %s id=%s", self.model.__name__, obj_id)
        return True

    def _check_references(self, values: Mapping[str, Any]) -> None:
        pass


class CampaignRepository(_Repository):
    model = Campaign
    create_schema = CampaignCreate
    patch_schema = CampaignPatch

    def search(self, filters: Optional[Mapping[str, Any]] = None) -> list[CampaignSearchResult]:
        """Filter campaigns and attach ad group / ad counts.

        Substring filters compare lower-cased text in Python so accented
        characters match regardless of case, which SQLite's LIKE does not do.
        """
        criteria = _validate(CampaignSearchFilters, filters or {}).active()

        campaigns = self.list()
        if "nombre_campania" in criteria:
            needle = criteria["nombre_campania"].lower()
            campaigns = [c for c in campaigns if needle in (c.nombre_campania or "").lower()]
        if "medio" in criteria:
            campaigns = [c for c in campaigns if c.medio == criteria["medio"]]
        if "programa_interes" in criteria:
            needle = criteria["programa_interes"].lower()
            campaigns = [c for c in campaigns if needle in (c.programa_interes or "").lower()]
        if "facultad" in criteria:
            campaigns = [c for c in campaigns if c.facultad == criteria["facultad"]]
        if "tipo_campana" in criteria:
            campaigns = [c for c in campaigns if c.tipo_campana == criteria["tipo_campana"]]

        if not campaigns:
            return []
        counts = self._hierarchy_counts()
        return [
            CampaignSearchResult(c, *counts.get(c.id, (0, 0)))
            for c in campaigns
        ]

    def _hierarchy_counts(self) -> dict[int, tuple[int, int]]:
        """campaign_id -> (ad group count, ad count) for every campaign with groups.

        One grouped query with no per-campaign bound parameters.
        """
        stmt = (
            select(
                AdGroup.campaign_id,
                func.count(distinct(AdGroup.id)),
                func.count(Ad.id),
            )
            .select_from(AdGroup)
            .outerjoin(Ad, Ad.ad_group_id == AdGroup.id)
            .group_by(AdGroup.campaign_id)
        )
        return {
            campaign_id: (int(groups), int(ads))
            for campaign_id, groups, ads in self.session.execute(stmt).all()
        }

    def complete_hierarchy(self) -> list[Campaign]:
        """Every campaign with ``ad_groups`` and their ``ads`` loaded.

        Child ordering (numero_grupo ascending) comes from the relationships.
        """
        stmt = (
            select(Campaign)
            .options(selectinload(Campaign.ad_groups).selectinload(AdGroup.ads))
            .order_by(Campaign.created_at.desc(), Campaign.id.desc())
        )
        return self.session.execute(stmt).scalars().all()


class AdGroupRepository(_Repository):
    model = AdGroup
    create_schema = AdGroupCreate
    patch_schema = AdGroupPatch

    def list_by_campaign(self, campaign_id: int) -> list[AdGroup]:
        stmt = (
            select(AdGroup)
            .where(AdGroup.campaign_id == campaign_id)
            .order_by(AdGroup.numero_grupo, AdGroup.id)
        )
        return self.session.execute(stmt).scalars().all()

    def _check_references(self, values):
        if "campaign_id" in values and self.session.get(Campaign, values["campaign_id"]) is None:
            raise ValidationError.for_field("campaign_id", "Campaign does not exist")


class AdRepository(_Repository):
    model = Ad
    create_schema = AdCreate
    patch_schema = AdPatch

    def list_by_ad_group(self, ad_group_id: int) -> list[Ad]:
        stmt = (
            select(Ad)
            .where(Ad.ad_group_id == ad_group_id)
            .order_by(Ad.numero_grupo, Ad.id)
        )
        return self.session.execute(stmt).scalars().all()

    def _check_references(self, values):
        if "ad_group_id" in values and self.session.get(AdGroup, values["ad_group_id"]) is None:
            raise ValidationError.for_field("ad_group_id", "Ad group does not exist")


class ProgramRepository(_Repository):
    model = Program
    create_schema = ProgramCreate
    patch_schema = ProgramPatch


class Storage:
    """All repositories sharing one session."""

    def __init__(self, session: Session):
        self.session = session
        self.campaigns = CampaignRepository(session)
        self.ad_groups = AdGroupRepository(session)
        self.ads = AdRepository(session)
        self.programs = ProgramRepository(session)

    # Convenience aliases for the two composed reads
    def search_campaigns(self, filters: Optional[Mapping[str, Any]] = None) -> list[CampaignSearchResult]:
        return self.campaigns.search(filters)

    def get_complete_hierarchy(self) -> list[Campaign]:
        return self.campaigns.complete_hierarchy()


def get_storage() -> Storage:
    """Storage bound to the current request's Flask-SQLAlchemy session."""
    return Storage(db.session)
