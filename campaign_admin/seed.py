from __future__ import annotations

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from .models import Campaign, AdGroup, Ad

logger = logging.getLogger(__name__)


def seed_demo_data(session: Session) -> bool:
    """Insert the demo campaigns when the store is empty. Returns True if seeded."""
    count = session.execute(select(func.count()).select_from(Campaign)).scalar_one()
    if count:
        return False

    logger.info("Seeding database with demo data...")

    # Campaigns
    mba = Campaign(
        medio="Google Ads", programa_interes="MBA Ejecutivo", tipo_campana="Conversión",
        nombre_campania="MBA Ejecutivo 2024", facultad="Administración",
        modalidad_estudio="Presencial", linea="Postgrado", lista_pardot="LST-MBA-001",
        url_programa="https://universidad.edu/mba-ejecutivo", nombre_sf="MBA Ejecutivo SF",
    )
    ing = Campaign(
        medio="Facebook Ads", programa_interes="Ingeniería de Sistemas", tipo_campana="Reconocimiento",
        nombre_campania="Ingeniería de Sistemas Digital", facultad="Ingeniería",
        modalidad_estudio="Virtual", linea="Pregrado", lista_pardot="LST-ING-SIS-001",
        url_programa="https://universidad.edu/ingenieria-sistemas", nombre_sf="Ingeniería Sistemas SF",
    )
    der = Campaign(
        medio="LinkedIn Ads", programa_interes="Derecho Empresarial", tipo_campana="Conversión",
        nombre_campania="Derecho Corporativo Premium", facultad="Derecho",
        modalidad_estudio="Híbrida", linea="Especialización", lista_pardot="LST-DER-CORP-001",
        url_programa="https://universidad.edu/derecho-corporativo", nombre_sf="Derecho Empresarial SF",
    )
    session.add_all([mba, ing, der]); session.flush()

    # Ad groups
    g1 = AdGroup(campaign_id=mba.id, nombre_grupo="Ejecutivos Senior", numero_grupo=1,
                 fsa="FSA-EXE-001", cohorte="2024-Q1", tipo_publico="Ejecutivos C-Level")
    g2 = AdGroup(campaign_id=mba.id, nombre_grupo="Profesionales Mid-Level", numero_grupo=2,
                 fsa="FSA-PRO-002", cohorte="2024-Q2", tipo_publico="Profesionales 5-10 años")
    g3 = AdGroup(campaign_id=ing.id, nombre_grupo="Estudiantes Tecnología", numero_grupo=1,
                 fsa="FSA-TEC-003", cohorte="2024-SEM1", tipo_publico="Estudiantes 17-22 años")
    g4 = AdGroup(campaign_id=der.id, nombre_grupo="Abogados Corporativos", numero_grupo=1,
                 fsa="FSA-ABG-004", cohorte="2024-CORP", tipo_publico="Abogados 3+ años")
    session.add_all([g1, g2, g3, g4]); session.flush()

    # Ads
    session.add_all([
        Ad(ad_group_id=g1.id, nombre_anuncio="MBA para Líderes Corporativos", tipo_anuncio="Texto Expandido",
           nomenclatura_pardot="AD-MBA-LDR-001", numero_grupo=1),
        Ad(ad_group_id=g1.id, nombre_anuncio="Acelera tu Carrera Ejecutiva", tipo_anuncio="Display Responsivo",
           nomenclatura_pardot="AD-MBA-CAR-002", numero_grupo=1),
        Ad(ad_group_id=g2.id, nombre_anuncio="MBA para Profesionales", tipo_anuncio="Búsqueda",
           nomenclatura_pardot="AD-MBA-PRO-004", numero_grupo=2),
        Ad(ad_group_id=g3.id, nombre_anuncio="Futuro en Tecnología", tipo_anuncio="Imagen",
           nomenclatura_pardot="AD-ING-FUT-006", numero_grupo=1),
        Ad(ad_group_id=g3.id, nombre_anuncio="Programación y Desarrollo", tipo_anuncio="Carrusel",
           nomenclatura_pardot="AD-ING-PROG-007", numero_grupo=1),
        Ad(ad_group_id=g4.id, nombre_anuncio="Especialización Legal Corporativa", tipo_anuncio="Sponsored Content",
           nomenclatura_pardot="AD-DER-ESP-008", numero_grupo=1),
    ])

    session.commit()
    logger.info("Database seeded with demo data")
    return True
